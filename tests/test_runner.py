import pandas as pd
import pytest

from name_screener.errors import FileUnavailable, InvalidInput
from name_screener.pipeline import ScreenerConfig
from name_screener.runner import screen_file, screen_names, validate


@pytest.fixture
def sources(tmp_path):
    blacklist = tmp_path / "blacklist.txt"
    blacklist.write_text("Smith, John\nJane Doe\n", encoding="utf-8")
    noise = tmp_path / "noise.txt"
    noise.write_text("Mr\nDr\n", encoding="utf-8")
    return blacklist, noise


def test_validate_returns_matches(sources):
    blacklist, noise = sources
    result = validate("Dr John Smith", blacklist, noise)
    assert result.ok
    assert result.normalized_name == "john smith"
    assert result.matches == ["Smith, John"]


def test_validate_reports_missing_file(sources, tmp_path):
    _, noise = sources
    result = validate("John Smith", tmp_path / "missing.txt", noise)
    assert not result.ok
    assert isinstance(result.error, FileUnavailable)
    assert result.matches == []


def test_validate_reports_blank_name(sources):
    blacklist, noise = sources
    result = validate("  ", blacklist, noise)
    assert isinstance(result.error, InvalidInput)
    assert result.matches == []


def test_validate_reports_blank_noise_path(sources):
    blacklist, _ = sources
    result = validate("John Smith", blacklist, "")
    assert isinstance(result.error, InvalidInput)


def test_screen_names_keeps_order_with_workers():
    names = ["Jane Doe", "John Smith", "", "Alice Brown"]
    results = screen_names(names, frozenset(), ("Smith, John", "Jane Doe"), ScreenerConfig(workers=3, use_tqdm=False))
    assert [result.name for result in results] == names
    assert [result.matches for result in results] == [["Jane Doe"], ["Smith, John"], [], []]
    assert isinstance(results[2].error, InvalidInput)


def test_screen_file_writes_annotated_csv(sources, tmp_path):
    blacklist, noise = sources
    input_path = tmp_path / "people.csv"
    pd.DataFrame({"name": ["Mr John Smith", "", "Alice Brown"]}).to_csv(input_path, index=False)
    output_path = tmp_path / "screened.csv"

    df = screen_file(input_path, output_path, blacklist, noise, ScreenerConfig(use_tqdm=False))

    assert df is not None
    assert output_path.exists()
    assert df["match_count"].tolist() == [1, 0, 0]
    assert df["is_match"].tolist() == [True, False, False]
    assert df["matches"].tolist()[0] == "Smith, John"
    assert df["error"].tolist()[1]
    written = pd.read_csv(output_path)
    assert len(written) == 3


def test_screen_file_missing_input(sources, tmp_path, capsys):
    blacklist, noise = sources
    result = screen_file(tmp_path / "missing.csv", tmp_path / "out.csv", blacklist, noise)
    assert result is None
    assert "ERROR" in capsys.readouterr().out


def test_screen_file_missing_column(sources, tmp_path, capsys):
    blacklist, noise = sources
    input_path = tmp_path / "people.csv"
    input_path.write_text("full_name\nJohn Smith\n", encoding="utf-8")
    result = screen_file(input_path, tmp_path / "out.csv", blacklist, noise)
    assert result is None
    assert "Column 'name' not found" in capsys.readouterr().out


def test_screen_file_missing_blacklist(sources, tmp_path, capsys):
    _, noise = sources
    input_path = tmp_path / "people.csv"
    input_path.write_text("name\nJohn Smith\n", encoding="utf-8")
    result = screen_file(input_path, tmp_path / "out.csv", tmp_path / "missing.txt", noise)
    assert result is None
    assert "ERROR" in capsys.readouterr().out


def test_validate_reads_xlsx_blacklist(sources, tmp_path):
    _, noise = sources
    blacklist = tmp_path / "blacklist.xlsx"
    pd.DataFrame({"name": ["Smith, John", "Jane Doe"]}).to_excel(blacklist, index=False)
    result = validate("John Smith", blacklist, noise)
    assert result.ok
    assert result.matches == ["Smith, John"]


def test_validate_reports_unreadable_xlsx(sources, tmp_path):
    _, noise = sources
    blacklist = tmp_path / "blacklist.xlsx"
    blacklist.write_text("Smith, John\n", encoding="utf-8")
    result = validate("John Smith", blacklist, noise)
    assert isinstance(result.error, FileUnavailable)
    assert result.matches == []


def test_screen_file_writes_xlsx(sources, tmp_path):
    blacklist, noise = sources
    input_path = tmp_path / "people.xlsx"
    pd.DataFrame({"name": ["John Smith", "Alice Brown"]}).to_excel(input_path, index=False)
    output_path = tmp_path / "screened.xlsx"

    df = screen_file(input_path, output_path, blacklist, noise, ScreenerConfig(use_tqdm=False))

    assert df is not None
    written = pd.read_excel(output_path)
    assert written["match_count"].tolist() == [1, 0]
    assert written["matches"].tolist()[0] == "Smith, John"

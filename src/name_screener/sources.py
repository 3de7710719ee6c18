"""Line sources for noise words and blacklists."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import FrozenSet, List, Tuple

import ftfy
import pandas as pd

from .errors import FileUnavailable, InvalidInput

logger = logging.getLogger(__name__)

TABLE_SUFFIXES = {".csv", ".xls", ".xlsx"}


def require_path(path: str | Path | None, label: str) -> Path:
    """Return `path` trimmed, raising :class:InvalidInput when it is blank."""

    raw = str(path or "").strip()
    if not raw:
        raise InvalidInput(f"{label} path empty but required")
    return Path(raw)


def read_lines(
    path: str | Path | None,
    column: str | None = None,
    fix_encoding: bool = False,
    label: str = "Source",
) -> List[str]:
    """Return the non-blank lines of `path` in file order.

    Text files give one entry per line with the terminator stripped. CSV and
    Excel files give the values of `column`, or of the first column when no
    column is named. The first row of a CSV or Excel file is its header and is
    never returned as an entry.
    """

    source = require_path(path, label)
    try:
        if source.suffix.lower() in TABLE_SUFFIXES:
            lines = _read_column(source, column)
        else:
            with source.open(encoding="utf-8") as handle:
                lines = [line.rstrip("\n") for line in handle]
    except FileNotFoundError as exc:
        raise FileUnavailable(source, "file not found") from exc
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise FileUnavailable(source, str(exc)) from exc

    if fix_encoding:
        lines = [ftfy.fix_text(line) for line in lines]
    kept = [line for line in lines if line.strip()]
    logger.debug("Read %d lines from '%s'", len(kept), source)
    return kept


def load_noise(path: str | Path | None, fix_encoding: bool = False) -> FrozenSet[str]:
    """Return the distinct noise words listed in `path`."""

    return frozenset(read_lines(path, fix_encoding=fix_encoding, label="Noise file"))


def load_blacklist(
    path: str | Path | None,
    column: str | None = None,
    fix_encoding: bool = False,
) -> Tuple[str, ...]:
    """Return the distinct blacklist entries of `path`, first occurrence first."""

    lines = read_lines(path, column=column, fix_encoding=fix_encoding, label="Blacklist")
    return tuple(dict.fromkeys(lines))


def _read_column(path: Path, column: str | None) -> List[str]:
    try:
        dataframe = load_dataframe(path)
    except pd.errors.EmptyDataError:
        return []
    except (ValueError, zipfile.BadZipFile) as exc:
        raise FileUnavailable(path, str(exc)) from exc

    if column is None:
        if dataframe.columns.empty:
            return []
        column = dataframe.columns[0]
    elif column not in dataframe.columns:
        raise InvalidInput(f"Column '{column}' not found in '{path}'")
    return dataframe[column].dropna().astype(str).tolist()


def load_dataframe(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path, dtype=str)
    if suffix in {".xls", ".xlsx"}:
        return pd.read_excel(path, dtype=str)
    raise ValueError(f"Unsupported file format: '{suffix}'")

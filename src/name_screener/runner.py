"""Convenience helpers for running the Name Screener end-to-end."""

from __future__ import annotations

import concurrent.futures
import dataclasses
import logging
from pathlib import Path
from typing import AbstractSet, Iterable, List, Optional, Sequence

import pandas as pd

try:
    from tqdm import tqdm

    _TQDM_AVAILABLE = True
except ImportError:  # pragma: no cover - optional dependency
    _TQDM_AVAILABLE = False

from .errors import FileUnavailable, InvalidInput, ScreeningError
from .pipeline import NameScreener, ScreenerConfig, ScreeningResult
from .sources import load_blacklist, load_dataframe, load_noise

logger = logging.getLogger(__name__)


def validate(
    name: str,
    blacklist_path: str | Path | None,
    noise_path: str | Path | None,
    config: Optional[ScreenerConfig] = None,
) -> ScreeningResult:
    """Screen `name` against the blacklist file using the noise file.

    Validation and I/O problems abort the call and come back in
    ``ScreeningResult.error`` with no matches.
    """

    config = config or ScreenerConfig()
    try:
        noise = load_noise(noise_path, fix_encoding=config.fix_encoding)
        blacklist = load_blacklist(
            blacklist_path,
            column=config.blacklist_column,
            fix_encoding=config.fix_encoding,
        )
        return NameScreener(config).run(name, noise, blacklist)
    except (InvalidInput, FileUnavailable) as exc:
        logger.error("Screening of '%s' aborted: %s", name, exc)
        return ScreeningResult(name=name, error=exc)


def screen_file(
    input_path: str | Path,
    output_path: str | Path,
    blacklist_path: str | Path | None,
    noise_path: str | Path | None,
    config: Optional[ScreenerConfig] = None,
) -> pd.DataFrame | None:
    """Screen every name of `input_path` and write the annotated table to `output_path`."""

    input_path = Path(input_path)
    output_path = Path(output_path)
    config = config or ScreenerConfig()

    try:
        dataframe = load_dataframe(input_path)
    except FileNotFoundError:
        print(f"ERROR: Input file not found at '{input_path}'.")
        return None
    except pd.errors.EmptyDataError:
        print(f"ERROR: Input file '{input_path}' is empty.")
        return None
    except ValueError:
        print(f"ERROR: Unsupported file format for '{input_path}'. Please provide a CSV or Excel file.")
        return None

    if config.name_column not in dataframe.columns:
        print(f"ERROR: Column '{config.name_column}' not found in '{input_path}'. Please check --name-column.")
        return None

    try:
        noise = load_noise(noise_path, fix_encoding=config.fix_encoding)
        blacklist = load_blacklist(
            blacklist_path,
            column=config.blacklist_column,
            fix_encoding=config.fix_encoding,
        )
    except ScreeningError as exc:
        print(f"ERROR: {exc}")
        return None

    names = dataframe[config.name_column].fillna("").astype(str).tolist()
    results = screen_names(names, noise, blacklist, config)

    df = dataframe.copy()
    df["matches"] = ["; ".join(result.matches) for result in results]
    df["match_count"] = [len(result.hits) for result in results]
    df["is_match"] = df["match_count"] > 0
    df["error"] = [str(result.error) if result.error else "" for result in results]

    try:
        _save_dataframe(df, output_path)
    except ValueError as exc:
        print(f"ERROR: {exc}")
        return None

    if config.verbose:
        logger.info(
            "Screened %d names against %d entries: %d with matches, %d errors. Results saved to '%s'",
            len(df),
            len(blacklist),
            int(df["is_match"].sum()),
            sum(1 for result in results if not result.ok),
            output_path,
        )
    return df


def screen_names(
    names: Sequence[str],
    noise: AbstractSet[str],
    blacklist: Sequence[str],
    config: Optional[ScreenerConfig] = None,
) -> List[ScreeningResult]:
    """Screen each of `names`, keeping their order; invalid names record their error."""

    config = config or ScreenerConfig()
    screener = NameScreener(dataclasses.replace(config, use_tqdm=False, verbose=False))

    def screen_one(name: str) -> ScreeningResult:
        try:
            return screener.run(name, noise, blacklist)
        except InvalidInput as exc:
            return ScreeningResult(name=name, error=exc)

    with concurrent.futures.ThreadPoolExecutor(max_workers=config.workers) as executor:
        results: Iterable[ScreeningResult] = executor.map(screen_one, names)
        if names and _use_tqdm(config):
            results = tqdm(results, total=len(names), desc="   Screening names", unit="name")
        return list(results)


def _use_tqdm(config: ScreenerConfig) -> bool:
    if config.use_tqdm is not None:
        return config.use_tqdm and _TQDM_AVAILABLE
    return _TQDM_AVAILABLE


def _save_dataframe(dataframe: pd.DataFrame, output_path: Path) -> None:
    suffix = output_path.suffix.lower()
    if suffix == ".csv":
        dataframe.to_csv(output_path, index=False)
        return
    if suffix in {".xls", ".xlsx"}:
        dataframe.to_excel(output_path, index=False)
        return
    raise ValueError(f"Unsupported output file format: '{suffix}'")

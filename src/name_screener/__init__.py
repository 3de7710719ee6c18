"""Name Screener library initialization."""

from .comparison import (
    bounded_edit_distance,
    matches_any_order,
    matches_by_edit_distance,
    matches_phonetically,
    phonetic_key,
)
from .errors import FileUnavailable, InvalidInput, ScreeningError, UnsupportedPhoneticCharacter
from .normalization import normalize
from .pipeline import NameScreener, ScreenerConfig, ScreeningHit, ScreeningResult, ScreeningStats, screen
from .runner import screen_file, screen_names, validate
from .sources import load_blacklist, load_noise, read_lines

__all__ = [
    "NameScreener",
    "ScreenerConfig",
    "ScreeningHit",
    "ScreeningResult",
    "ScreeningStats",
    "ScreeningError",
    "InvalidInput",
    "FileUnavailable",
    "UnsupportedPhoneticCharacter",
    "normalize",
    "matches_any_order",
    "matches_phonetically",
    "matches_by_edit_distance",
    "bounded_edit_distance",
    "phonetic_key",
    "screen",
    "validate",
    "screen_file",
    "screen_names",
    "read_lines",
    "load_noise",
    "load_blacklist",
]

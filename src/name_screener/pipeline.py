"""Core screening pipeline for the Name Screener library."""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, Iterable, Iterator, List, Optional, Tuple

try:
    from tqdm import tqdm

    _TQDM_AVAILABLE = True
except ImportError:  # pragma: no cover - optional dependency
    _TQDM_AVAILABLE = False

from .comparison import (
    DEFAULT_MAX_EDIT_DISTANCE,
    has_letters,
    matches_any_order,
    matches_by_edit_distance,
    matches_phonetically,
)
from .errors import ScreeningError, UnsupportedPhoneticCharacter
from .normalization import normalize

logger = logging.getLogger(__name__)

WORD_ORDER = "word_order"
PHONETIC = "phonetic"
EDIT_DISTANCE = "edit_distance"
STRATEGIES = (WORD_ORDER, PHONETIC, EDIT_DISTANCE)


@dataclass
class ScreenerConfig:
    """Configuration parameters for :class:NameScreener."""

    edit_distance_threshold: int = DEFAULT_MAX_EDIT_DISTANCE
    transliterate: bool = False
    fix_encoding: bool = False
    name_column: str = "name"
    blacklist_column: str | None = None
    workers: int = 1
    use_tqdm: bool | None = None
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.edit_distance_threshold < 0:
            raise ValueError("edit_distance_threshold must be non-negative")
        if self.workers < 1:
            raise ValueError("workers must be at least 1")


@dataclass(frozen=True)
class ScreeningHit:
    """A blacklist entry together with the strategies that matched it."""

    entry: str
    strategies: Tuple[str, ...]


@dataclass
class ScreeningStats:
    """Summary metrics for one screening call."""

    entries_scanned: int = 0
    matches_by_strategy: Dict[str, int] = field(default_factory=dict)
    phonetic_skipped: int = 0
    phonetic_failures: int = 0
    runtime_seconds: float = 0.0


@dataclass
class ScreeningResult:
    """Result bundle returned by :class:NameScreener.run and ``validate``."""

    name: str
    normalized_name: str | None = None
    hits: List[ScreeningHit] = field(default_factory=list)
    stats: ScreeningStats = field(default_factory=ScreeningStats)
    error: ScreeningError | None = None

    @property
    def matches(self) -> List[str]:
        return [hit.entry for hit in self.hits]

    @property
    def ok(self) -> bool:
        return self.error is None


class NameScreener:
    """Screen a person name against a blacklist with three match strategies."""

    def __init__(self, config: ScreenerConfig | None = None) -> None:
        self.config = config or ScreenerConfig()

    def iter_hits(
        self,
        name: str,
        noise: AbstractSet[str],
        blacklist: Iterable[str],
        stats: Optional[ScreeningStats] = None,
    ) -> Iterator[ScreeningHit]:
        """Yield a :class:ScreeningHit for every blacklist entry matching `name`.

        `name` is normalized before the first entry is read, so an invalid name
        raises :class:InvalidInput without touching the blacklist.
        """

        normalized = normalize(name, noise)
        return self._scan(normalized, blacklist, stats if stats is not None else ScreeningStats())

    def screen(self, name: str, noise: AbstractSet[str], blacklist: Iterable[str]) -> List[str]:
        """Return the blacklist entries matching `name`, in blacklist order."""

        return [hit.entry for hit in self.iter_hits(name, noise, blacklist)]

    def run(self, name: str, noise: AbstractSet[str], blacklist: Iterable[str]) -> ScreeningResult:
        """Screen `name` and return the hits together with run statistics."""

        start_time = time.time()
        stats = ScreeningStats()
        normalized = normalize(name, noise)
        hits = list(self._scan(normalized, blacklist, stats))
        stats.runtime_seconds = time.time() - start_time

        if self.config.verbose:
            logger.info(
                "Screened '%s' against %d entries: %d matches %s in %.3fs",
                normalized,
                stats.entries_scanned,
                len(hits),
                stats.matches_by_strategy,
                stats.runtime_seconds,
            )
        return ScreeningResult(name=name, normalized_name=normalized, hits=hits, stats=stats)

    @property
    def _use_tqdm(self) -> bool:
        if self.config.use_tqdm is not None:
            return self.config.use_tqdm and _TQDM_AVAILABLE
        return False

    def _scan(self, normalized: str, blacklist: Iterable[str], stats: ScreeningStats) -> Iterator[ScreeningHit]:
        counter: defaultdict[str, int] = defaultdict(int)

        iterator: Iterable[str] = blacklist
        if self._use_tqdm:
            iterator = tqdm(blacklist, desc="   Screening", unit="entry", leave=False)

        for entry in iterator:
            stats.entries_scanned += 1
            strategies = self._matching_strategies(normalized, entry, stats)
            if not strategies:
                continue
            for strategy in strategies:
                counter[strategy] += 1
            stats.matches_by_strategy = dict(counter)
            logger.debug("'%s' matched '%s' by %s", normalized, entry, ", ".join(strategies))
            yield ScreeningHit(entry=entry, strategies=strategies)

    def _matching_strategies(self, normalized: str, entry: str, stats: ScreeningStats) -> Tuple[str, ...]:
        matched: List[str] = []
        if matches_any_order(normalized, entry):
            matched.append(WORD_ORDER)
        if self._phonetic_match(normalized, entry, stats):
            matched.append(PHONETIC)
        if matches_by_edit_distance(normalized, entry, self.config.edit_distance_threshold):
            matched.append(EDIT_DISTANCE)
        return tuple(matched)

    def _phonetic_match(self, normalized: str, entry: str, stats: ScreeningStats) -> bool:
        if not (has_letters(normalized) and has_letters(entry)):
            stats.phonetic_skipped += 1
            return False
        try:
            return matches_phonetically(normalized, entry, self.config.transliterate)
        except UnsupportedPhoneticCharacter as exc:
            stats.phonetic_failures += 1
            logger.warning("Skipping phonetic match for '%s': %s", entry, exc)
            return False


def screen(
    name: str,
    noise: AbstractSet[str],
    blacklist: Iterable[str],
    threshold: int = DEFAULT_MAX_EDIT_DISTANCE,
) -> List[str]:
    """Return the entries of `blacklist` that match `name` by any strategy."""

    return NameScreener(ScreenerConfig(edit_distance_threshold=threshold)).screen(name, noise, blacklist)


__all__ = [
    "NameScreener",
    "ScreenerConfig",
    "ScreeningHit",
    "ScreeningResult",
    "ScreeningStats",
    "STRATEGIES",
    "screen",
]

"""Name comparison strategies."""

from __future__ import annotations

import re
import string

import jellyfish
from rapidfuzz.distance import Levenshtein
from unidecode import unidecode

from .errors import UnsupportedPhoneticCharacter
from .normalization import tokenize

DEFAULT_MAX_EDIT_DISTANCE = 2

_ASCII_LETTER_PATTERN = re.compile(r"[A-Za-z]")
_SOUNDEX_ALPHABET = frozenset(string.ascii_uppercase)


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def contains_word(text: str, word: str) -> bool:
    """Return True when `word` occurs in `text` with no word character on either side."""

    if not word:
        return True
    start = text.find(word)
    while start != -1:
        end = start + len(word)
        clear_before = start == 0 or not _is_word_char(text[start - 1])
        clear_after = end == len(text) or not _is_word_char(text[end])
        if clear_before and clear_after:
            return True
        start = text.find(word, start + 1)
    return False


def matches_any_order(normalized_name: str, candidate: str) -> bool:
    """Return True when every word of `normalized_name` appears in `candidate`.

    Words may appear in any order and anywhere in `candidate`, but each must be
    a whole word there. The comparison ignores case. A name without words
    matches everything, so callers normalize first.
    """

    haystack = candidate.lower()
    return all(contains_word(haystack, token) for token in tokenize(normalized_name.lower()))


def has_letters(text: str) -> bool:
    return bool(_ASCII_LETTER_PATTERN.search(text))


def phonetic_key(text: str, transliterate: bool = False) -> str:
    """Return the Soundex code of the letters in `text`.

    Non-letters are ignored. Letters outside A-Z raise
    :class:UnsupportedPhoneticCharacter unless `transliterate` folds them to
    ASCII first.
    """

    source = unidecode(text) if transliterate else text
    letters = "".join(char for char in source.upper() if char.isalpha())
    for char in letters:
        if char not in _SOUNDEX_ALPHABET:
            raise UnsupportedPhoneticCharacter(char, text)
    if not letters:
        return ""
    return jellyfish.soundex(letters)


def matches_phonetically(normalized_name: str, candidate: str, transliterate: bool = False) -> bool:
    """Return True when both strings have letters and share a Soundex code."""

    if not (has_letters(normalized_name) and has_letters(candidate)):
        return False
    return phonetic_key(normalized_name, transliterate) == phonetic_key(candidate, transliterate)


def bounded_edit_distance(left: str, right: str, threshold: int = DEFAULT_MAX_EDIT_DISTANCE) -> int | None:
    """Return the Levenshtein distance of `left` and `right`, or None above `threshold`."""

    if threshold < 0:
        raise ValueError("threshold must be non-negative")
    distance = Levenshtein.distance(left, right, score_cutoff=threshold)
    if distance > threshold:
        return None
    return distance


def matches_by_edit_distance(
    normalized_name: str,
    candidate: str,
    threshold: int = DEFAULT_MAX_EDIT_DISTANCE,
) -> bool:
    """Return True when `candidate` is within `threshold` edits of `normalized_name`."""

    return bounded_edit_distance(normalized_name, candidate.lower(), threshold) is not None

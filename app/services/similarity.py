"""
Text normalisation, token sets and deterministic shuffling.

Everything here is pure and synchronous so ranking stays reproducible:
the same inputs and the same seed string always produce the same output.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable, Sequence
from typing import TypeVar

T = TypeVar("T")

MIN_TOKEN_LENGTH = 3
SHUFFLE_SEED_BASE = 0x9E3779B9
_UINT32 = 0xFFFFFFFF
_SIGN_BIT = 0x80000000
_SIGN_FILL_17 = 0xFFFF8000


def normalize_string(value: object) -> str:
    """
    Lowercase, strip diacritics, turn punctuation into spaces and collapse
    whitespace. ``None`` becomes an empty string.
    """
    if value is None:
        return ""
    decomposed = unicodedata.normalize("NFKD", str(value).lower())
    chars = []
    for ch in decomposed:
        if unicodedata.combining(ch):
            continue
        chars.append(ch if ch.isalnum() or ch.isspace() else " ")
    return " ".join("".join(chars).split())


def normalize_id(value: object) -> str:
    """Trim an identifier and give it a leading slash (``OL1W`` -> ``/OL1W``)."""
    text = str(value).strip() if value is not None else ""
    if not text:
        return ""
    return text if text.startswith("/") else f"/{text}"


def book_key(title: object, author: object) -> str:
    """Identity of a book independent of catalog IDs: ``title::author``."""
    return f"{normalize_string(title)}::{normalize_string(author)}"


def extract_tokens(title: str, author: str = "", subjects: Iterable[str] = ()) -> set[str]:
    tokens: set[str] = set()
    for text in (title, author, *subjects):
        for word in normalize_string(text).split(" "):
            if len(word) >= MIN_TOKEN_LENGTH:
                tokens.add(word)
    return tokens


def jaccard_similarity(a: set[str], b: set[str]) -> float:
    """``|a & b| / |a | b|``; 0.0 when either set is empty."""
    if not a or not b:
        return 0.0
    intersection = len(a & b)
    return intersection / (len(a) + len(b) - intersection)


def _xorshift32(state: int) -> int:
    state ^= (state << 13) & _UINT32
    # right shift on the signed 32-bit value: copy the sign bit into the top 17 bits
    state ^= (state >> 17) | (_SIGN_FILL_17 if state & _SIGN_BIT else 0)
    state ^= (state << 5) & _UINT32
    return state & _UINT32


def _first_code_unit(ch: str) -> int:
    """First UTF-16 code unit of ``ch``; astral characters yield their high surrogate."""
    code = ord(ch)
    if code > 0xFFFF:
        return 0xD800 + ((code - 0x10000) >> 10)
    return code


def seed_state(seed: str) -> int:
    """Fold the seed's character codes into the xorshift32 start state."""
    state = SHUFFLE_SEED_BASE
    for ch in seed:
        state = (state ^ _first_code_unit(ch)) & _UINT32
    return state or 1


def seeded_shuffle(items: Sequence[T], seed: str = "") -> list[T]:
    """Fisher-Yates shuffle driven by xorshift32; returns a new list."""
    result = list(items)
    state = seed_state(seed)
    for i in range(len(result) - 1, 0, -1):
        state = _xorshift32(state)
        j = min(int(state / _UINT32 * (i + 1)), i)
        result[i], result[j] = result[j], result[i]
    return result

"""
Name and label normalization.

Two tiers of person-name equivalence are used across sheets:
  1. full-name normalization (accents stripped, lowercase, alphanumerics only,
     plus a small alias table for irregular spellings);
  2. first-name prefix equivalence, only consulted when tier 1 fails.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Iterable, Optional

PERSON_NAME_ALIASES = {
    "voldie": "voldis",
    "voldis": "voldis",
    "maannie": "mamanannie",
    "mamanannie": "mamanannie",
}

_WHITESPACE_RE = re.compile(r"\s+")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def flatten_cell(value: object) -> str:
    """Cell text on one line: newlines become spaces, outer whitespace trimmed."""
    if value is None:
        return ""
    return str(value).replace("\r", " ").replace("\n", " ").strip()


def normalize_label(value: object) -> str:
    if value is None:
        return ""
    return _WHITESPACE_RE.sub(" ", strip_accents(str(value))).strip().lower()


def compact_label(value: object) -> str:
    return normalize_label(value).replace(" ", "")


def normalize_name(name: object) -> str:
    if name is None:
        return ""
    return _WHITESPACE_RE.sub(" ", str(name)).strip().lower()


def first_word(name: object) -> str:
    parts = str(name or "").strip().split()
    return parts[0] if parts else ""


def normalize_person_name(name: object) -> str:
    base = _NON_ALNUM_RE.sub("", normalize_label(name))
    return PERSON_NAME_ALIASES.get(base, base)


def same_person_name(a: object, b: object) -> bool:
    an = normalize_person_name(a)
    return bool(an) and an == normalize_person_name(b)


def are_person_names_equivalent(a: object, b: object) -> bool:
    an = normalize_person_name(a)
    bn = normalize_person_name(b)
    if not an or not bn:
        return False
    if an == bn:
        return True

    a_first = normalize_person_name(first_word(a))
    b_first = normalize_person_name(first_word(b))
    if not a_first or not b_first:
        return False
    return a_first == b_first or a_first.startswith(b_first) or b_first.startswith(a_first)


def find_person_key(keys: Iterable[str], name: object) -> Optional[str]:
    """Return the first key naming the same person, tier 1 before tier 2."""
    candidates = list(keys)
    target = normalize_person_name(name)
    if target:
        for key in candidates:
            if normalize_person_name(key) == target:
                return key

    name_first = first_word(name)
    for key in candidates:
        if are_person_names_equivalent(first_word(key), name_first):
            return key
    return None

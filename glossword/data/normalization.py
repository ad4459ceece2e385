"""Shared helpers for term normalization."""

from __future__ import annotations

import re
from typing import Iterable, List

WHITESPACE_RE = re.compile(r"\s+")


def clean_term(text: str) -> str:
    """Return the uppercase grid form of ``text`` with surrounding space trimmed.

    Internal whitespace is collapsed to a single space; rejecting multi-word
    terms is left to the caller.
    """

    if not text:
        return ""
    return WHITESPACE_RE.sub(" ", text.strip()).upper()


def dedupe_terms(terms: Iterable[str]) -> List[str]:
    """Drop case-insensitive duplicates, keeping the first occurrence."""

    seen = set()
    unique: List[str] = []
    for term in terms:
        key = term.casefold()
        if key in seen:
            continue
        seen.add(key)
        unique.append(term)
    return unique


__all__ = ["clean_term", "dedupe_terms"]

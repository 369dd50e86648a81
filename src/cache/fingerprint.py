# src/cache/fingerprint.py — v1
"""Question fingerprinting for cache keys.

Normalization is lossy on purpose: questions differing only by case or
whitespace share a key, which is what drives the hit rate.
"""

from __future__ import annotations

import hashlib
import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_question(question: str) -> str:
    """Lower-case, trim, and collapse internal whitespace runs to one space.

    Idempotent: normalize_question(normalize_question(q)) == normalize_question(q).
    """
    return _WHITESPACE_RE.sub(" ", question.lower().strip())


def compute_cache_key(question: str) -> str:
    """MD5 hex digest (32 chars) of the normalized question."""
    normalized = normalize_question(question)
    return hashlib.md5(normalized.encode("utf-8")).hexdigest()  # noqa: S324

from __future__ import annotations

import re

_whitespace_re = re.compile(r"\s+")
_separator_re = re.compile(r"[-_]+")


def normalize_round_name(value: str) -> str:
    """Normalize a fixture round label ("Round of 16", "Semi-finals") for keyword matching."""

    v = value.strip().lower()
    v = _separator_re.sub(" ", v)
    v = _whitespace_re.sub(" ", v)
    return v.strip()

"""
Natural Sorting

Route names mix text and numbers ("R2", "R10"); sort the numbers by value
and the text case-insensitively.
"""

import re


_DIGITS = re.compile(r"(\d+)")


def natural_key(value) -> tuple:
    """Sort key: "R2" < "R10", "rota 3" == "ROTA 3"."""
    parts = _DIGITS.split(str(value).casefold())
    return tuple((0, int(p)) if p.isdigit() else (1, p) for p in parts if p != "")


def natural_sorted(values) -> list:
    """Values sorted with natural_key."""
    return sorted(values, key=natural_key)


__all__ = [
    "natural_key",
    "natural_sorted",
]

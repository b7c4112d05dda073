#!/usr/bin/env python3
"""
General utilities for the Orrery.
"""
import math
from typing import Optional, Sequence, Tuple, Union


def try_float(val) -> Optional[float]:
    """float(val), or None when it is not a number or not finite ("nan", "inf")."""
    try:
        out = float(val)
    except (TypeError, ValueError):
        return None
    return out if math.isfinite(out) else None


def coerce_color(c: Union[str, Sequence[int], None], default: Tuple[int, int, int]) -> Tuple[int, int, int]:
    """
    Accept '#rrggbb', 'rgb', or an [r, g, b] list and return a clamped RGB tuple.

    Anything unparseable yields `default`.
    """
    if c is None:
        return default
    if isinstance(c, str):
        s = c.strip().lstrip("#")
        if len(s) == 3:
            s = "".join(ch * 2 for ch in s)
        if len(s) != 6:
            return default
        try:
            return (int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))
        except ValueError:
            return default
    try:
        r, g, b = int(c[0]), int(c[1]), int(c[2])
    except (TypeError, ValueError, IndexError):
        return default
    return (max(0, min(255, r)), max(0, min(255, g)), max(0, min(255, b)))

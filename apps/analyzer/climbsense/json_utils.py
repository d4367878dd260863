"""Make chart and radial payloads safe for strict JSON encoders.

Phone recordings occasionally contain NaN/Inf samples, which ``json.dumps``
rejects with ``allow_nan=False`` and browsers refuse to parse.
"""

from __future__ import annotations

import math
from typing import Any

__all__ = ["sanitize_for_json"]


def _scrub(value: Any) -> tuple[Any, int]:
    # numpy arrays expose ``ndim``; numpy scalars only ``item``.
    if hasattr(value, "ndim") and hasattr(value, "tolist"):
        value = value.tolist()
    elif hasattr(value, "item"):
        value = value.item()

    if isinstance(value, float):
        return (value, 0) if math.isfinite(value) else (None, 1)
    if isinstance(value, dict):
        out: dict[Any, Any] = {}
        replaced = 0
        for key, item in value.items():
            out[key], n = _scrub(item)
            replaced += n
        return out, replaced
    if isinstance(value, (list, tuple)):
        items = []
        replaced = 0
        for item in value:
            cleaned, n = _scrub(item)
            items.append(cleaned)
            replaced += n
        return items, replaced
    return value, 0


def sanitize_for_json(payload: Any) -> tuple[Any, int]:
    """Return *payload* as plain Python with every non-finite float set to ``None``.

    Tuples and numpy arrays become lists and numpy scalars become native
    numbers. The second element is how many values were replaced.
    """
    return _scrub(payload)

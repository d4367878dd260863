from __future__ import annotations

import logging
from dataclasses import dataclass
from math import isfinite
from typing import Any

from .constants import (
    CRUX_FACTOR,
    DEFAULT_THRESHOLD_MPS2,
    DYNAMICS_DIVISOR_CHART,
    MAX_THRESHOLD_MPS2,
    MIN_MOVE_GAP_S,
)

LOGGER = logging.getLogger(__name__)

# Validation sets for detection settings (single source of truth).
POSITIVE_REQUIRED_KEYS: frozenset[str] = frozenset({"normalization_divisor", "crux_factor"})
NON_NEGATIVE_KEYS: frozenset[str] = frozenset({"threshold", "min_move_gap_s"})

_BOUNDS: dict[str, tuple[float, float]] = {
    "threshold": (0.0, MAX_THRESHOLD_MPS2),
    "min_move_gap_s": (0.0, 10.0),
    "normalization_divisor": (1.0, 100.0),
    "crux_factor": (1.0, 5.0),
}

DEFAULT_DETECTION_SETTINGS: dict[str, float] = {
    "threshold": DEFAULT_THRESHOLD_MPS2,
    "min_move_gap_s": MIN_MOVE_GAP_S,
    "normalization_divisor": DYNAMICS_DIVISOR_CHART,
    "crux_factor": CRUX_FACTOR,
}


def sanitize_settings(
    payload: dict[str, object],
    allowed_keys: dict[str, float] | None = None,
) -> dict[str, float]:
    """Validate and filter detection settings, dropping invalid values with logging.

    *allowed_keys* defaults to :data:`DEFAULT_DETECTION_SETTINGS`.
    """
    allowed = allowed_keys if allowed_keys is not None else DEFAULT_DETECTION_SETTINGS
    out: dict[str, float] = {}
    for key in allowed:
        raw = payload.get(key)
        if raw is None or isinstance(raw, bool):
            continue
        try:
            value = float(raw)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            LOGGER.debug("Dropping non-numeric detection setting %s=%r", key, raw)
            continue
        if not isfinite(value):
            LOGGER.debug("Dropping non-finite detection setting %s=%r", key, raw)
            continue
        if key in POSITIVE_REQUIRED_KEYS and value <= 0:
            LOGGER.debug("Dropping non-positive detection setting %s=%r", key, value)
            continue
        if key in NON_NEGATIVE_KEYS and value < 0:
            LOGGER.debug("Dropping negative detection setting %s=%r", key, value)
            continue
        bounds = _BOUNDS.get(key)
        if bounds is not None:
            lower, upper = bounds
            bounded = min(max(value, lower), upper)
            if bounded != value:
                LOGGER.info("Clamped detection setting %s from %r to %r", key, value, bounded)
            value = bounded
        out[key] = value
    return out


def sanitize_threshold(value: object) -> float:
    """Return a validated threshold or raise ``ValueError``."""
    cleaned = sanitize_settings({"threshold": value}, allowed_keys={"threshold": 0.0})
    if "threshold" not in cleaned:
        raise ValueError(f"Invalid detection threshold: {value!r}")
    return cleaned["threshold"]


@dataclass(frozen=True, slots=True)
class DetectionSettings:
    threshold: float = DEFAULT_THRESHOLD_MPS2
    min_move_gap_s: float = MIN_MOVE_GAP_S
    normalization_divisor: float = DYNAMICS_DIVISOR_CHART
    crux_factor: float = CRUX_FACTOR

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DetectionSettings:
        values = dict(DEFAULT_DETECTION_SETTINGS)
        values.update(sanitize_settings(data))
        return cls(**values)

    def to_dict(self) -> dict[str, float]:
        return {
            "threshold": self.threshold,
            "min_move_gap_s": self.min_move_gap_s,
            "normalization_divisor": self.normalization_divisor,
            "crux_factor": self.crux_factor,
        }

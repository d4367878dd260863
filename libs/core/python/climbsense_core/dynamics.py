"""Map a peak's raw acceleration to a [0, 1] dynamics score and a crux flag."""

from __future__ import annotations

from collections.abc import Iterable
from math import isfinite
from typing import NamedTuple

from .moves import Move

CRUX_FACTOR = 1.5
"""A move is a crux when its acceleration exceeds ``threshold * CRUX_FACTOR``."""

DYNAMICS_DIVISOR_CHART = 20.0
DYNAMICS_DIVISOR_RADIAL = 30.0
DEFAULT_NORMALIZATION_DIVISOR = DYNAMICS_DIVISOR_CHART

START_DYNAMICS = 0.3
"""Fixed, subdued intensity of the synthetic start move."""


class Classification(NamedTuple):
    dynamics: float
    is_crux: bool


def classify(
    raw_acceleration: float,
    threshold: float,
    *,
    normalization_divisor: float = DEFAULT_NORMALIZATION_DIVISOR,
    crux_factor: float = CRUX_FACTOR,
) -> Classification:
    if not isfinite(normalization_divisor) or normalization_divisor <= 0:
        raise ValueError(
            f"normalization_divisor must be a positive number, got {normalization_divisor!r}"
        )
    raw = float(raw_acceleration)
    if not isfinite(raw):
        # NaN compares false everywhere; +Inf would otherwise saturate to a crux.
        return Classification(dynamics=0.0, is_crux=False)
    dynamics = min(1.0, max(0.0, raw / normalization_divisor))
    return Classification(dynamics=dynamics, is_crux=raw > threshold * crux_factor)


def classify_start() -> Classification:
    return Classification(dynamics=START_DYNAMICS, is_crux=False)


def reclassify(
    moves: Iterable[Move],
    threshold: float,
    *,
    normalization_divisor: float = DEFAULT_NORMALIZATION_DIVISOR,
    crux_factor: float = CRUX_FACTOR,
) -> tuple[Move, ...]:
    """Re-map dynamics/crux for already detected moves with different constants.

    Returns new Move objects; the input moves are left untouched.
    """
    out: list[Move] = []
    for move in moves:
        if move.is_start:
            label = classify_start()
        else:
            label = classify(
                move.raw_acceleration,
                threshold,
                normalization_divisor=normalization_divisor,
                crux_factor=crux_factor,
            )
        out.append(move.replace(dynamics=label.dynamics, is_crux=label.is_crux))
    return tuple(out)

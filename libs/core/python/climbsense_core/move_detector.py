"""Move detection – turn an acceleration magnitude series into discrete moves.

A move is a strict three-point local maximum above the detection threshold,
separated from the previously detected move by more than a refractory gap.
The output always starts with a synthetic move at ``t = 0`` that anchors the
visual origin for the renderers, so callers never see an empty sequence.

The detector keeps no state between calls: re-running it on the same inputs
gives an identical tuple, which lets the UI recompute on every threshold
change.
"""

from __future__ import annotations

import logging
from math import isfinite

from .dynamics import (
    CRUX_FACTOR,
    DEFAULT_NORMALIZATION_DIVISOR,
    classify,
    classify_start,
)
from .moves import START_MOVE_INDEX, Move
from .series import Series

LOGGER = logging.getLogger(__name__)

MIN_MOVE_GAP_S = 0.5
"""Refractory period between two detected moves (seconds)."""

START_FALLBACK_ACCELERATION = 9.8
"""Raw acceleration of the start move when the series has no usable first sample."""


def start_move(series: Series | None) -> Move:
    first = series.first_magnitude() if series is not None else None
    raw = first if first is not None and isfinite(first) else START_FALLBACK_ACCELERATION
    label = classify_start()
    return Move(
        index=START_MOVE_INDEX,
        time=0.0,
        raw_acceleration=raw,
        dynamics=label.dynamics,
        is_crux=label.is_crux,
    )


def detect(
    series: Series | None,
    threshold: float,
    min_move_gap: float = MIN_MOVE_GAP_S,
    *,
    normalization_divisor: float = DEFAULT_NORMALIZATION_DIVISOR,
    crux_factor: float = CRUX_FACTOR,
) -> tuple[Move, ...]:
    """Detect moves in *series* at the given *threshold*.

    Only interior samples are tested; the first and last sample can never be
    a peak under the three-point comparison. Non-finite samples never
    qualify and a non-finite neighbour disqualifies the sample next to it.
    """
    moves: list[Move] = [start_move(series)]
    if series is None or len(series) < 3:
        return tuple(moves)

    time = series.time
    magnitude = series.magnitude
    last_move_time = -min_move_gap
    for i in range(1, len(magnitude) - 1):
        a = magnitude[i]
        t = time[i]
        if not (isfinite(a) and isfinite(t)):
            continue
        if not (a > threshold and a > magnitude[i - 1] and a > magnitude[i + 1]):
            continue
        if not t - last_move_time > min_move_gap:
            continue
        label = classify(
            a,
            threshold,
            normalization_divisor=normalization_divisor,
            crux_factor=crux_factor,
        )
        moves.append(
            Move(
                index=len(moves) + 1,
                time=t,
                raw_acceleration=a,
                dynamics=label.dynamics,
                is_crux=label.is_crux,
            )
        )
        last_move_time = t

    LOGGER.debug(
        "Detected %d moves (threshold=%s, gap=%s, samples=%d)",
        len(moves) - 1,
        threshold,
        min_move_gap,
        len(magnitude),
    )
    return tuple(moves)

"""Move spans – shade the approach into each detected peak.

Layered on top of the point detector: move *k* covers the half-open interval
``[moves[k-1].time, moves[k].time)`` and summarises the magnitude samples
that fall inside it. The synthetic start move gets an empty ``[0, 0)`` span.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from .moves import Move
from .series import Series


@dataclass(frozen=True, slots=True)
class MoveSpan:
    move: Move
    start_time: float
    end_time: float
    avg_acceleration: float
    min_acceleration: float
    max_acceleration: float
    sample_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.move.index,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "isCrux": self.move.is_crux,
            "accelerationRange": {
                "min": self.min_acceleration,
                "max": self.max_acceleration,
                "avg": self.avg_acceleration,
            },
            "sampleCount": self.sample_count,
        }


def _span_for(
    move: Move,
    start: float,
    end: float,
    time: np.ndarray,
    mag: np.ndarray,
) -> MoveSpan:
    mask = (time >= start) & (time < end) & np.isfinite(mag)
    window = mag[mask]
    if window.size == 0:
        raw = move.raw_acceleration
        return MoveSpan(
            move=move,
            start_time=start,
            end_time=end,
            avg_acceleration=raw,
            min_acceleration=raw,
            max_acceleration=raw,
            sample_count=0,
        )
    return MoveSpan(
        move=move,
        start_time=start,
        end_time=end,
        avg_acceleration=float(np.mean(window)),
        min_acceleration=float(np.min(window)),
        max_acceleration=float(np.max(window)),
        sample_count=int(window.size),
    )


def build_move_spans(series: Series | None, moves: Sequence[Move]) -> tuple[MoveSpan, ...]:
    if not moves:
        return ()
    if series is None:
        series = Series()
    time = np.asarray(series.time, dtype=np.float64)
    mag = np.asarray(series.magnitude, dtype=np.float64)

    spans: list[MoveSpan] = []
    prev_time = 0.0
    for move in moves:
        start = move.time if move.is_start else prev_time
        spans.append(_span_for(move, start, move.time, time, mag))
        prev_time = move.time
    return tuple(spans)

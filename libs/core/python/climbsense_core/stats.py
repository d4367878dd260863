from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from .moves import Move
from .series import Series


@dataclass(frozen=True, slots=True)
class Stats:
    max_acceleration: float = 0.0
    avg_acceleration: float = 0.0
    move_count: int = 0
    duration: float = 0.0
    sample_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "maxAcceleration": self.max_acceleration,
            "avgAcceleration": self.avg_acceleration,
            "moveCount": self.move_count,
            "duration": self.duration,
            "sampleCount": self.sample_count,
        }


def summarize(series: Series | None, moves: Sequence[Move] | None) -> Stats:
    """Reduce a series and its detected moves to the summary-panel numbers.

    ``move_count`` includes the synthetic start move. Non-finite magnitudes
    are left out of the max/mean; every field falls back to 0 on empty input.
    """
    move_count = len(moves) if moves is not None else 0
    if series is None or series.is_empty:
        return Stats(move_count=move_count)

    values = np.asarray(series.magnitude, dtype=np.float64)
    finite = values[np.isfinite(values)]
    max_accel = float(np.max(finite)) if finite.size else 0.0
    avg_accel = float(np.mean(finite)) if finite.size else 0.0

    duration = 0.0
    if len(series.time) >= 2:
        span = series.time[-1] - series.time[0]
        duration = span if np.isfinite(span) else 0.0

    return Stats(
        max_acceleration=max_accel,
        avg_acceleration=avg_accel,
        move_count=move_count,
        duration=float(duration),
        sample_count=len(series.magnitude),
    )

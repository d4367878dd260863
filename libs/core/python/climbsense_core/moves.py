from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

START_MOVE_INDEX = 1


@dataclass(frozen=True, slots=True)
class Move:
    """One detected climbing move at an acceleration peak."""

    index: int
    time: float
    raw_acceleration: float
    dynamics: float
    is_crux: bool

    @property
    def is_start(self) -> bool:
        return self.index == START_MOVE_INDEX

    def replace(self, **changes: Any) -> Move:
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "time": self.time,
            "rawAcceleration": self.raw_acceleration,
            "dynamics": self.dynamics,
            "isCrux": self.is_crux,
        }

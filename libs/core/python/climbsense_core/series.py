"""Acceleration time-series container shared by every analysis step."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from math import isfinite


def _as_float_tuple(values: Iterable[float] | None) -> tuple[float, ...]:
    if values is None:
        return ()
    # numpy arrays → plain Python floats so Series stays hashable and comparable.
    if hasattr(values, "tolist"):
        values = values.tolist()  # type: ignore[union-attr]
    return tuple(float(v) for v in values)


@dataclass(frozen=True, slots=True)
class Series:
    """Time (s) and absolute-acceleration magnitude (m/s²) sharing one index space."""

    time: tuple[float, ...] = ()
    magnitude: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        if len(self.time) != len(self.magnitude):
            raise ValueError(
                f"Series.time and Series.magnitude must have equal length, "
                f"got {len(self.time)} and {len(self.magnitude)}"
            )

    @classmethod
    def from_columns(
        cls,
        time: Iterable[float] | None,
        magnitude: Iterable[float] | None,
    ) -> Series:
        """Build a Series from two columns; ``None`` is treated as an empty column."""
        return cls(time=_as_float_tuple(time), magnitude=_as_float_tuple(magnitude))

    def __len__(self) -> int:
        return len(self.magnitude)

    @property
    def is_empty(self) -> bool:
        return not self.magnitude

    def first_magnitude(self) -> float | None:
        return self.magnitude[0] if self.magnitude else None

    def _first_index_at_or_after(self, t_s: float) -> int | None:
        return next((i for i, t in enumerate(self.time) if t >= t_s), None)

    def crop(self, start_s: float, end_s: float) -> Series:
        """Cut the recording to ``[start_s, end_s]`` and restart its clock at 0.

        The window runs from the first sample at or after *start_s* through
        the first sample at or after *end_s*, both included. Times are shifted
        so the first kept sample sits at ``t = 0``, which is where the
        detector anchors the start move.
        """
        if not (isfinite(start_s) and isfinite(end_s)) or start_s >= end_s:
            raise ValueError(f"Invalid crop window: {start_s!r} → {end_s!r}")
        start = self._first_index_at_or_after(start_s)
        end = self._first_index_at_or_after(end_s)
        if start is None or end is None or start >= end:
            raise ValueError(
                f"Invalid crop window: {start_s!r} → {end_s!r} selects no samples"
            )
        origin = self.time[start]
        return Series(
            time=tuple(t - origin for t in self.time[start : end + 1]),
            magnitude=self.magnitude[start : end + 1],
        )

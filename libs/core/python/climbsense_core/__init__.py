from .dynamics import (
    CRUX_FACTOR,
    DEFAULT_NORMALIZATION_DIVISOR,
    DYNAMICS_DIVISOR_CHART,
    DYNAMICS_DIVISOR_RADIAL,
    START_DYNAMICS,
    Classification,
    classify,
    classify_start,
    reclassify,
)
from .move_detector import MIN_MOVE_GAP_S, START_FALLBACK_ACCELERATION, detect, start_move
from .moves import START_MOVE_INDEX, Move
from .series import Series
from .spans import MoveSpan, build_move_spans
from .stats import Stats, summarize

__all__ = [
    "CRUX_FACTOR",
    "DEFAULT_NORMALIZATION_DIVISOR",
    "DYNAMICS_DIVISOR_CHART",
    "DYNAMICS_DIVISOR_RADIAL",
    "MIN_MOVE_GAP_S",
    "START_DYNAMICS",
    "START_FALLBACK_ACCELERATION",
    "START_MOVE_INDEX",
    "Classification",
    "Move",
    "MoveSpan",
    "Series",
    "Stats",
    "build_move_spans",
    "classify",
    "classify_start",
    "detect",
    "reclassify",
    "start_move",
    "summarize",
]

"""Shared detection and display constants – single source of truth.

Numbers owned by the pure core are re-exported here so application code only
ever imports from one place.
"""

from __future__ import annotations

from typing import Final

from climbsense_core.dynamics import CRUX_FACTOR as CRUX_FACTOR
from climbsense_core.dynamics import DYNAMICS_DIVISOR_CHART as DYNAMICS_DIVISOR_CHART
from climbsense_core.dynamics import DYNAMICS_DIVISOR_RADIAL as DYNAMICS_DIVISOR_RADIAL
from climbsense_core.move_detector import MIN_MOVE_GAP_S as MIN_MOVE_GAP_S

# ---------------------------------------------------------------------------
# Per-boulder threshold
# ---------------------------------------------------------------------------
DEFAULT_THRESHOLD_MPS2: Final[float] = 12.0
"""Detection threshold (m/s²) used for a boulder that has no saved value."""

MAX_THRESHOLD_MPS2: Final[float] = 100.0
"""Upper clamp for user-supplied thresholds; well above any phone sensor range."""

# ---------------------------------------------------------------------------
# Boulder metadata
# ---------------------------------------------------------------------------
MAX_BOULDER_NAME_LEN: Final[int] = 64
MAX_BOULDER_NOTES_LEN: Final[int] = 500

"""Plot payload builders – acceleration/time chart and radial move layout."""

from __future__ import annotations

import logging
from math import pi
from typing import Any

from climbsense_core.dynamics import reclassify

from .analysis_store import AnalysisSnapshot
from .constants import DYNAMICS_DIVISOR_RADIAL
from .json_utils import sanitize_for_json

LOGGER = logging.getLogger(__name__)

CHART_HEADROOM_MPS2 = 5.0
"""Space kept above the threshold line so it never sits on the chart's top edge."""


def _clean(payload: dict[str, Any], kind: str) -> dict[str, Any]:
    cleaned, replaced = sanitize_for_json(payload)
    if replaced:
        LOGGER.warning(
            "%s payload contained %d NaN/Inf values; replaced with null.", kind, replaced
        )
    return cleaned


def build_chart_payload(snapshot: AnalysisSnapshot) -> dict[str, Any]:
    """Acceleration/time plot: raw points, threshold line, move markers and shading."""
    series = snapshot.series
    points = [{"t": t, "a": a} for t, a in zip(series.time, series.magnitude, strict=True)]
    y_max = max(snapshot.stats.max_acceleration, snapshot.threshold + CHART_HEADROOM_MPS2)
    payload = {
        "boulderId": snapshot.boulder_id,
        "revision": snapshot.revision,
        "threshold": snapshot.threshold,
        "yMax": y_max,
        "points": points,
        "markers": [move.to_dict() for move in snapshot.moves],
        "spans": [span.to_dict() for span in snapshot.spans if not span.move.is_start],
        "stats": snapshot.stats.to_dict(),
    }
    return _clean(payload, "Chart")


def build_radial_payload(
    snapshot: AnalysisSnapshot,
    *,
    normalization_divisor: float = DYNAMICS_DIVISOR_RADIAL,
) -> dict[str, Any]:
    """Ring placement for the 3D view: each move gets an angle around the circle.

    Dynamics are re-mapped with the radial divisor; crux flags are unchanged
    because they only depend on the threshold.
    """
    moves = reclassify(
        snapshot.moves,
        snapshot.threshold,
        normalization_divisor=normalization_divisor,
        crux_factor=snapshot.settings.crux_factor,
    )
    count = len(moves)
    payload = {
        "boulderId": snapshot.boulder_id,
        "revision": snapshot.revision,
        "moveCount": count,
        "moves": [
            {
                **move.to_dict(),
                "angle": (2.0 * pi * position) / count,
            }
            for position, move in enumerate(moves)
        ],
    }
    return _clean(payload, "Radial")

"""Shared analysis state for the chart, radial and statistics views.

One :class:`MoveAnalysisStore` is created by the application and handed to
every consumer. It owns the selected boulder's series and the cached move
list, and re-runs detection from scratch whenever the series or the
threshold changes so that all views always show the same moves.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from threading import RLock

from climbsense_core.move_detector import detect
from climbsense_core.moves import Move
from climbsense_core.series import Series
from climbsense_core.spans import MoveSpan, build_move_spans
from climbsense_core.stats import Stats, summarize

from .analysis_settings import DetectionSettings, sanitize_threshold
from .boulder_config import BoulderConfigStore, normalize_boulder_id

LOGGER = logging.getLogger(__name__)

SnapshotListener = Callable[["AnalysisSnapshot"], None]


@dataclass(frozen=True, slots=True)
class AnalysisSnapshot:
    boulder_id: str | None
    threshold: float
    settings: DetectionSettings
    series: Series
    moves: tuple[Move, ...]
    spans: tuple[MoveSpan, ...]
    stats: Stats
    revision: int


def analyze(
    series: Series | None,
    settings: DetectionSettings,
) -> tuple[tuple[Move, ...], tuple[MoveSpan, ...], Stats]:
    """Run detection, span enrichment and stats for one series."""
    moves = detect(
        series,
        settings.threshold,
        settings.min_move_gap_s,
        normalization_divisor=settings.normalization_divisor,
        crux_factor=settings.crux_factor,
    )
    return moves, build_move_spans(series, moves), summarize(series, moves)


class MoveAnalysisStore:
    def __init__(
        self,
        config_store: BoulderConfigStore,
        settings: DetectionSettings | None = None,
    ) -> None:
        self._lock = RLock()
        self._config_store = config_store
        self._settings = settings or DetectionSettings()
        self._listeners: dict[int, SnapshotListener] = {}
        # listener id -> newest revision handed to that listener
        self._delivered: dict[int, int] = {}
        self._next_listener_id = 0
        self._revision = 0
        self._boulder_id: str | None = None
        self._series = Series()
        self._snapshot = self._compute(self._settings.threshold)

    # -- recompute -------------------------------------------------------------

    def _compute(self, threshold: float) -> AnalysisSnapshot:
        settings = DetectionSettings(
            threshold=threshold,
            min_move_gap_s=self._settings.min_move_gap_s,
            normalization_divisor=self._settings.normalization_divisor,
            crux_factor=self._settings.crux_factor,
        )
        moves, spans, stats = analyze(self._series, settings)
        return AnalysisSnapshot(
            boulder_id=self._boulder_id,
            threshold=threshold,
            settings=settings,
            series=self._series,
            moves=moves,
            spans=spans,
            stats=stats,
            revision=self._revision,
        )

    def _recompute_locked(self, threshold: float) -> AnalysisSnapshot:
        self._revision += 1
        self._snapshot = self._compute(threshold)
        LOGGER.debug(
            "Recomputed %d moves for boulder %s at threshold %s (revision %d)",
            len(self._snapshot.moves),
            self._boulder_id,
            threshold,
            self._revision,
        )
        return self._snapshot

    def _claim_delivery(self, listener_id: int, revision: int) -> bool:
        with self._lock:
            if listener_id not in self._listeners:
                return False
            if self._delivered.get(listener_id, 0) >= revision:
                return False
            self._delivered[listener_id] = revision
            return True

    def _notify(self, snapshot: AnalysisSnapshot) -> None:
        """Hand *snapshot* to every listener that has not seen a newer one.

        A listener may recompute (or another thread may) while this loop is
        running; the newer snapshot is then delivered first and this older
        one is skipped, so no listener ends up holding a stale revision.
        """
        with self._lock:
            listeners = list(self._listeners.items())
        for listener_id, listener in listeners:
            if not self._claim_delivery(listener_id, snapshot.revision):
                continue
            try:
                listener(snapshot)
            except Exception:
                LOGGER.warning(
                    "Analysis listener %r failed for revision %d; continuing.",
                    listener,
                    snapshot.revision,
                    exc_info=True,
                )

    # -- public API ------------------------------------------------------------

    def snapshot(self) -> AnalysisSnapshot:
        with self._lock:
            return self._snapshot

    @property
    def settings(self) -> DetectionSettings:
        return self._settings

    def select_boulder(self, boulder_id: int | str, series: Series | None) -> AnalysisSnapshot:
        key = normalize_boulder_id(boulder_id)
        with self._lock:
            self._boulder_id = key
            self._series = series if series is not None else Series()
            snapshot = self._recompute_locked(self._config_store.get_threshold(key))
        self._notify(snapshot)
        return snapshot

    def update_series(self, series: Series | None) -> AnalysisSnapshot:
        """Swap in new samples for the selected boulder (e.g. after a crop or reload)."""
        with self._lock:
            self._series = series if series is not None else Series()
            snapshot = self._recompute_locked(self._snapshot.threshold)
        self._notify(snapshot)
        return snapshot

    def update_threshold(self, threshold: float) -> AnalysisSnapshot:
        value = sanitize_threshold(threshold)
        with self._lock:
            if self._boulder_id is not None:
                value = self._config_store.set_threshold(self._boulder_id, value)
            snapshot = self._recompute_locked(value)
        self._notify(snapshot)
        return snapshot

    def clear(self) -> AnalysisSnapshot:
        with self._lock:
            self._boulder_id = None
            self._series = Series()
            snapshot = self._recompute_locked(self._settings.threshold)
        self._notify(snapshot)
        return snapshot

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        with self._lock:
            listener_id = self._next_listener_id
            self._next_listener_id += 1
            self._listeners[listener_id] = listener

        def _unsubscribe() -> None:
            with self._lock:
                self._listeners.pop(listener_id, None)
                self._delivered.pop(listener_id, None)

        return _unsubscribe

from __future__ import annotations

from math import inf, nan

import pytest
from builders import (
    EXAMPLE_MAGNITUDE,
    EXAMPLE_TIME,
    make_climb_series,
    make_random_series,
    make_series,
)
from climbsense_core.dynamics import START_DYNAMICS
from climbsense_core.move_detector import (
    MIN_MOVE_GAP_S,
    START_FALLBACK_ACCELERATION,
    detect,
)
from climbsense_core.series import Series

# -- reference scenarios ------------------------------------------------------


def test_reference_climb_detects_two_peaks(reference_series: Series) -> None:
    moves = detect(reference_series, 15.0, 0.5)

    assert [(m.index, m.time, m.raw_acceleration) for m in moves] == [
        (1, 0.0, 9.8),
        (2, 2.0, 25.0),
        (3, 4.0, 30.0),
    ]


def test_reference_climb_above_every_peak_returns_only_start(reference_series: Series) -> None:
    moves = detect(reference_series, 35.0)
    assert len(moves) == 1
    assert moves[0].index == 1
    assert moves[0].time == 0.0
    assert moves[0].raw_acceleration == 9.8


def test_flat_signal_has_no_strict_peaks() -> None:
    moves = detect(make_series([5.0] * 6), 4.0)
    assert len(moves) == 1


def test_reference_moves_carry_dynamics_and_crux(reference_series: Series) -> None:
    start, first, second = detect(reference_series, 15.0)
    assert start.dynamics == START_DYNAMICS
    assert start.is_crux is False
    # 25 / 20 and 30 / 20 both saturate.
    assert first.dynamics == 1.0
    assert second.dynamics == 1.0
    # crux above 15 * 1.5 = 22.5
    assert first.is_crux is True
    assert second.is_crux is True


def test_divisor_is_passed_through_to_dynamics(reference_series: Series) -> None:
    _, first, second = detect(reference_series, 15.0, normalization_divisor=50.0)
    assert first.dynamics == pytest.approx(0.5)
    assert second.dynamics == pytest.approx(0.6)


# -- degenerate input ---------------------------------------------------------


@pytest.mark.parametrize(
    "series",
    [
        None,
        Series(),
        Series.from_columns(None, None),
        Series.from_columns([], []),
    ],
)
def test_missing_or_empty_series_returns_fallback_start(series: Series | None) -> None:
    moves = detect(series, 12.0)
    assert len(moves) == 1
    assert moves[0].index == 1
    assert moves[0].time == 0.0
    assert moves[0].raw_acceleration == START_FALLBACK_ACCELERATION


def test_short_series_has_no_interior_samples() -> None:
    assert len(detect(make_series([1.0, 50.0]), 0.0)) == 1
    moves = detect(make_series([50.0]), 0.0)
    assert len(moves) == 1
    assert moves[0].raw_acceleration == 50.0


def test_start_move_uses_first_sample_even_when_zero() -> None:
    moves = detect(make_series([0.0, 1.0, 0.0]), 10.0)
    assert moves[0].raw_acceleration == 0.0


def test_endpoints_are_never_peaks() -> None:
    moves = detect(make_series([40.0, 1.0, 1.0, 1.0, 40.0]), 10.0)
    assert len(moves) == 1


def test_plateau_peak_is_rejected() -> None:
    moves = detect(make_series([1.0, 20.0, 20.0, 1.0]), 10.0)
    assert len(moves) == 1


def test_sample_equal_to_threshold_is_not_a_move() -> None:
    moves = detect(make_series([1.0, 15.0, 1.0]), 15.0)
    assert len(moves) == 1


# -- non-finite data ----------------------------------------------------------


def test_non_finite_samples_never_become_moves() -> None:
    magnitude = [1.0, nan, 20.0, 1.0, inf, 1.0, 20.0, 1.0]
    series = Series.from_columns([float(i) for i in range(8)], magnitude)
    moves = detect(series, 10.0)
    # t=2 sits next to NaN (comparison is false), t=4 is +Inf; only t=6 survives.
    assert [m.time for m in moves] == [0.0, 6.0]


def test_nan_first_sample_falls_back_for_start_move() -> None:
    moves = detect(make_series([nan, 1.0, 20.0, 1.0]), 10.0)
    assert moves[0].raw_acceleration == START_FALLBACK_ACCELERATION
    assert [m.time for m in moves] == [0.0, 0.5]


def test_nan_threshold_detects_nothing(reference_series: Series) -> None:
    assert len(detect(reference_series, nan)) == 1


def test_non_finite_time_is_skipped() -> None:
    series = Series.from_columns([0.0, nan, 2.0], [1.0, 20.0, 1.0])
    assert len(detect(series, 10.0)) == 1


# -- refractory gap -----------------------------------------------------------


def test_peak_exactly_one_gap_later_is_rejected() -> None:
    # Peaks at 0.25, 0.75 and 1.25 s; 0.75 is exactly 0.5 s after the first.
    moves = detect(make_series([0.0, 20.0, 0.0, 20.0, 0.0, 20.0, 0.0]), 10.0)
    assert [m.time for m in moves] == [0.0, 0.25, 1.25]
    assert [m.index for m in moves] == [1, 2, 3]


def test_custom_gap_is_respected() -> None:
    series = make_series([0.0, 20.0, 0.0, 20.0, 0.0, 20.0, 0.0])
    assert len(detect(series, 10.0, 0.0)) == 4
    assert len(detect(series, 10.0, 2.0)) == 2


def test_gap_is_measured_from_last_accepted_move_only() -> None:
    # The rejected peak at 0.75 s must not push the next acceptance out.
    series = make_series([0.0, 20.0, 0.0, 25.0, 0.0, 20.0, 0.0], dt=0.25)
    moves = detect(series, 10.0, 0.6)
    assert [m.time for m in moves] == [0.0, 0.25, 1.25]


# -- realistic recording ------------------------------------------------------


@pytest.mark.parametrize(("threshold", "expected"), [(12.0, 5), (25.0, 1), (35.0, 0)])
def test_synthetic_climb_move_counts(threshold: float, expected: int) -> None:
    moves = detect(make_climb_series(), threshold)
    assert len(moves) - 1 == expected


def test_synthetic_climb_moves_land_on_spikes() -> None:
    centers = (2.0, 5.0, 8.5, 12.0, 16.0)
    moves = detect(make_climb_series(), 12.0)
    for move, center in zip(moves[1:], centers, strict=True):
        assert abs(move.time - center) <= 0.2


# -- properties ---------------------------------------------------------------


@pytest.mark.parametrize("seed", range(8))
def test_detection_is_deterministic(seed: int) -> None:
    series = make_random_series(seed)
    assert detect(series, 20.0) == detect(series, 20.0)


@pytest.mark.parametrize("seed", range(8))
def test_output_is_never_empty_and_starts_at_origin(seed: int) -> None:
    series = make_random_series(seed)
    for threshold in (0.0, 10.0, 39.0, 100.0):
        moves = detect(series, threshold)
        assert len(moves) >= 1
        assert (moves[0].index, moves[0].time) == (1, 0.0)


@pytest.mark.parametrize("seed", range(8))
def test_gap_invariant_and_time_order(seed: int) -> None:
    moves = detect(make_random_series(seed), 15.0)
    detected = moves[1:]
    for prev, nxt in zip(detected, detected[1:]):
        assert nxt.time - prev.time > MIN_MOVE_GAP_S
    assert [m.index for m in moves] == list(range(1, len(moves) + 1))


@pytest.mark.parametrize("seed", range(8))
def test_threshold_monotonicity(seed: int) -> None:
    series = make_random_series(seed)
    counts = [len(detect(series, float(threshold))) for threshold in range(0, 42, 2)]
    assert all(later <= earlier for earlier, later in zip(counts, counts[1:]))


def test_detection_does_not_mutate_input() -> None:
    series = Series.from_columns(list(EXAMPLE_TIME), list(EXAMPLE_MAGNITUDE))
    before = (series.time, series.magnitude)
    detect(series, 15.0)
    assert (series.time, series.magnitude) == before

"""Shared fixtures for the climbsense test suite."""

from __future__ import annotations

import pytest
from builders import example_series
from climbsense.analysis_store import MoveAnalysisStore
from climbsense.boulder_config import BoulderConfigStore
from climbsense_core.series import Series


@pytest.fixture
def reference_series() -> Series:
    return example_series()


@pytest.fixture
def config_store() -> BoulderConfigStore:
    return BoulderConfigStore()


@pytest.fixture
def analysis_store(config_store: BoulderConfigStore) -> MoveAnalysisStore:
    return MoveAnalysisStore(config_store)

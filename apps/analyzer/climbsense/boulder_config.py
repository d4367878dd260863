from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from threading import RLock
from typing import Any

from .analysis_settings import sanitize_threshold
from .constants import DEFAULT_THRESHOLD_MPS2, MAX_BOULDER_NAME_LEN, MAX_BOULDER_NOTES_LEN

LOGGER = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(UTC)


def normalize_boulder_id(boulder_id: int | str) -> str:
    text = str(boulder_id).strip()
    if not text:
        raise ValueError("Boulder id must not be empty")
    return text


def _clean_text(value: Any, limit: int) -> str | None:
    if value is None:
        return None
    text = str(value).strip()[:limit]
    return text or None


@dataclass(slots=True)
class BoulderConfig:
    id: str
    name: str
    threshold: float = DEFAULT_THRESHOLD_MPS2
    grade: str | None = None
    notes: str | None = None
    last_modified: datetime = field(default_factory=_now)

    @classmethod
    def default(cls, boulder_id: str, name: str | None = None) -> BoulderConfig:
        label = _clean_text(name, MAX_BOULDER_NAME_LEN)
        return cls(id=boulder_id, name=label or f"Boulder {boulder_id}")

    def copy(self) -> BoulderConfig:
        return BoulderConfig(
            id=self.id,
            name=self.name,
            threshold=self.threshold,
            grade=self.grade,
            notes=self.notes,
            last_modified=self.last_modified,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "threshold": self.threshold,
            "grade": self.grade,
            "notes": self.notes,
            "lastModified": self.last_modified.isoformat(),
        }


class BoulderConfigStore:
    """Per-boulder detection thresholds and metadata, kept in memory.

    Every getter returns copies so callers can never mutate stored state.
    """

    def __init__(self, default_threshold: float = DEFAULT_THRESHOLD_MPS2) -> None:
        self._lock = RLock()
        self._default_threshold = sanitize_threshold(default_threshold)
        self._configs: dict[str, BoulderConfig] = {}

    def _get_or_create(self, boulder_id: str, name: str | None = None) -> BoulderConfig:
        config = self._configs.get(boulder_id)
        if config is None:
            config = BoulderConfig.default(boulder_id, name)
            config.threshold = self._default_threshold
            self._configs[boulder_id] = config
        return config

    def get_config(self, boulder_id: int | str, name: str | None = None) -> BoulderConfig:
        key = normalize_boulder_id(boulder_id)
        with self._lock:
            return self._get_or_create(key, name).copy()

    def get_threshold(self, boulder_id: int | str) -> float:
        key = normalize_boulder_id(boulder_id)
        with self._lock:
            config = self._configs.get(key)
            return config.threshold if config is not None else self._default_threshold

    def set_threshold(self, boulder_id: int | str, threshold: float) -> float:
        key = normalize_boulder_id(boulder_id)
        value = sanitize_threshold(threshold)
        with self._lock:
            config = self._get_or_create(key)
            if config.threshold != value:
                LOGGER.info(
                    "Threshold for boulder %s changed %s → %s m/s²",
                    key,
                    config.threshold,
                    value,
                )
            config.threshold = value
            config.last_modified = _now()
            return value

    def update_config(self, boulder_id: int | str, updates: dict[str, Any]) -> BoulderConfig:
        key = normalize_boulder_id(boulder_id)
        with self._lock:
            config = self._get_or_create(key)
            if "threshold" in updates:
                config.threshold = sanitize_threshold(updates["threshold"])
            if "name" in updates:
                name = _clean_text(updates["name"], MAX_BOULDER_NAME_LEN)
                if name:
                    config.name = name
            if "grade" in updates:
                config.grade = _clean_text(updates["grade"], MAX_BOULDER_NAME_LEN)
            if "notes" in updates:
                config.notes = _clean_text(updates["notes"], MAX_BOULDER_NOTES_LEN)
            config.last_modified = _now()
            return config.copy()

    def snapshot(self) -> dict[str, dict[str, Any]]:
        with self._lock:
            return {key: config.to_dict() for key, config in self._configs.items()}

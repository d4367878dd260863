from __future__ import annotations

import logging
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .analysis_settings import DEFAULT_DETECTION_SETTINGS, DetectionSettings, sanitize_settings
from .constants import DYNAMICS_DIVISOR_RADIAL

ANALYZER_DIR = Path(__file__).resolve().parents[1]
"""Root of the ``apps/analyzer/`` package tree."""

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "detection": dict(DEFAULT_DETECTION_SETTINGS),
    "radial": {"normalization_divisor": DYNAMICS_DIVISOR_RADIAL},
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@dataclass(slots=True)
class RadialConfig:
    normalization_divisor: float

    def __post_init__(self) -> None:
        cleaned = sanitize_settings(
            {"normalization_divisor": self.normalization_divisor},
            allowed_keys={"normalization_divisor": DYNAMICS_DIVISOR_RADIAL},
        )
        value = cleaned.get("normalization_divisor", DYNAMICS_DIVISOR_RADIAL)
        if "normalization_divisor" not in cleaned:
            LOGGER.warning(
                "radial.normalization_divisor=%r is invalid; using %s",
                self.normalization_divisor,
                value,
            )
        self.normalization_divisor = value


@dataclass(slots=True)
class AppConfig:
    detection: DetectionSettings
    radial: RadialConfig
    config_path: Path


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a YAML object at the top level.")
        return data


def documented_default_config() -> dict[str, Any]:
    """Return runtime defaults in the shape documented by config.example.yaml."""
    return deepcopy(DEFAULT_CONFIG)


def load_config(config_path: Path | None = None) -> AppConfig:
    path = config_path or (ANALYZER_DIR / "config.yaml")
    path = path.resolve()
    override = _read_config_file(path)
    merged = _deep_merge(DEFAULT_CONFIG, override)

    detection_raw = merged.get("detection")
    if not isinstance(detection_raw, dict):
        raise ValueError("detection must be a mapping of detection settings.")
    unknown = sorted(set(detection_raw) - set(DEFAULT_DETECTION_SETTINGS))
    if unknown:
        LOGGER.warning("Ignoring unknown detection settings in %s: %s", path, ", ".join(unknown))

    radial_raw = merged.get("radial") or {}
    if not isinstance(radial_raw, dict):
        raise ValueError("radial must be a mapping of radial view settings.")
    return AppConfig(
        detection=DetectionSettings.from_dict(detection_raw),
        radial=RadialConfig(
            normalization_divisor=radial_raw.get(
                "normalization_divisor", DYNAMICS_DIVISOR_RADIAL
            ),
        ),
        config_path=path,
    )

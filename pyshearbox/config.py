"""Configuration loading.

Builds validated :class:`~pyshearbox.materials.base.SoilParameters` and
:class:`~pyshearbox.apparatus.config.TestConfig` from a YAML file or an
in-memory mapping::

    soil:
      category: clay
      saturation: dry
      cohesion: 25          # optional, preset value when omitted
      friction_angle: 20    # optional, preset value when omitted
    test:
      normal_stress: 100
      speed: 1.2
      max_displacement: 10  # optional
"""

from __future__ import annotations

import logging
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from pyshearbox.apparatus.config import TestConfig
from pyshearbox.errors import InvalidConfig
from pyshearbox.materials.base import SoilParameters

logger = logging.getLogger(__name__)

_SOIL_KEYS = {"category", "saturation", "cohesion", "friction_angle"}
_TEST_KEYS = {f.name for f in fields(TestConfig)}


def _section(config: Mapping[str, Any], name: str, allowed: set[str]) -> dict[str, Any]:
    section = config.get(name) or {}
    if not isinstance(section, Mapping):
        raise InvalidConfig(f"'{name}' must be a mapping, got {type(section).__name__}")
    unknown = set(section) - allowed
    if unknown:
        raise InvalidConfig(f"Unknown keys in '{name}': {sorted(unknown)}")
    return dict(section)


def _number(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidConfig(f"'{name}' must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidConfig(f"'{name}' must be a number, got {value!r}") from exc


def config_from_dict(config: Mapping[str, Any]) -> tuple[SoilParameters, TestConfig]:
    """Build and validate soil parameters and test configuration.

    Raises:
        InvalidConfig: For unknown or missing keys and out-of-range values.
        InvalidCategory: For an unknown soil category or saturation state.
    """
    unknown = set(config) - {"soil", "test"}
    if unknown:
        raise InvalidConfig(f"Unknown configuration sections: {sorted(unknown)}")

    soil_cfg = _section(config, "soil", _SOIL_KEYS)
    test_cfg = _section(config, "test", _TEST_KEYS)

    if "category" not in soil_cfg:
        raise InvalidConfig("'soil.category' is required")
    soil = SoilParameters.from_category(
        soil_cfg["category"], soil_cfg.get("saturation", "dry")
    )
    overrides = {k: _number(k, soil_cfg[k]) for k in ("cohesion", "friction_angle") if k in soil_cfg}
    soil = replace(soil, **overrides)
    soil.validate()

    missing = {"normal_stress", "speed"} - set(test_cfg)
    if missing:
        raise InvalidConfig(f"Missing keys in 'test': {sorted(missing)}")
    test = TestConfig(**{k: _number(k, v) for k, v in test_cfg.items()})
    test.validate()
    return soil, test


def load_config(path: str | Path) -> tuple[SoilParameters, TestConfig]:
    """Load a YAML configuration file.

    Args:
        path: Path to the YAML file.

    Returns:
        Tuple ``(soil, config)``.
    """
    logger.info(f"Loading configuration from: {path}")
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, Mapping):
        raise InvalidConfig(f"Configuration root must be a mapping, got {type(data).__name__}")
    return config_from_dict(data)

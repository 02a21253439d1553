"""Tests for configuration loading and logging setup."""

import logging

import pytest

from pyshearbox.config import config_from_dict, load_config
from pyshearbox.errors import InvalidCategory, InvalidConfig
from pyshearbox.logging_config import setup_logging
from pyshearbox.materials.base import SoilCategory, Saturation


class TestConfigFromDict:
    def test_preset_defaults(self):
        soil, test = config_from_dict(
            {"soil": {"category": "clay"}, "test": {"normal_stress": 200, "speed": 1.2}}
        )
        assert soil.category is SoilCategory.CLAY
        assert soil.cohesion == 25.0
        assert soil.saturation is Saturation.DRY
        assert test.normal_stress == 200.0
        assert test.max_displacement == 10.0

    def test_overrides(self):
        soil, test = config_from_dict({
            "soil": {"category": "sand", "saturation": "saturated", "cohesion": 5, "friction_angle": 32},
            "test": {"normal_stress": 150, "speed": 0.5, "max_displacement": 5},
        })
        assert soil.saturated
        assert (soil.cohesion, soil.friction_angle) == (5.0, 32.0)
        assert test.max_displacement == 5.0

    def test_unknown_key(self):
        with pytest.raises(InvalidConfig, match="Unknown keys"):
            config_from_dict({"soil": {"category": "sand", "colour": "red"},
                              "test": {"normal_stress": 100, "speed": 1}})

    def test_unknown_section(self):
        with pytest.raises(InvalidConfig):
            config_from_dict({"soil": {"category": "sand"}, "output": {}})

    def test_missing_category(self):
        with pytest.raises(InvalidConfig, match="category"):
            config_from_dict({"soil": {}, "test": {"normal_stress": 100, "speed": 1}})

    def test_missing_speed(self):
        with pytest.raises(InvalidConfig, match="speed"):
            config_from_dict({"soil": {"category": "sand"}, "test": {"normal_stress": 100}})

    def test_non_numeric(self):
        with pytest.raises(InvalidConfig):
            config_from_dict({"soil": {"category": "sand"},
                              "test": {"normal_stress": "high", "speed": 1}})

    def test_out_of_range(self):
        with pytest.raises(InvalidConfig):
            config_from_dict({"soil": {"category": "sand"},
                              "test": {"normal_stress": -10, "speed": 1}})

    def test_unknown_category(self):
        with pytest.raises(InvalidCategory):
            config_from_dict({"soil": {"category": "peat"},
                              "test": {"normal_stress": 100, "speed": 1}})


class TestLoadConfig:
    def test_yaml_file(self, tmp_path):
        path = tmp_path / "test.yaml"
        path.write_text(
            "soil:\n"
            "  category: clayeySand\n"
            "test:\n"
            "  normal_stress: 300\n"
            "  speed: 1.2\n",
            encoding="utf-8",
        )
        soil, test = load_config(path)
        assert soil.category is SoilCategory.SANDY_CLAY
        assert test.normal_stress == 300.0

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(InvalidConfig):
            load_config(path)


class TestLogging:
    def test_setup_logging(self, tmp_path):
        log_file = tmp_path / "run.log"
        logger = setup_logging(logging.DEBUG, str(log_file))
        try:
            assert logger.name == "pyshearbox"
            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == 2
            # calling again replaces the handlers instead of adding more
            setup_logging(logging.INFO)
            assert len(logger.handlers) == 1
        finally:
            for handler in list(logger.handlers):
                handler.close()
            logger.handlers.clear()
        assert "Logging initialized at level DEBUG" in log_file.read_text(encoding="utf-8")

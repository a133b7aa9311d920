"""Unit tests for config module."""

import logging
import pytest

from paperfold.config import FoldConfig
from paperfold.errors import ConfigError
from paperfold.scalar import FLOAT, RATIONAL


class TestFoldConfig:
    """Tests for FoldConfig."""

    def test_defaults_are_valid(self):
        """Test the default config is valid."""
        config = FoldConfig()
        assert config.validate() == []
        assert config.domain is RATIONAL
        assert config.quantize_base == 65536
        assert config.level == logging.INFO

    def test_float_domain(self):
        """Test selecting the float domain."""
        assert FoldConfig(number_domain="float").domain is FLOAT

    def test_validate_reports_each_problem(self):
        """Test validation reports every invalid field."""
        config = FoldConfig(number_domain="decimal", quantize_base=0,
                            snap_distance=0.0, log_level="LOUD")
        errors = config.validate()
        assert len(errors) == 4
        assert any("number_domain" in e for e in errors)
        assert any("quantize_base" in e for e in errors)

    def test_validate_rejects_wrong_types(self):
        """Test non-numeric values are reported instead of raising TypeError."""
        config = FoldConfig.from_dict({"quantize_base": "1024", "snap_distance": "tiny"})
        errors = config.validate()
        assert len(errors) == 2
        assert any("quantize_base must be an integer" in e for e in errors)
        with pytest.raises(ConfigError):
            config.check()

    def test_validate_rejects_bool_base(self):
        """Test a boolean is not accepted as a quantization base."""
        assert FoldConfig(quantize_base=True).validate()

    def test_check_raises(self):
        """Test check raises ConfigError."""
        with pytest.raises(ConfigError):
            FoldConfig(outline_width=-1.0).check()

    def test_dict_round_trip(self):
        """Test converting a config to a dict and back."""
        config = FoldConfig(number_domain="float", quantize_base=1024, log_level="DEBUG")
        assert FoldConfig.from_dict(config.to_dict()) == config

    def test_from_dict_fills_defaults(self):
        """Test missing keys fall back to defaults."""
        config = FoldConfig.from_dict({"quantize_base": 8})
        assert config.quantize_base == 8
        assert config.number_domain == "rational"

    def test_save_and_load(self, tmp_path):
        """Test saving and loading a config file."""
        path = tmp_path / "paperfold.json"
        FoldConfig(crease_width=0.05).save(path)
        assert FoldConfig.load(path).crease_width == 0.05

    def test_load_missing_returns_defaults(self, tmp_path):
        """Test loading a missing config returns defaults."""
        assert FoldConfig.load(tmp_path / "missing.json") == FoldConfig()

    def test_load_invalid_json(self, tmp_path):
        """Test loading a broken config file."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            FoldConfig.load(path)

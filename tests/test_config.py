"""
Tests for configuration loading and logging setup.
"""

import logging

import pytest


class TestConfigLoader:
    """Tests for YAML configuration."""

    def test_defaults_match_shipped_yaml(self):
        """Test config/default.yaml agrees with the dataclass defaults."""
        from arrow_blast.utils.config_loader import Config, load_config

        assert load_config() == Config()

    def test_override_file(self, tmp_path):
        """Test an override file wins over defaults, section by section."""
        from arrow_blast.utils.config_loader import load_config

        override = tmp_path / "override.yaml"
        override.write_text("engine:\n  slot_count: 7\ngenerator:\n  colors: [0, 1]\n")
        config = load_config(str(override))

        assert config.engine.slot_count == 7
        assert config.engine.fire_interval == 0.2
        assert config.generator.colors == [0, 1]
        assert config.generator.lengths == [1, 2, 3, 4]

    def test_unknown_keys_ignored(self, tmp_path):
        """Test unknown keys do not break loading."""
        from arrow_blast.utils.config_loader import load_config

        override = tmp_path / "override.yaml"
        override.write_text("engine:\n  turbo: true\nunknown_section:\n  a: 1\n")

        assert load_config(str(override)).engine.slot_count == 5

    def test_missing_override(self, tmp_path):
        """Test a missing override file is an error."""
        from arrow_blast.utils.config_loader import load_config

        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_non_mapping_file(self, tmp_path):
        """Test a YAML file that is not a mapping is rejected."""
        from arrow_blast.utils.config_loader import load_config

        override = tmp_path / "list.yaml"
        override.write_text("- 1\n- 2\n")

        with pytest.raises(ValueError):
            load_config(str(override))

    def test_save_round_trip(self, tmp_path):
        """Test a saved config loads back unchanged."""
        from arrow_blast.utils.config_loader import Config, load_config, save_config

        config = Config()
        config.level.grid_cols = 9
        config.generator.max_arrows = 12
        path = tmp_path / "saved.yaml"
        save_config(config, str(path))

        assert load_config(str(path)) == config

    def test_deep_merge(self):
        """Test nested dictionaries merge instead of being replaced."""
        from arrow_blast.utils.config_loader import _deep_merge

        base = {"a": {"x": 1, "y": 2}, "b": 1}
        merged = _deep_merge(base, {"a": {"y": 3}})

        assert merged == {"a": {"x": 1, "y": 3}, "b": 1}
        assert base["a"]["y"] == 2


class TestLogging:
    """Tests for logging configuration."""

    def test_configure_logging_level(self):
        """Test the root logger takes the configured level."""
        from arrow_blast.utils.config_loader import LoggingConfig
        from arrow_blast.utils.logger_config import configure_logging

        configure_logging(LoggingConfig(level="debug"))

        assert logging.getLogger().level == logging.DEBUG
        configure_logging(LoggingConfig(level="WARNING"))
        assert logging.getLogger().level == logging.WARNING

    def test_log_file(self, tmp_path):
        """Test a log file handler is created when configured."""
        from arrow_blast.utils.config_loader import LoggingConfig
        from arrow_blast.utils.logger_config import configure_logging

        log_file = tmp_path / "logs" / "arrow_blast.log"
        configure_logging(LoggingConfig(level="INFO", log_file=str(log_file)))
        logging.getLogger("arrow_blast.test").info("hello")

        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello" in log_file.read_text()

        configure_logging(LoggingConfig(level="WARNING"))

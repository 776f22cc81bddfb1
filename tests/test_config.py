"""
Tests for Configuration Loading
===============================
"""

from pathlib import Path

import pytest

from marketplace_messages import MessageGenerator
from marketplace_messages.observability.tracer import DEFAULT_MAX_TRACES
from marketplace_messages.runtime.config import DATA_DIR, Config, load_config


class TestDefaults:
    """Test the default configuration."""

    def test_no_path(self):
        """No path gives the bundled defaults."""
        config = load_config()
        assert config == Config.default()
        assert config.messages.default_reply_minutes == 10
        assert config.tracing.enabled is True
        assert config.tracing.max_traces == DEFAULT_MAX_TRACES

    def test_bundled_files_exist(self):
        """Default paths point at shipped data."""
        config = Config.default()
        assert Path(config.catalog.path).exists()
        assert Path(config.catalog.operations_path).exists()
        assert Path(config.templates.path).is_dir()

    def test_missing_file_falls_back(self, tmp_path, caplog):
        """A missing file gives defaults and a warning."""
        config = load_config(str(tmp_path / "missing.yaml"))
        assert config == Config.default()
        assert "not found" in caplog.text


class TestYaml:
    """Test loading from YAML."""

    def test_full_file(self, tmp_path):
        """All sections are read, relative paths resolved."""
        (tmp_path / "catalog").mkdir()
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "catalog:\n"
            "  path: catalog/eClass.json\n"
            "  operations_path: /abs/operations.json\n"
            "templates:\n"
            "  path: templates\n"
            "messages:\n"
            "  default_reply_minutes: 30\n"
            "tracing:\n"
            "  enabled: false\n"
            "  project_name: test-project\n"
            "  max_traces: 16\n"
        )

        config = load_config(str(config_file))

        assert config.catalog.path == str(tmp_path.resolve() / "catalog" / "eClass.json")
        assert config.catalog.operations_path == str(Path("/abs/operations.json"))
        assert config.templates.path == str(tmp_path.resolve() / "templates")
        assert config.messages.default_reply_minutes == 30
        assert config.tracing.enabled is False
        assert config.tracing.project_name == "test-project"
        assert config.tracing.max_traces == 16

    def test_partial_file(self, tmp_path):
        """Missing sections keep their defaults."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("messages:\n  default_reply_minutes: 5\n")

        config = load_config(str(config_file))

        assert config.messages.default_reply_minutes == 5
        assert config.catalog.path == str(DATA_DIR / "catalog" / "eClass.json")

    def test_empty_file(self, tmp_path):
        """An empty file is all defaults."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")
        assert load_config(str(config_file)) == Config.default()


class TestGeneratorFromConfig:
    """Test building a generator from configuration."""

    def test_reply_minutes_applied(self, tmp_path):
        """The configured default offset is used."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("messages:\n  default_reply_minutes: 30\n")

        generator = MessageGenerator.from_config(load_config(str(config_file)))

        assert generator.default_reply_minutes == 30
        assert len(generator.catalog) == 3

    def test_tracing_disabled(self):
        """Disabled tracing keeps no traces."""
        config = Config.default()
        config.tracing.enabled = False
        generator = MessageGenerator.from_config(config)

        generator.generate(message_type="callForProposal", irdi="0173-1#01-AAJ336#002", submodel_values={})

        assert generator.tracer.traces == {}

    def test_tracing_settings_applied(self):
        """Project name and trace limit reach the tracer."""
        config = Config.default()
        config.tracing.project_name = "test-project"
        config.tracing.max_traces = 3

        generator = MessageGenerator.from_config(config)

        assert generator.tracer.project_name == "test-project"
        assert generator.tracer.max_traces == 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

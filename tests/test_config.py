"""Tests for the configuration module."""

import json
import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from classtest.config import (
    ClassTestConfig,
    ExecutionConfig,
    OutputConfig,
    create_example_config,
    get_default_config,
)


class TestOutputConfig:
    """Tests for OutputConfig."""

    def test_default_values(self):
        """Test default values are set correctly."""
        config = OutputConfig()
        assert config.color == "auto"
        assert config.show_summary is True
        assert config.show_durations is False

    def test_color_case_insensitive(self):
        """Test that the color mode is case-insensitive."""
        assert OutputConfig(color="ALWAYS").color == "always"

    def test_color_validation(self):
        """Test that only known color modes are accepted."""
        with pytest.raises(ValidationError):
            OutputConfig(color="sometimes")


class TestExecutionConfig:
    """Tests for ExecutionConfig."""

    def test_default_values(self):
        """Test the default 1..10 priority range."""
        config = ExecutionConfig()
        assert config.priority_min == 1
        assert config.priority_max == 10

    def test_min_must_be_positive(self):
        """Test that priority_min must be at least 1."""
        with pytest.raises(ValueError):
            ExecutionConfig(priority_min=0)

    def test_max_not_below_min(self):
        """Test that the range must not be empty."""
        with pytest.raises(ValueError):
            ExecutionConfig(priority_min=5, priority_max=4)


class TestClassTestConfig:
    """Tests for ClassTestConfig."""

    def test_default_config(self):
        """Test creating a default configuration."""
        config = get_default_config()
        assert config.output.color == "auto"
        assert config.execution.priority_max == 10

    def test_from_file(self):
        """Test loading configuration from a file."""
        config_data = {
            "output": {"color": "never", "show_summary": False},
            "execution": {"priority_max": 5},
        }

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "classtest.json"
            path.write_text(json.dumps(config_data))

            config = ClassTestConfig.from_file(path)
            assert config.output.color == "never"
            assert config.output.show_summary is False
            assert config.execution.priority_max == 5

    def test_from_file_not_found(self):
        """Test loading from non-existent file raises error."""
        with pytest.raises(FileNotFoundError):
            ClassTestConfig.from_file("/nonexistent/path.json")

    def test_to_file(self):
        """Test saving configuration to a file."""
        config = get_default_config()
        config.output.color = "always"

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "config.json"
            config.to_file(path)

            assert path.exists()

            loaded = ClassTestConfig.from_file(path)
            assert loaded.output.color == "always"

    def test_create_example_config(self):
        """Test creating an example configuration file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "example.json"
            result = create_example_config(path)

            assert result == path
            assert path.exists()

            with open(path) as f:
                data = json.load(f)
                assert "output" in data
                assert "execution" in data

    def test_find_and_load_searches_parents(self):
        """Test that the nearest config file up the tree is used."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / ".classtest.json").write_text(json.dumps({"output": {"color": "never"}}))
            nested = root / "a" / "b"
            nested.mkdir(parents=True)

            config = ClassTestConfig.find_and_load(nested)
            assert config.output.color == "never"

    def test_load_or_default(self, tmp_path, monkeypatch):
        """Test falling back to defaults when no config file exists."""
        monkeypatch.setattr(ClassTestConfig, "find_and_load", classmethod(_raise_not_found))

        config = ClassTestConfig.load_or_default(tmp_path)
        assert config == get_default_config()


def _raise_not_found(cls, start_dir=None):
    raise FileNotFoundError("no config")

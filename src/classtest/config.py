"""Configuration management for classtest."""

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

CONFIG_NAMES = ["classtest.json", ".classtest.json"]


class OutputConfig(BaseModel):
    """How run lines are written."""

    color: Literal["auto", "always", "never"] = Field(
        default="auto", description="Color assertion diagnostics (auto = only on terminals)"
    )
    show_summary: bool = Field(default=True, description="Print a summary table after the run (CLI)")
    show_durations: bool = Field(default=False, description="Include per-test durations in the summary")

    @field_validator("color", mode="before")
    @classmethod
    def normalize_color(cls, v):
        if isinstance(v, str):
            return v.lower()
        return v


class ExecutionConfig(BaseModel):
    """Test ordering configuration."""

    priority_min: int = Field(default=1, description="Lowest legal test priority")
    priority_max: int = Field(default=10, description="Highest legal test priority")

    @model_validator(mode="after")
    def validate_range(self) -> "ExecutionConfig":
        if self.priority_min < 1:
            raise ValueError("priority_min must be at least 1")
        if self.priority_max < self.priority_min:
            raise ValueError("priority_max must not be lower than priority_min")
        return self


class ClassTestConfig(BaseModel):
    """Main configuration for classtest."""

    output: OutputConfig = Field(default_factory=OutputConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "ClassTestConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r") as f:
            data = json.load(f)

        return cls.model_validate(data)

    @classmethod
    def find_and_load(cls, start_dir: Path | str | None = None) -> "ClassTestConfig":
        """Find and load configuration file, searching up the directory tree."""
        if start_dir is None:
            start_dir = Path.cwd()
        else:
            start_dir = Path(start_dir)

        current = start_dir.resolve()
        for directory in [current, *current.parents]:
            for name in CONFIG_NAMES:
                config_path = directory / name
                if config_path.exists():
                    return cls.from_file(config_path)

        raise FileNotFoundError(
            "No configuration file found. Create classtest.json or run 'classtest init'"
        )

    @classmethod
    def load_or_default(cls, start_dir: Path | str | None = None) -> "ClassTestConfig":
        """Load the nearest configuration file, or defaults if there is none."""
        try:
            return cls.find_and_load(start_dir)
        except FileNotFoundError:
            return get_default_config()

    def to_file(self, path: Path | str) -> None:
        """Save configuration to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)


def get_default_config() -> ClassTestConfig:
    """Return a default configuration."""
    return ClassTestConfig()


def create_example_config(output_path: Path | str) -> Path:
    """Create an example configuration file."""
    output_path = Path(output_path)
    config = get_default_config()
    config.output.show_durations = True
    config.to_file(output_path)
    return output_path

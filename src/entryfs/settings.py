"""Configuration for entry operations."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

__all__ = ["CONFIG_FILE", "Settings", "load_settings"]

# Default configuration location
CONFIG_FILE = Path.home() / ".entryfs" / "config.yaml"


class Settings(BaseModel):
    """Tunable behavior of the move and copy orchestration."""

    model_config = ConfigDict(populate_by_name=True)

    temp_copies_folder: str = Field(default="TmpCopies", alias="tempCopiesFolder")
    force_move_emulation: bool = Field(default=False, alias="forceMoveEmulation")
    temp_root: Path | None = Field(default=None, alias="tempRoot")
    app_data_root: Path | None = Field(default=None, alias="appDataRoot")

    @classmethod
    def from_file(cls, path: Path) -> Settings:
        """Load settings from a YAML file.

        Args:
            path: Path to the configuration file.

        Returns:
            Parsed Settings.

        Raises:
            FileNotFoundError: If file doesn't exist.
            ValueError: If the YAML is invalid or does not describe a mapping.
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid configuration file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")
        return cls.model_validate(data)


def load_settings(path: Path | None = None) -> Settings:
    """Load settings, falling back to defaults.

    Args:
        path: Explicit configuration file. When None, the default file is
            used if it exists.

    Returns:
        Loaded or default Settings.
    """
    if path is not None:
        return Settings.from_file(path)
    if CONFIG_FILE.exists():
        return Settings.from_file(CONFIG_FILE)
    return Settings()

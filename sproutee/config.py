"""Loading, validating and saving the sproutee.json configuration file."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

CONFIG_FILE_NAME = "sproutee.json"


class ConfigError(Exception):
    """Raised when a configuration cannot be found, read, parsed or validated."""


@dataclass
class Config:
    """Settings that control which files are copied into new worktrees."""

    copy_files: list[str] | None = field(default_factory=list)

    def validate(self) -> None:
        """Raise ConfigError if a required field is missing."""
        if self.copy_files is None:
            raise ConfigError("copy_files field is required")

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as a JSON-ready mapping."""
        return {"copy_files": None if self.copy_files is None else list(self.copy_files)}

    @classmethod
    def from_dict(cls, data: Any) -> Config:
        """Build a configuration from decoded JSON data.

        A missing or null ``copy_files`` is kept as ``None`` so that
        :meth:`validate` can report it.
        """
        if not isinstance(data, dict):
            raise ConfigError(
                f"cannot decode {type(data).__name__} into a configuration object"
            )
        copy_files = data.get("copy_files")
        if copy_files is None:
            return cls(copy_files=None)
        if not isinstance(copy_files, list) or not all(
            isinstance(item, str) for item in copy_files
        ):
            raise ConfigError("copy_files must be a list of strings")
        return cls(copy_files=list(copy_files))


def default_config() -> Config:
    """Return a configuration with no files to copy."""
    return Config(copy_files=[])


def find_config_file(start_dir: str | os.PathLike[str]) -> Path:
    """Search ``start_dir`` and its ancestors for the configuration file."""
    current = Path(os.path.abspath(start_dir))
    while True:
        candidate = current / CONFIG_FILE_NAME
        if candidate.exists():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    raise ConfigError(f"configuration file '{CONFIG_FILE_NAME}' not found")


def load_config(config_path: str | os.PathLike[str]) -> Config:
    """Read, parse and validate the configuration file at ``config_path``."""
    try:
        text = Path(config_path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"failed to read config file: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"failed to parse config file: {exc}") from exc

    try:
        config = Config.from_dict(data)
    except ConfigError as exc:
        raise ConfigError(f"failed to parse config file: {exc}") from exc

    try:
        config.validate()
    except ConfigError as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc

    return config


def load_config_from_current_dir() -> Config:
    """Find the configuration file from the working directory upwards and load it."""
    return load_config(find_config_file(Path.cwd()))


def save_config(config: Config, config_path: str | os.PathLike[str]) -> None:
    """Validate ``config`` and write it as indented JSON to ``config_path``."""
    try:
        config.validate()
    except ConfigError as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc

    text = json.dumps(config.to_dict(), indent=2, ensure_ascii=False)
    try:
        Path(config_path).write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"failed to write config file: {exc}") from exc


def create_default_config_file(config_path: str | os.PathLike[str]) -> None:
    """Write a default configuration, refusing to overwrite an existing file."""
    if Path(config_path).exists():
        raise ConfigError(f"configuration file already exists: {config_path}")
    save_config(default_config(), config_path)
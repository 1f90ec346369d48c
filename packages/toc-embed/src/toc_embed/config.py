# SPDX-License-Identifier: MIT
"""Embedding configuration loaded from .toc-embed.toml."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .errors import EmbedError

CONFIG_FILE_NAME = ".toc-embed.toml"

DEFAULT_VENDOR_FOLDER = "libs"
DEFAULT_RUNTIME_LIBRARY = "Library"
DEFAULT_RUNTIME_URL = "https://github.com/SanjoSolutions/Library.git"
DEFAULT_SCRIPT_PATTERN = "**/*.lua"
DEFAULT_REGISTRY_FILE = ".gitmodules"

# Fallback first, then one manifest per game client flavor
DEFAULT_FLAVOR_SUFFIXES = ("", "_Mainline", "_Wrath", "_TBC", "_Vanilla")


class ConfigError(EmbedError):
    """Raised when the configuration file is invalid."""

    pass


@dataclass(frozen=True)
class EmbedConfig:
    """Settings shared by every embedding step.

    Attributes:
        vendor_folder: Vendor directory inside an AddOn (also where the
            embeddability marker lives)
        runtime_library: Name of the shared runtime library and marker entry
        runtime_url: Repository URL of the shared runtime library
        script_pattern: Glob used to discover script files in an AddOn
        flavor_suffixes: Manifest name suffixes in priority order
        registry_file: Submodule registry file at the repository root
    """

    vendor_folder: str = DEFAULT_VENDOR_FOLDER
    runtime_library: str = DEFAULT_RUNTIME_LIBRARY
    runtime_url: str = DEFAULT_RUNTIME_URL
    script_pattern: str = DEFAULT_SCRIPT_PATTERN
    flavor_suffixes: tuple[str, ...] = field(default=DEFAULT_FLAVOR_SUFFIXES)
    registry_file: str = DEFAULT_REGISTRY_FILE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EmbedConfig":
        """Create an EmbedConfig from a parsed TOML table.

        Unknown keys are ignored.

        Raises:
            ConfigError: If a known key has a value of the wrong type
        """
        values: dict[str, Any] = {}
        for config_field in fields(cls):
            if config_field.name not in data:
                continue
            value = data[config_field.name]
            if config_field.name == "flavor_suffixes":
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise ConfigError("flavor_suffixes must be a list of strings")
                value = tuple(value)
            elif not isinstance(value, str):
                raise ConfigError(f"{config_field.name} must be a string")
            values[config_field.name] = value
        return cls(**values)

    @classmethod
    def from_file(cls, config_path: str | Path) -> "EmbedConfig":
        """Load configuration from a TOML file.

        Raises:
            ConfigError: If the file is not valid TOML
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax in {path}: {e}") from e

        return cls.from_dict(data)


def repository_root_of(addon_path: str | Path) -> Path:
    """Return the repository root for an AddOn (its grandparent directory)."""
    return Path(addon_path).resolve().parent.parent


def load_config(addon_path: str | Path) -> EmbedConfig:
    """Load the configuration for an AddOn.

    Reads .toc-embed.toml from the repository root when it exists,
    otherwise returns the defaults.
    """
    config_path = repository_root_of(addon_path) / CONFIG_FILE_NAME
    if config_path.exists():
        return EmbedConfig.from_file(config_path)
    return EmbedConfig()

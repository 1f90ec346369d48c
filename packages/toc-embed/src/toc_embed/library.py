# SPDX-License-Identifier: MIT
"""Discovery of the libraries vendored into an AddOn."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from .config import EmbedConfig
from .errors import EmbedError
from .manifest import Manifest
from .version import InvalidVersionError, Version, parse_version
from .variants import list_existing_manifests

logger = logging.getLogger(__name__)

VERSION_FIELD = "Version"


class LibraryVersionError(EmbedError):
    """Raised when a library to embed declares no usable version."""

    def __init__(self, name: str, library_path: Path) -> None:
        self.name = name
        self.library_path = library_path
        super().__init__(
            f'Library "{name}" has no usable "## {VERSION_FIELD}:" directive in {library_path}.'
        )


@dataclass(frozen=True)
class Library:
    """An embedded library.

    Attributes:
        name: Library name (its directory name in the vendor folder)
        version: Version declared by the library's manifest
        path: Directory of the vendored copy
    """

    name: str
    version: Version
    path: Path


def read_library_version(library_path: str | Path, config: EmbedConfig | None = None) -> Version | None:
    """Return the version declared by the first library manifest that has one."""
    config = config or EmbedConfig()
    for manifest_path in list_existing_manifests(library_path, config.flavor_suffixes):
        declared = Manifest.read(manifest_path).field(VERSION_FIELD)
        if declared is None:
            continue
        try:
            return parse_version(declared)
        except InvalidVersionError as e:
            logger.warning("%s: %s", manifest_path.name, e)
            return None
    return None


def discover_libraries(addon_path: str | Path, config: EmbedConfig | None = None) -> list[Library]:
    """List the libraries in an AddOn's vendor folder, sorted by name.

    The shared runtime library is not a library in this sense and is left
    out, as are directories without a declared version.
    """
    config = config or EmbedConfig()
    vendor_path = Path(addon_path) / config.vendor_folder
    if not vendor_path.is_dir():
        return []

    libraries: list[Library] = []
    for entry in sorted(vendor_path.iterdir(), key=lambda p: p.name):
        if not entry.is_dir() or entry.name == config.runtime_library:
            continue
        version = read_library_version(entry, config)
        if version is None:
            logger.warning("Skipping %s: no usable %s directive", entry.name, VERSION_FIELD)
            continue
        libraries.append(Library(name=entry.name, version=version, path=entry))
    return libraries


def library_versions(libraries: list[Library]) -> Mapping[str, Version]:
    """Build a read-only name-to-version lookup."""
    return MappingProxyType({library.name: library.version for library in libraries})


def require_library_versions(
    addon_path: str | Path,
    names: list[str],
    config: EmbedConfig | None = None,
) -> Mapping[str, Version]:
    """Read the versions of the sibling libraries about to be embedded.

    Raises:
        LibraryVersionError: If a library has no manifest with a valid version
    """
    config = config or EmbedConfig()
    addons_path = Path(addon_path).resolve().parent
    versions = {}
    for name in names:
        library_path = addons_path / name
        version = read_library_version(library_path, config)
        if version is None:
            raise LibraryVersionError(name, library_path)
        versions[name] = version
    return MappingProxyType(versions)

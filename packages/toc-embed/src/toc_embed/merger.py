# SPDX-License-Identifier: MIT
"""Merging embedded libraries' load-file lists into a parent manifest."""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path

from .manifest import Manifest
from .variants import find_library_manifest

logger = logging.getLogger(__name__)

POSIX_SEPARATOR = "/"
WINDOWS_SEPARATOR = "\\"


def path_separator_of(includes: list[str]) -> str:
    """Return the separator style used by existing includes ("/" if none)."""
    if any(WINDOWS_SEPARATOR in include for include in includes):
        return WINDOWS_SEPARATOR
    return POSIX_SEPARATOR


def relativize_includes(
    includes: list[str],
    embedded_manifest_path: str | Path,
    parent_manifest_path: str | Path,
    separator: str = POSIX_SEPARATOR,
) -> list[str]:
    """Rewrite an embedded manifest's includes relative to the parent manifest.

    Each include is resolved against the embedded manifest's directory and
    then made relative to the parent manifest's directory.
    """
    embedded_dir = Path(embedded_manifest_path).resolve().parent.as_posix()
    parent_dir = Path(parent_manifest_path).resolve().parent.as_posix()

    relativized = []
    for include in includes:
        normalized = include.replace(WINDOWS_SEPARATOR, POSIX_SEPARATOR)
        resolved = posixpath.normpath(posixpath.join(embedded_dir, normalized))
        relative = posixpath.relpath(resolved, parent_dir)
        relativized.append(relative.replace(POSIX_SEPARATOR, separator))
    return relativized


def merge_includes(*include_sets: list[str]) -> list[str]:
    """Concatenate include lists and drop repeated entries.

    Pass the embedded libraries' sets first and the parent's own includes
    last, so library code loads before the code that depends on it. The
    first occurrence of a path wins.
    """
    return list(dict.fromkeys(include for includes in include_sets for include in includes))


def includes_for_embeds(
    parent_manifest_path: str | Path,
    library_paths: list[Path],
    flavor_suffix: str = "",
    separator: str = POSIX_SEPARATOR,
) -> list[list[str]]:
    """Read and relativize the includes of each embedded library.

    Libraries are visited in the given order. A library without a manifest
    for the flavor (or a fallback manifest) contributes nothing.
    """
    include_sets = []
    for library_path in library_paths:
        library_manifest_path = find_library_manifest(library_path, flavor_suffix)
        if library_manifest_path is None:
            logger.warning("No manifest found for embedded library %s", library_path.name)
            continue
        library_manifest = Manifest.read(library_manifest_path)
        include_sets.append(
            relativize_includes(
                library_manifest.includes,
                library_manifest_path,
                parent_manifest_path,
                separator,
            )
        )
    return include_sets

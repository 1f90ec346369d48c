# SPDX-License-Identifier: MIT
"""Manifest file name variants, one per supported game client flavor."""

from __future__ import annotations

from pathlib import Path

from .config import DEFAULT_FLAVOR_SUFFIXES

MANIFEST_EXTENSION = ".toc"


def addon_name_of(addon_path: str | Path) -> str:
    """Return an AddOn's name, which is its directory name."""
    return Path(addon_path).resolve().name


def manifest_file_name(addon_name: str, flavor_suffix: str = "") -> str:
    """Build a manifest file name, e.g. ``MyAddOn_Wrath.toc``."""
    return f"{addon_name}{flavor_suffix}{MANIFEST_EXTENSION}"


def manifest_file_names(
    addon_name: str,
    flavor_suffixes: tuple[str, ...] = DEFAULT_FLAVOR_SUFFIXES,
) -> list[str]:
    """Return every manifest file name an AddOn may have, in priority order."""
    return [manifest_file_name(addon_name, suffix) for suffix in flavor_suffixes]


def list_existing_manifests(
    addon_path: str | Path,
    flavor_suffixes: tuple[str, ...] = DEFAULT_FLAVOR_SUFFIXES,
) -> list[Path]:
    """Return the manifests that exist for an AddOn, in priority order.

    Missing flavor variants are simply left out.
    """
    return [path for _, path in list_existing_manifest_variants(addon_path, flavor_suffixes)]


def list_existing_manifest_variants(
    addon_path: str | Path,
    flavor_suffixes: tuple[str, ...] = DEFAULT_FLAVOR_SUFFIXES,
) -> list[tuple[str, Path]]:
    """Like list_existing_manifests, but paired with each manifest's flavor suffix."""
    path = Path(addon_path)
    addon_name = addon_name_of(path)
    variants = []
    for suffix in flavor_suffixes:
        candidate = path / manifest_file_name(addon_name, suffix)
        if candidate.is_file():
            variants.append((suffix, candidate))
    return variants


def find_library_manifest(
    library_path: str | Path,
    flavor_suffix: str = "",
) -> Path | None:
    """Locate a library's manifest for a flavor, falling back to the fallback variant."""
    path = Path(library_path)
    library_name = path.name
    for suffix in dict.fromkeys((flavor_suffix, "")):
        candidate = path / manifest_file_name(library_name, suffix)
        if candidate.is_file():
            return candidate
    return None

# SPDX-License-Identifier: MIT
"""Decide which declared dependencies can be embedded.

A dependency is embeddable when its sibling AddOn directory itself embeds
the shared runtime library, i.e. ``../<dependency>/libs/Library`` exists.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .config import EmbedConfig
from .manifest import Manifest
from .variants import list_existing_manifests


def is_embeddable(
    addon_path: str | Path,
    dependency_name: str,
    config: EmbedConfig | None = None,
) -> bool:
    """Check whether a dependency is structured as an embeddable library."""
    config = config or EmbedConfig()
    dependency_path = Path(addon_path).resolve().parent / dependency_name
    return (dependency_path / config.vendor_folder / config.runtime_library).exists()


def embeddable_dependencies_of(
    addon_path: str | Path,
    manifest_path: str | Path,
    config: EmbedConfig | None = None,
) -> list[str]:
    """Return the embeddable dependencies declared by one manifest."""
    manifest = Manifest.read(manifest_path)
    return [
        dependency
        for dependency in manifest.dependencies
        if is_embeddable(addon_path, dependency, config)
    ]


def classify_embeddable(
    addon_path: str | Path,
    config: EmbedConfig | None = None,
) -> list[str]:
    """Return the embeddable dependencies over all manifest variants.

    Variants are read concurrently; the result keeps the first-seen order
    of the variant priority order and contains each name once.
    """
    config = config or EmbedConfig()
    manifest_paths = list_existing_manifests(addon_path, config.flavor_suffixes)
    if not manifest_paths:
        return []

    with ThreadPoolExecutor(max_workers=len(manifest_paths)) as executor:
        per_manifest = list(
            executor.map(
                lambda manifest_path: embeddable_dependencies_of(addon_path, manifest_path, config),
                manifest_paths,
            )
        )

    return list(dict.fromkeys(name for names in per_manifest for name in names))

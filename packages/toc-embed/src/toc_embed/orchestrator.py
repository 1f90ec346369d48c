# SPDX-License-Identifier: MIT
"""End-to-end embedding of library dependencies into an AddOn.

The run goes through these stages, in order:
1. Classify the declared dependencies that are embeddable libraries
   (stop here if there are none)
2. Vendor them, plus the shared runtime library, as submodules
3. Merge the embedded libraries' load-file lists into every manifest
4. Inject acquisition statements into the AddOn's own scripts
5. Remove the embedded libraries from the manifests' dependency lists

Running it again on an AddOn whose dependencies are already embedded does
nothing, because the embedded libraries are no longer declared as
dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping

from .classifier import classify_embeddable
from .config import EmbedConfig, repository_root_of
from .injector import ScriptRewriteResult, rewrite_script
from .library import Library, discover_libraries, library_versions, require_library_versions
from .manifest import Manifest
from .merger import includes_for_embeds, merge_includes, path_separator_of
from .registry import SubmoduleRegistry
from .scanner import find_script_files
from .variants import addon_name_of, list_existing_manifest_variants, list_existing_manifests
from .vcs import GitSubmodules, SourceControl
from .version import Version

logger = logging.getLogger(__name__)


class EmbedStage(str, Enum):
    """Stages of an embedding run."""

    IDLE = "idle"
    CLASSIFY = "classify"
    NOTHING_TO_EMBED = "nothing_to_embed"
    VENDOR_AND_REGISTER = "vendor_and_register"
    REWRITE_MANIFESTS = "rewrite_manifests"
    REWRITE_SCRIPTS = "rewrite_scripts"
    STRIP_DEPENDENCIES = "strip_dependencies"
    DONE = "done"


@dataclass
class EmbedResult:
    """Outcome of an embedding run.

    Attributes:
        addon_name: Name of the AddOn that was processed
        stage: Last stage reached
        embedded: Dependencies that were embedded, in classification order
        runtime_added: Whether the shared runtime library was vendored in this run
        manifests_rewritten: Manifests whose includes or dependencies changed
        scripts_rewritten: Scripts that received acquisition statements
        libraries: Libraries found in the vendor folder after vendoring
    """

    addon_name: str
    stage: EmbedStage = EmbedStage.IDLE
    embedded: list[str] = field(default_factory=list)
    runtime_added: bool = False
    manifests_rewritten: list[Path] = field(default_factory=list)
    scripts_rewritten: list[ScriptRewriteResult] = field(default_factory=list)
    libraries: list[Library] = field(default_factory=list)

    @property
    def nothing_to_embed(self) -> bool:
        return self.stage is EmbedStage.NOTHING_TO_EMBED


def resolve_vendor_urls(
    addon_path: Path,
    dependencies: list[str],
    registry: SubmoduleRegistry,
) -> dict[str, str]:
    """Look up the repository URL of every dependency to embed.

    The AddOn itself must be registered, and so must each dependency's
    sibling directory.

    Raises:
        RepositoryURLNotFoundError: If any of those paths is not registered
    """
    registry.url_for(addon_path)
    addons_path = addon_path.parent
    return {name: registry.url_for(addons_path / name) for name in dependencies}


def vendor_libraries(
    addon_path: Path,
    urls: dict[str, str],
    config: EmbedConfig,
    source_control: SourceControl,
) -> bool:
    """Add the runtime library and every dependency as tracked subtrees.

    Returns True if the runtime library had to be added.
    """
    vendor_path = addon_path / config.vendor_folder
    vendor_path.mkdir(exist_ok=True)

    runtime_added = False
    if not (vendor_path / config.runtime_library).exists():
        source_control.add_subtree(
            config.runtime_url, f"{config.vendor_folder}/{config.runtime_library}"
        )
        runtime_added = True

    for name, url in urls.items():
        source_control.add_subtree(url, f"{config.vendor_folder}/{name}")

    source_control.update_subtrees()
    return runtime_added


def rewrite_manifests(addon_path: Path, embedded: list[str], config: EmbedConfig) -> list[Path]:
    """Prefix each manifest's includes with those of the libraries it embeds."""
    vendor_path = addon_path / config.vendor_folder
    runtime_path = vendor_path / config.runtime_library
    rewritten = []

    for flavor_suffix, manifest_path in list_existing_manifest_variants(
        addon_path, config.flavor_suffixes
    ):
        manifest = Manifest.read(manifest_path)
        declared = set(manifest.dependencies)
        libraries = [name for name in embedded if name in declared]
        if not libraries:
            logger.debug("%s embeds nothing", manifest_path.name)
            continue

        library_paths = [vendor_path / name for name in libraries]
        if runtime_path.is_dir():
            library_paths.insert(0, runtime_path)

        existing = manifest.includes
        include_sets = includes_for_embeds(
            manifest_path,
            library_paths,
            flavor_suffix,
            path_separator_of(existing),
        )
        manifest.with_includes(merge_includes(*include_sets, existing)).write()
        rewritten.append(manifest_path)

    return rewritten


def rewrite_scripts(
    addon_path: Path,
    config: EmbedConfig,
    pinned_versions: Mapping[str, Version] | None = None,
) -> tuple[list[Library], list[ScriptRewriteResult]]:
    """Inject acquisition statements into every non-vendored script.

    Libraries in *pinned_versions* are acquired at that version even when
    their vendored copy declares a different or no version.
    """
    vendor_path = addon_path / config.vendor_folder
    found = {library.name: library for library in discover_libraries(addon_path, config)}
    for name, version in (pinned_versions or {}).items():
        found[name] = Library(name=name, version=version, path=vendor_path / name)
    libraries = sorted(found.values(), key=lambda library: library.name)
    versions = library_versions(libraries)
    if not versions:
        return libraries, []

    addon_name = addon_name_of(addon_path)
    results = []
    for script_path in find_script_files(addon_path, config):
        result = rewrite_script(script_path, addon_name, versions, config.runtime_library)
        if result.modified:
            results.append(result)
    return libraries, results


def strip_dependencies(addon_path: Path, embedded: list[str], config: EmbedConfig) -> list[Path]:
    """Remove embedded libraries from every manifest's dependency list."""
    to_remove = set(embedded)
    rewritten = []
    for manifest_path in list_existing_manifests(addon_path, config.flavor_suffixes):
        manifest = Manifest.read(manifest_path)
        dependencies = manifest.dependencies
        remaining = [name for name in dependencies if name not in to_remove]
        if remaining == dependencies:
            continue
        manifest.with_dependencies(remaining).write()
        rewritten.append(manifest_path)
    return rewritten


def embed_libraries(
    addon_path: str | Path,
    config: EmbedConfig | None = None,
    source_control: SourceControl | None = None,
) -> EmbedResult:
    """Embed an AddOn's embeddable dependencies.

    Args:
        addon_path: AddOn directory
        config: Embedding configuration (defaults when omitted)
        source_control: Vendoring backend (git submodules in the AddOn by default)

    Returns:
        EmbedResult describing what changed

    Raises:
        RepositoryURLNotFoundError: If a repository URL is missing; raised
            before anything is modified
        LibraryVersionError: If a library to embed declares no usable version;
            raised before anything is modified
        SourceControlError: If vendoring fails; earlier steps are not undone
    """
    path = Path(addon_path).resolve()
    config = config or EmbedConfig()
    result = EmbedResult(addon_name=addon_name_of(path))

    result.stage = EmbedStage.CLASSIFY
    embedded = classify_embeddable(path, config)
    if not embedded:
        logger.info("%s: nothing to embed", result.addon_name)
        result.stage = EmbedStage.NOTHING_TO_EMBED
        return result
    result.embedded = embedded
    logger.info("%s: embedding %s", result.addon_name, ", ".join(embedded))

    result.stage = EmbedStage.VENDOR_AND_REGISTER
    registry = SubmoduleRegistry.from_file(repository_root_of(path) / config.registry_file)
    urls = resolve_vendor_urls(path, embedded, registry)
    versions = require_library_versions(path, embedded, config)
    if source_control is None:
        source_control = GitSubmodules(path)
    result.runtime_added = vendor_libraries(path, urls, config, source_control)

    result.stage = EmbedStage.REWRITE_MANIFESTS
    manifests = rewrite_manifests(path, embedded, config)

    result.stage = EmbedStage.REWRITE_SCRIPTS
    result.libraries, result.scripts_rewritten = rewrite_scripts(path, config, versions)

    result.stage = EmbedStage.STRIP_DEPENDENCIES
    for manifest_path in strip_dependencies(path, embedded, config):
        if manifest_path not in manifests:
            manifests.append(manifest_path)
    result.manifests_rewritten = manifests

    result.stage = EmbedStage.DONE
    return result

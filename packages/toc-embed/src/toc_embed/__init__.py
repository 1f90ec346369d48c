# SPDX-License-Identifier: MIT
"""Library embedding for World of Warcraft AddOns.

This package vendors an AddOn's library dependencies as git submodules,
merges their load-file lists into the AddOn's TOC manifests and injects
``Library.retrieve`` statements into the scripts that use them.

Example:
    >>> from toc_embed import embed_libraries, load_config
    >>>
    >>> config = load_config("AddOns/MyAddOn")
    >>> result = embed_libraries("AddOns/MyAddOn", config)
    >>> result.embedded
    ['MyLibrary']
"""

__version__ = "0.1.0"

from .classifier import classify_embeddable, embeddable_dependencies_of, is_embeddable
from .config import ConfigError, EmbedConfig, load_config, repository_root_of
from .errors import EmbedError
from .injector import (
    ScriptRewriteResult,
    acquisition_lines,
    find_global_declaration,
    inject,
    rewrite_script,
)
from .library import (
    Library,
    LibraryVersionError,
    discover_libraries,
    library_versions,
    require_library_versions,
)
from .manifest import (
    Manifest,
    extract_includes,
    parse_dependencies,
    replace_dependencies,
    replace_includes,
)
from .merger import merge_includes, relativize_includes
from .orchestrator import EmbedResult, EmbedStage, embed_libraries
from .registry import RepositoryURLNotFoundError, SubmoduleRegistry, parse_submodules
from .scanner import Usage, find_script_files, scan
from .variants import list_existing_manifests, manifest_file_names
from .vcs import GitSubmodules, SourceControl, SourceControlError
from .version import InvalidVersionError, Version, parse_version

__all__ = [
    # Config
    "EmbedConfig",
    "ConfigError",
    "load_config",
    "repository_root_of",
    "EmbedError",
    # Manifest
    "Manifest",
    "parse_dependencies",
    "replace_dependencies",
    "extract_includes",
    "replace_includes",
    "manifest_file_names",
    "list_existing_manifests",
    # Classifier
    "is_embeddable",
    "embeddable_dependencies_of",
    "classify_embeddable",
    # Merger
    "merge_includes",
    "relativize_includes",
    # Libraries
    "Library",
    "discover_libraries",
    "library_versions",
    "require_library_versions",
    "LibraryVersionError",
    "Version",
    "parse_version",
    "InvalidVersionError",
    # Scripts
    "Usage",
    "scan",
    "find_script_files",
    "acquisition_lines",
    "find_global_declaration",
    "inject",
    "rewrite_script",
    "ScriptRewriteResult",
    # Vendoring
    "SubmoduleRegistry",
    "parse_submodules",
    "RepositoryURLNotFoundError",
    "SourceControl",
    "GitSubmodules",
    "SourceControlError",
    # Orchestrator
    "embed_libraries",
    "EmbedResult",
    "EmbedStage",
]

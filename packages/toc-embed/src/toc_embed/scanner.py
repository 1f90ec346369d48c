# SPDX-License-Identifier: MIT
"""Static detection of library usage in script files.

Library names are matched as plain substrings: a name that is part of a
longer identifier counts as a usage too.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from .config import EmbedConfig
from .files import split_lines


@dataclass(frozen=True)
class Usage:
    """First usage of a library in a script.

    Attributes:
        name: Library name
        line_index: Zero-based index of the line it first appears on
    """

    name: str
    line_index: int


def build_usage_patterns(library_names: list[str]) -> dict[str, re.Pattern[str]]:
    """Build one literal pattern per library name.

    Names are matched separately so that a name which prefixes another
    (AceDB and AceDBOptions) never hides the longer one.
    """
    return {name: re.compile(re.escape(name)) for name in dict.fromkeys(library_names)}


def scan(content: str, library_names: list[str]) -> list[Usage]:
    """Return the libraries a script references, ordered by first appearance."""
    patterns = build_usage_patterns(library_names)
    if not patterns:
        return []

    seen: dict[str, Usage] = {}
    for index, line in enumerate(split_lines(content)):
        hits = []
        for name, pattern in patterns.items():
            if name in seen:
                continue
            match = pattern.search(line)
            if match:
                hits.append((match.start(), -len(name), name))
        for _, _, name in sorted(hits):
            seen[name] = Usage(name=name, line_index=index)
    return list(seen.values())


def find_script_files(addon_path: str | Path, config: EmbedConfig | None = None) -> list[Path]:
    """Return an AddOn's own script files, skipping everything under the vendor folder."""
    config = config or EmbedConfig()
    root = Path(addon_path)
    script_files = []
    for script_path in sorted(root.glob(config.script_pattern)):
        relative = script_path.relative_to(root)
        if relative.parts and relative.parts[0] == config.vendor_folder:
            continue
        if script_path.is_file():
            script_files.append(script_path)
    return script_files

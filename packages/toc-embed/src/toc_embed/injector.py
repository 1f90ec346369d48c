# SPDX-License-Identifier: MIT
"""Injection of library acquisition statements into script files.

For every library a script uses, a block like the following is inserted
right before the AddOn's global declaration (or at the top of the file):

    --- @type LibName
    local LibName = Library.retrieve('LibName', '^1.2.0')
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .config import DEFAULT_RUNTIME_LIBRARY
from .files import atomic_write, join_lines, read_text, split_lines
from .scanner import Usage, scan
from .version import Version

logger = logging.getLogger(__name__)


@dataclass
class ScriptRewriteResult:
    """Result of injecting acquisition statements into one script.

    Attributes:
        path: Script file path
        injected: Library names whose acquisition statements were added
        modified: Whether the file was written
    """

    path: Path
    injected: list[str] = field(default_factory=list)
    modified: bool = False


def acquisition_lines(
    library_name: str,
    version: Version,
    runtime_name: str = DEFAULT_RUNTIME_LIBRARY,
) -> list[str]:
    """Return the two-line acquisition block for one library."""
    return [
        f"--- @type {library_name}",
        f"local {library_name} = {runtime_name}.retrieve('{library_name}', '{version.caret_range}')",
    ]


def is_global_declaration_line(addon_name: str, line: str) -> bool:
    return line == f"{addon_name} = {addon_name} or {{}}"


def find_global_declaration(addon_name: str, lines: list[str]) -> int | None:
    """Return the index of the AddOn's global declaration line, if any."""
    for index, line in enumerate(lines):
        if is_global_declaration_line(addon_name, line):
            return index
    return None


def is_acquired(
    library_name: str,
    lines: list[str],
    runtime_name: str = DEFAULT_RUNTIME_LIBRARY,
) -> bool:
    """Check whether a script already acquires a library."""
    pattern = re.compile(
        rf"^\s*local {re.escape(library_name)} = {re.escape(runtime_name)}\.retrieve\("
        rf"'{re.escape(library_name)}'"
    )
    return any(pattern.match(line) for line in lines)


def inject(
    addon_name: str,
    lines: list[str],
    usages: list[Usage],
    library_versions: Mapping[str, Version],
    runtime_name: str = DEFAULT_RUNTIME_LIBRARY,
) -> list[str]:
    """Insert acquisition statements for *usages* into a script's lines.

    All blocks go in as one spliced chunk surrounded by blank lines, in
    usage order. Returns a new list; *lines* is not modified.
    """
    if not usages:
        return list(lines)

    lines_to_add = [""]
    for usage in usages:
        lines_to_add.extend(
            acquisition_lines(usage.name, library_versions[usage.name], runtime_name)
        )
    lines_to_add.append("")

    anchor = find_global_declaration(addon_name, lines)
    insert_index = anchor if anchor is not None else 0
    return lines[:insert_index] + lines_to_add + lines[insert_index:]


def rewrite_script(
    script_path: str | Path,
    addon_name: str,
    library_versions: Mapping[str, Version],
    runtime_name: str = DEFAULT_RUNTIME_LIBRARY,
) -> ScriptRewriteResult:
    """Scan a script for library usage and write back the injected version.

    Libraries the script already acquires are skipped. The file is left
    untouched when there is nothing to inject.
    """
    path = Path(script_path)
    result = ScriptRewriteResult(path=path)

    content = read_text(path)
    lines = split_lines(content)
    usages = [
        usage
        for usage in scan(content, list(library_versions))
        if not is_acquired(usage.name, lines, runtime_name)
    ]
    if not usages:
        logger.debug("%s: no library usage to inject", path)
        return result

    new_lines = inject(addon_name, lines, usages, library_versions, runtime_name)
    atomic_write(path, join_lines(new_lines))

    result.injected = [usage.name for usage in usages]
    result.modified = True
    logger.debug("%s: injected %s", path, ", ".join(result.injected))
    return result

# SPDX-License-Identifier: MIT
"""Parsing and rewriting of TOC manifest files.

Only two parts of a manifest are modelled: the dependency declaration line
and the ordered list of load-file entries ("includes"). Every other line is
carried through unchanged.

Example:
    ## Interface: 100200
    ## Title: My AddOn
    ## Dependencies: LibA, LibB

    Core.lua
    UI.lua
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from .files import atomic_write, join_lines, read_text, split_lines

DEPENDENCIES_PATTERN = re.compile(r"^## (Dep\w*|RequireDeps): *(.*?) *$")
DEPENDENCY_SEPARATOR = ", "
COMMENT_PREFIX = "##"


def is_comment_line(line: str) -> bool:
    """Check whether a (trimmed) line is a manifest comment or directive."""
    return line.startswith(COMMENT_PREFIX)


def is_load_file_line(line: str) -> bool:
    """Check whether a line names a file to load."""
    trimmed = line.strip()
    return len(trimmed) >= 1 and not is_comment_line(trimmed)


def parse_dependencies(text: str) -> list[str]:
    """Return the names on the first dependency declaration line.

    Returns an empty list when the manifest declares no dependencies or an
    empty dependency line. Stray separators are ignored.
    """
    for line in split_lines(text):
        match = DEPENDENCIES_PATTERN.match(line)
        if match:
            return [name.strip() for name in match.group(2).split(",") if name.strip()]
    return []


def replace_dependencies(text: str, new_names: list[str]) -> str:
    """Rewrite every dependency declaration line to list *new_names*.

    The declaration label (Dependencies, Deps, RequireDeps, ...) is kept.
    Text without a declaration line is returned unchanged.
    """
    lines = split_lines(text)
    replaced = False
    dependency_list = DEPENDENCY_SEPARATOR.join(new_names)
    for index, line in enumerate(lines):
        match = DEPENDENCIES_PATTERN.match(line)
        if match:
            lines[index] = f"## {match.group(1)}: {dependency_list}"
            replaced = True
    if not replaced:
        return text
    return join_lines(lines)


def extract_includes(text: str) -> list[str]:
    """Return the load-file entries of a manifest in load order."""
    return [line.strip() for line in split_lines(text) if is_load_file_line(line)]


def replace_includes(text: str, new_includes: list[str]) -> str:
    """Replace all load-file entries of a manifest.

    The remaining lines keep their order. Trailing blank lines are collapsed
    into exactly one blank separator line before the new entries, and a
    final newline is kept when the original text had one.
    """
    lines = [line for line in split_lines(text) if not is_load_file_line(line)]
    ends_with_newline = text.endswith(("\n", "\r"))

    while lines and lines[-1].strip() == "":
        lines.pop()
    if lines:
        lines.append("")

    lines.extend(new_includes)
    if ends_with_newline:
        lines.append("")
    return join_lines(lines)


def parse_field(text: str, name: str) -> str | None:
    """Return the value of a ``## Name: value`` directive, if present."""
    pattern = re.compile(rf"^## {re.escape(name)}: *(.*?) *$")
    for line in split_lines(text):
        match = pattern.match(line)
        if match:
            return match.group(1)
    return None


@dataclass
class Manifest:
    """A TOC manifest read from disk.

    Attributes:
        path: Location of the manifest file
        text: Current (possibly modified) file content
    """

    path: Path
    text: str

    @classmethod
    def read(cls, path: str | Path) -> "Manifest":
        """Read a manifest file.

        Raises:
            FileNotFoundError: If the manifest doesn't exist
        """
        manifest_path = Path(path)
        return cls(path=manifest_path, text=read_text(manifest_path))

    @property
    def dependencies(self) -> list[str]:
        return parse_dependencies(self.text)

    @property
    def includes(self) -> list[str]:
        return extract_includes(self.text)

    @property
    def directory(self) -> Path:
        return self.path.parent

    def field(self, name: str) -> str | None:
        return parse_field(self.text, name)

    def with_dependencies(self, names: list[str]) -> "Manifest":
        return Manifest(path=self.path, text=replace_dependencies(self.text, names))

    def with_includes(self, includes: list[str]) -> "Manifest":
        return Manifest(path=self.path, text=replace_includes(self.text, includes))

    def write(self) -> None:
        atomic_write(self.path, self.text)

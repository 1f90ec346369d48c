# SPDX-License-Identifier: MIT
"""Submodule registry (.gitmodules) lookup.

Example entry:
    [submodule "AddOns/MyAddOn"]
    	path = AddOns/MyAddOn
    	url = https://github.com/example/MyAddOn.git
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from .errors import EmbedError
from .files import read_text

logger = logging.getLogger(__name__)

SUBMODULE_PATTERN = re.compile(
    r'\[submodule "[^"\r\n]+?"\]\r?\n'
    r"[ \t]*path = (?P<path>[^\r\n]+?)[ \t]*\r?\n"
    r"[ \t]*url = (?P<url>[^\r\n]+?)[ \t]*(?:\r?\n|$)"
)


class RepositoryURLNotFoundError(EmbedError):
    """Raised when no repository URL is registered for a path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f'Couldn\'t find repository url for "{path}".')


def parse_submodules(content: str) -> Mapping[str, str]:
    """Parse registry text into a read-only path-to-url mapping."""
    return MappingProxyType(
        {match.group("path"): match.group("url") for match in SUBMODULE_PATTERN.finditer(content)}
    )


@dataclass(frozen=True)
class SubmoduleRegistry:
    """Repository URLs of the submodules registered at a repository root.

    Attributes:
        root: Repository root the registered paths are relative to
        urls: Registered path to URL mapping
    """

    root: Path
    urls: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_file(cls, registry_path: str | Path) -> "SubmoduleRegistry":
        """Load the registry file; a missing file yields an empty registry."""
        path = Path(registry_path)
        try:
            content = read_text(path)
        except FileNotFoundError:
            logger.debug("No submodule registry at %s", path)
            return cls(root=path.parent.resolve())
        return cls(root=path.parent.resolve(), urls=parse_submodules(content))

    def relative_path(self, path: str | Path) -> str:
        """Return a path relative to the repository root, with "/" separators."""
        return Path(path).resolve().relative_to(self.root).as_posix()

    def url_for(self, path: str | Path) -> str:
        """Return the repository URL registered for a directory.

        Raises:
            RepositoryURLNotFoundError: If the directory is not registered
        """
        relative = self.relative_path(path)
        url = self.urls.get(relative)
        if url is None:
            raise RepositoryURLNotFoundError(relative)
        return url

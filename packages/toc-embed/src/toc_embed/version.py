# SPDX-License-Identifier: MIT
"""Semantic versions of embedded libraries.

Library manifests declare their version in a ``## Version:`` directive:
- MAJOR.MINOR.PATCH, optionally prefixed with "v"
- MAJOR.MINOR (patch defaults to 0)
- Pre-release: -alpha, -beta.2, -rc.1
- Build metadata: +build, +20240101
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .errors import EmbedError

# SemVer 2.0.0 with an optional "v" prefix and an optional patch component
# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
SEMVER_PATTERN = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)"
    r"\.(?P<minor>0|[1-9]\d*)"
    r"(?:\.(?P<patch>0|[1-9]\d*))?"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<buildmetadata>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)

CARET = "^"


class InvalidVersionError(EmbedError):
    """Raised when a version string does not follow semantic versioning."""

    def __init__(self, version: str, message: str = ""):
        self.version = version
        self.message = message or f"Invalid semantic version: {version}"
        super().__init__(self.message)


@dataclass(frozen=True, slots=True)
class Version:
    """A parsed semantic version.

    Attributes:
        major: Major version number (breaking changes)
        minor: Minor version number (new features, backward compatible)
        patch: Patch version number (bug fixes, backward compatible)
        prerelease: Optional pre-release identifier (e.g., "alpha.1", "rc.2")
        build: Optional build metadata (e.g., "build.123", "20240101")
    """

    major: int
    minor: int
    patch: int
    prerelease: Optional[str] = None
    build: Optional[str] = None

    def __str__(self) -> str:
        """Return the canonical string representation of the version."""
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            version += f"-{self.prerelease}"
        if self.build:
            version += f"+{self.build}"
        return version

    @property
    def caret_range(self) -> str:
        """Return the caret-compatible range for this version, e.g. "^1.2.3"."""
        return f"{CARET}{self}"


def parse_version(version_string: str) -> Version:
    """Parse a semantic version string into a Version object.

    Raises:
        InvalidVersionError: If the string does not follow semantic versioning

    Examples:
        >>> parse_version("1.2.3")
        Version(major=1, minor=2, patch=3, prerelease=None, build=None)

        >>> parse_version("v2.0")
        Version(major=2, minor=0, patch=0, prerelease=None, build=None)
    """
    if not isinstance(version_string, str):
        raise InvalidVersionError(
            str(version_string), f"Version must be a string, got {type(version_string).__name__}"
        )

    version_string = version_string.strip()
    if not version_string:
        raise InvalidVersionError(version_string, "Version string cannot be empty")

    match = SEMVER_PATTERN.match(version_string)
    if not match:
        raise InvalidVersionError(version_string)

    return Version(
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch") or 0),
        prerelease=match.group("prerelease"),
        build=match.group("buildmetadata"),
    )

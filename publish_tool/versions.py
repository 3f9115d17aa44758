"""Version parsing and bumping utilities.

Versions are plain MAJOR.MINOR.PATCH triples; prerelease and build
metadata are rejected.
"""

from __future__ import annotations

import re

import semver

from .errors import ParseError
from .models import BumpKind

_VERSION_RE = re.compile(r"\d+\.\d+\.\d+")


def parse_version(version_str: str) -> semver.Version:
    """Parse a version string into a semver.Version object.

    Raises:
        ParseError: If the string is not exactly three dot-separated
            non-negative integers (surrounding whitespace included).
    """
    if not _VERSION_RE.fullmatch(version_str):
        raise ParseError(version_str)
    try:
        return semver.Version.parse(version_str)
    except ValueError as exc:
        # e.g. leading zeros, which semver does not allow
        raise ParseError(version_str, str(exc)) from exc


def parse_bump_kind(name: str | None) -> BumpKind:
    """Map a bump kind name to a BumpKind.

    Unrecognized names fall back to PATCH rather than failing.
    """
    if name is None:
        return BumpKind.PATCH
    try:
        return BumpKind(name.strip().lower())
    except ValueError:
        return BumpKind.PATCH


def bump_version(current: semver.Version, kind: BumpKind | str) -> semver.Version:
    """Return the next version for the given bump kind.

    Examples:
        1.2.3, major → 2.0.0
        1.2.3, minor → 1.3.0
        1.2.3, patch → 1.2.4
    """
    if not isinstance(kind, BumpKind):
        kind = parse_bump_kind(kind)
    if kind is BumpKind.MAJOR:
        return current.bump_major()
    if kind is BumpKind.MINOR:
        return current.bump_minor()
    return current.bump_patch()

"""Reading and writing a module version in the versions file.

The versions file (e.g. gradle/rumpus.versions.toml) is treated as plain
lines of text rather than parsed as TOML, so that a rewrite touches only
the quoted version of one record and leaves every other byte alone:
comments, ordering, indentation and line endings included.

A record line looks like::

    common = "1.4.2"
"""

from __future__ import annotations

import os
import re
import shutil
import tempfile
from pathlib import Path

import semver

from .errors import NotFoundError, ParseError, VersionFileError
from .versions import parse_version


def _record_pattern(module: str) -> re.Pattern[str]:
    return re.compile(rf"^[ \t]*{re.escape(module)}[ \t]*=")


_QUOTED_VALUE = re.compile(r'"([^"\r\n]*)"')


def _read_lines(path: Path) -> list[str]:
    """Read a file as lines with their original line endings.

    Bytes that are not UTF-8 are carried through as surrogates so that
    they are written back unchanged.
    """
    try:
        with open(
            path, encoding="utf-8", errors="surrogateescape", newline=""
        ) as fh:
            return fh.read().splitlines(keepends=True)
    except OSError as exc:
        raise VersionFileError(path, exc) from exc


def _find_record(lines: list[str], module: str, path: Path) -> int:
    """Return the index of the first record line for module."""
    pattern = _record_pattern(module)
    for index, line in enumerate(lines):
        if pattern.match(line):
            return index
    raise NotFoundError(module, path)


def _value_span(line: str, module: str) -> re.Match[str]:
    """Locate the quoted value after the '=' of a record line."""
    after_eq = _record_pattern(module).match(line).end()  # type: ignore[union-attr]
    match = _QUOTED_VALUE.search(line, after_eq)
    if match is None:
        raise ParseError(line.strip(), "expected a double-quoted version")
    return match


def load_version(path: Path, module: str) -> semver.Version:
    """Load the version of module from the versions file.

    Raises:
        NotFoundError: If the file does not exist or has no line for module.
        ParseError: If the value is not a quoted MAJOR.MINOR.PATCH version.
        VersionFileError: If the file cannot be read.
    """
    if not path.is_file():
        raise NotFoundError(module, path)
    lines = _read_lines(path)
    line = lines[_find_record(lines, module, path)]
    return parse_version(_value_span(line, module).group(1))


def store_version(path: Path, module: str, new_version: semver.Version) -> None:
    """Replace the version of module in the versions file.

    Only the quoted value of the first matching line changes. The new
    content goes to a temporary file next to the original which is then
    moved into place, so the file is either fully updated or untouched.

    Raises:
        NotFoundError: If the file does not exist or has no line for module.
        VersionFileError: If the file cannot be read or replaced.
    """
    if not path.is_file():
        raise NotFoundError(module, path)
    lines = _read_lines(path)
    index = _find_record(lines, module, path)
    line = lines[index]
    span = _value_span(line, module)
    lines[index] = f'{line[: span.start(1)]}{new_version}{line[span.end(1) :]}'

    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
    except OSError as exc:
        raise VersionFileError(path, exc) from exc
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(
            fd, "w", encoding="utf-8", errors="surrogateescape", newline=""
        ) as fh:
            fh.write("".join(lines))
            fh.flush()
            os.fsync(fh.fileno())
        shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise VersionFileError(path, exc) from exc
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

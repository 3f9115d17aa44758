"""Exceptions raised by publish-tool.

Every error carries the ``stage`` it was raised from so the CLI can tell
the operator which part of the run failed.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import PublishResult


class PublishToolError(Exception):
    stage = "publish-tool"


class InvalidArgumentError(PublishToolError):
    stage = "arguments"


class InvalidTargetError(InvalidArgumentError):
    stage = "target"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid publish target: {name!r}")


class NotFoundError(PublishToolError):
    stage = "version lookup"

    def __init__(self, module: str, path: Path) -> None:
        self.module = module
        self.path = path
        super().__init__(f"Could not find {module!r} version line in {path}")


class ParseError(PublishToolError):
    stage = "version parse"

    def __init__(self, value: str, reason: str = "not a MAJOR.MINOR.PATCH version") -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid version {value!r}: {reason}")


class VersionFileError(PublishToolError):
    stage = "version store"

    def __init__(self, path: Path, error: OSError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"Could not access {path}: {error}")


class ActionFailure(PublishToolError):
    stage = "publish"

    def __init__(self, result: PublishResult) -> None:
        self.result = result
        failed = result.failed
        detail = failed.message if failed else "unknown failure"
        message = f"{failed.action.title if failed else 'action'} failed: {detail}"
        if result.bumped:
            message += (
                f"\nVersion was already bumped to {result.new_version} and is not"
                " rolled back; re-run the remaining targets manually."
            )
        super().__init__(message)

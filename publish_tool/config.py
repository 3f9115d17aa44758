"""Configuration loading.

Settings come from an optional ``publish-tool.toml`` at the repository
root. Every key has a default matching the Rumpus layout, so a repository
without the file publishes the ``common`` module out of the box::

    module = "common"
    version_file = "gradle/rumpus.versions.toml"
    gradle = "gradlew"
    local_task = "publishToMavenLocal"
    test_task = "publishGprPublicationToGitHubPackagesRepository"
    github_task = "publishGprPublicationToGitHubPackagesRepository"
    local_repository = "~/.m2/repository"
    artifact_path = "com/rumpushub/{module}/{module}/{version}"
"""

from __future__ import annotations

from pathlib import Path
from string import Formatter
from typing import Any

import tomlkit
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from tomlkit.exceptions import ParseError as TOMLParseError

from .errors import InvalidArgumentError

CONFIG_FILENAME = "publish-tool.toml"
GRADLE_WRAPPER = "gradlew"

DEFAULT_REMOTE_TASK = "publishGprPublicationToGitHubPackagesRepository"
ARTIFACT_PATH_FIELDS = frozenset({"module", "version"})


class ToolConfig(BaseModel):
    """Resolved settings for one publish run.

    Attributes:
        root: Repository root; relative paths below are resolved against it.
        module: Gradle module to publish, also the versions file record name.
        version_file: Versions file, relative to root.
        gradle: Gradle launcher, relative to root.
        local_task: Task publishing to the local Maven repository.
        test_task: Task publishing to the test repository.
        github_task: Task publishing to GitHub Packages.
        version_property: Gradle project property carrying the version;
                          defaults to "<module>Version".
        local_repository: Local Maven repository directory.
        artifact_path: Location of published artifacts inside
                       local_repository; {module} and {version} are filled in.
    """

    model_config = ConfigDict(extra="forbid")

    root: Path
    module: str = "common"
    version_file: str = "gradle/rumpus.versions.toml"
    gradle: str = GRADLE_WRAPPER
    local_task: str = "publishToMavenLocal"
    # Both remote targets use the same task unless configured otherwise.
    test_task: str = DEFAULT_REMOTE_TASK
    github_task: str = DEFAULT_REMOTE_TASK
    version_property: str | None = None
    local_repository: str = "~/.m2/repository"
    artifact_path: str = "com/rumpushub/{module}/{module}/{version}"

    @field_validator("artifact_path")
    @classmethod
    def check_artifact_path(cls, value: str) -> str:
        """Only {module} and {version} may appear in the template."""
        try:
            parsed = list(Formatter().parse(value))
        except ValueError as exc:
            raise ValueError(f"malformed template: {exc}") from exc
        fields = {name for _, name, _, _ in parsed if name is not None}
        unknown = sorted(fields - ARTIFACT_PATH_FIELDS)
        if unknown:
            raise ValueError(
                f"unknown placeholder(s) {unknown}; use {{module}} and {{version}}"
            )
        return value

    @property
    def version_path(self) -> Path:
        return self.root / self.version_file

    @property
    def gradle_command(self) -> str:
        return str(self.root / self.gradle)

    @property
    def property_name(self) -> str:
        return self.version_property or f"{self.module}Version"

    def artifact_dir(self, version: str) -> Path:
        """Directory the local Maven publish writes this version to."""
        relative = self.artifact_path.format(module=self.module, version=version)
        return Path(self.local_repository).expanduser() / relative


def find_repo_root(start: Path) -> Path:
    """Find the repository root at or above start.

    The root is the nearest directory holding a publish-tool.toml or a
    Gradle wrapper, which lets the tool run from any subdirectory. Falls
    back to start when neither is found.
    """
    start = start.resolve()
    for candidate in (start, *start.parents):
        if (candidate / CONFIG_FILENAME).is_file():
            return candidate
        if (candidate / GRADLE_WRAPPER).is_file():
            return candidate
    return start


def load_settings(path: Path) -> dict[str, Any]:
    """Read the key/value settings from a publish-tool.toml file."""
    try:
        doc = tomlkit.parse(path.read_text())
    except TOMLParseError as exc:
        raise InvalidArgumentError(f"Invalid {path}: {exc}") from exc
    return doc.unwrap()


def load_config(root: Path, **overrides: Any) -> ToolConfig:
    """Build the ToolConfig for a repository.

    Values from publish-tool.toml are applied over the defaults, then any
    non-None overrides (from the command line) over those.

    Raises:
        InvalidArgumentError: If the settings file is malformed or holds
            unknown keys or values of the wrong type.
    """
    config_path = root / CONFIG_FILENAME
    settings: dict[str, Any] = {}
    if config_path.is_file():
        settings.update(load_settings(config_path))
    settings.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return ToolConfig(**{**settings, "root": root})
    except ValidationError as exc:
        source = config_path if config_path.is_file() else "arguments"
        raise InvalidArgumentError(f"Invalid configuration ({source}): {exc}") from exc

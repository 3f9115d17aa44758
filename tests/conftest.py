"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from publish_tool.config import ToolConfig

VERSIONS_TOML = """\
# Rumpus module versions
[versions]
rumpus = "0.9.0"
common = "1.4.2" # bumped by publish-tool
  commonTest = "0.0.1"
common = "9.9.9"

[libraries]
spring = { module = "org.springframework:spring-core", version = "6.1.0" }
"""


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """Create a temporary Gradle repository with a versions file."""
    versions = tmp_path / "gradle" / "rumpus.versions.toml"
    versions.parent.mkdir(parents=True)
    versions.write_text(VERSIONS_TOML)
    return tmp_path


@pytest.fixture
def versions_file(repo: Path) -> Path:
    return repo / "gradle" / "rumpus.versions.toml"


@pytest.fixture
def config(repo: Path, tmp_path: Path) -> ToolConfig:
    """ToolConfig pointing at the temporary repository."""
    return ToolConfig(root=repo, local_repository=str(tmp_path / "m2"))

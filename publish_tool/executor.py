"""Gradle-backed publish actions.

GradleExecutor turns a PublishAction into a Gradle task invocation and
runs it from the repository root. list_local_artifacts shows what the
local Maven publish produced.
"""

from __future__ import annotations

from typing import Protocol

from .config import ToolConfig
from .models import ActionKind, ActionOutcome, PublishAction, RepositoryScope
from .shell import run


class ActionExecutor(Protocol):
    def execute(self, action: PublishAction, version: str) -> ActionOutcome: ...


class ArtifactLister(Protocol):
    def __call__(self, config: ToolConfig, version: str) -> ActionOutcome: ...


class GradleExecutor:
    """Runs publish actions as Gradle tasks of the configured module."""

    def __init__(self, config: ToolConfig) -> None:
        self.config = config

    def task_for(self, action: PublishAction) -> str:
        if action.kind is ActionKind.PUBLISH_LOCAL:
            task = self.config.local_task
        elif action.kind is ActionKind.PUBLISH_REMOTE:
            if action.scope is RepositoryScope.TEST:
                task = self.config.test_task
            else:
                task = self.config.github_task
        else:
            raise ValueError(f"{action.kind.value} is not a Gradle action")
        return f":{self.config.module}:{task}"

    def command_for(self, action: PublishAction, version: str) -> list[str]:
        """Build the Gradle command line for action.

        Remote publishes pass the version as a project property; the local
        publish uses whatever version the build declares.
        """
        cmd = [self.config.gradle_command, self.task_for(action)]
        if action.kind is ActionKind.PUBLISH_REMOTE:
            cmd.append(f"-P{self.config.property_name}={version}")
        return cmd

    def execute(self, action: PublishAction, version: str) -> ActionOutcome:
        cmd = self.command_for(action, version)
        print(f"  $ {' '.join(cmd)}")
        try:
            result = run(*cmd, check=False, cwd=self.config.root)
        except OSError as exc:
            return ActionOutcome(
                action=action, success=False, message=f"could not run {cmd[0]}: {exc}"
            )
        if result.returncode != 0:
            return ActionOutcome(
                action=action,
                success=False,
                message=f"{cmd[1]} exited with status {result.returncode}",
            )
        return ActionOutcome(action=action, success=True, message=f"{cmd[1]} succeeded")


def list_local_artifacts(config: ToolConfig, version: str) -> ActionOutcome:
    """Print the files the local Maven publish wrote for version.

    A missing or unreadable directory is reported as a failed outcome;
    callers treat it as informational.
    """
    action = PublishAction(kind=ActionKind.LIST_LOCAL)
    try:
        directory = config.artifact_dir(version)
    except (KeyError, IndexError, ValueError) as exc:
        return ActionOutcome(
            action=action,
            success=False,
            message=f"Bad artifact_path {config.artifact_path!r}: {exc!r}",
        )
    try:
        if not directory.is_dir():
            return ActionOutcome(
                action=action, success=False, message=f"No files found in {directory}"
            )
        entries = sorted(directory.iterdir())
        sizes = [entry.stat().st_size if entry.is_file() else 0 for entry in entries]
    except OSError as exc:
        return ActionOutcome(
            action=action, success=False, message=f"Could not list {directory}: {exc}"
        )

    print(f"  {directory}")
    for entry, size in zip(entries, sizes):
        print(f"    {entry.name:<50} {size:>10}")
    return ActionOutcome(
        action=action, success=True, message=f"{len(entries)} files in {directory}"
    )

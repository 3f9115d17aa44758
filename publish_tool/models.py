"""Data models for publish-tool.

These Pydantic models and enums describe what a publish run will do and
what it did.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PublishTarget(str, Enum):
    """Destination selected on the command line."""

    LOCAL = "local"
    TEST = "test"
    GITHUB = "github"
    ALL = "all"


class BumpKind(str, Enum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


class ActionKind(str, Enum):
    PUBLISH_LOCAL = "publish-local"
    PUBLISH_REMOTE = "publish-remote"
    LIST_LOCAL = "list-local"


class RepositoryScope(str, Enum):
    """Which remote repository a remote publish goes to."""

    TEST = "test"
    GITHUB = "github"


class PublishAction(BaseModel):
    """A single step of a publish plan.

    Attributes:
        kind: What the step does.
        scope: Remote repository for PUBLISH_REMOTE steps, None otherwise.
    """

    model_config = ConfigDict(frozen=True)

    kind: ActionKind
    scope: RepositoryScope | None = None

    @property
    def required(self) -> bool:
        """Whether a failure of this step aborts the run.

        Listing local artifacts is informational only.
        """
        return self.kind is not ActionKind.LIST_LOCAL

    @property
    def title(self) -> str:
        if self.kind is ActionKind.PUBLISH_LOCAL:
            return "Publishing to Maven Local"
        if self.kind is ActionKind.LIST_LOCAL:
            return "Published files in Maven Local"
        if self.scope is RepositoryScope.TEST:
            return "Publishing to Local TestRepo"
        return "Publishing to GitHub Packages"


class PublishPlan(BaseModel):
    """Resolved form of a PublishTarget."""

    model_config = ConfigDict(frozen=True)

    should_bump: bool
    actions: tuple[PublishAction, ...]


class ActionOutcome(BaseModel):
    action: PublishAction
    success: bool
    message: str = ""


class PublishResult(BaseModel):
    """Structured report of a publish run.

    Attributes:
        target: The requested target.
        old_version: Version read from the versions file.
        new_version: Version used for publishing; equals old_version when
                     the target does not bump.
        outcomes: One entry per action that ran, in execution order.
    """

    target: PublishTarget
    old_version: str
    new_version: str
    outcomes: list[ActionOutcome] = Field(default_factory=list)

    @property
    def bumped(self) -> bool:
        return self.old_version != self.new_version

    @property
    def failed(self) -> ActionOutcome | None:
        """First required action that failed, if any."""
        for outcome in self.outcomes:
            if outcome.action.required and not outcome.success:
                return outcome
        return None

    @property
    def ok(self) -> bool:
        return self.failed is None

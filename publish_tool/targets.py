"""Publish target resolution.

Each target maps to a fixed, ordered list of actions and a flag saying
whether the version must be bumped first. Only targets that reach GitHub
Packages bump, so every public release gets a fresh version.
"""

from __future__ import annotations

from .errors import InvalidTargetError
from .models import (
    ActionKind,
    PublishAction,
    PublishPlan,
    PublishTarget,
    RepositoryScope,
)

PUBLISH_LOCAL = PublishAction(kind=ActionKind.PUBLISH_LOCAL)
LIST_LOCAL = PublishAction(kind=ActionKind.LIST_LOCAL)
PUBLISH_TEST = PublishAction(kind=ActionKind.PUBLISH_REMOTE, scope=RepositoryScope.TEST)
PUBLISH_GITHUB = PublishAction(
    kind=ActionKind.PUBLISH_REMOTE, scope=RepositoryScope.GITHUB
)

_PLANS: dict[PublishTarget, PublishPlan] = {
    PublishTarget.LOCAL: PublishPlan(
        should_bump=False, actions=(PUBLISH_LOCAL, LIST_LOCAL)
    ),
    PublishTarget.TEST: PublishPlan(should_bump=False, actions=(PUBLISH_TEST,)),
    PublishTarget.GITHUB: PublishPlan(should_bump=True, actions=(PUBLISH_GITHUB,)),
    PublishTarget.ALL: PublishPlan(
        should_bump=True,
        actions=(PUBLISH_LOCAL, PUBLISH_TEST, PUBLISH_GITHUB, LIST_LOCAL),
    ),
}


def parse_target(name: str) -> PublishTarget:
    """Convert a command-line target name into a PublishTarget.

    Names are matched exactly, so "GitHub" or " local" are rejected.

    Raises:
        InvalidTargetError: If name is not one of local, test, github, all.
    """
    try:
        return PublishTarget(name)
    except ValueError:
        raise InvalidTargetError(name) from None


def resolve_target(target: PublishTarget) -> PublishPlan:
    """Return the publish plan for target."""
    return _PLANS[target]

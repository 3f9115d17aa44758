"""Publish pipeline: resolve → read version → bump → publish.

This module orchestrates a publish run:
1. Resolve the target into a plan (bump or not, which actions)
2. Read the module's current version from the versions file
3. Bump and write back the version when the target is a public release
4. Run each action in order, stopping at the first failed publish

Runs are strictly sequential. A version that was bumped and written is
kept even if a later action fails.
"""

from __future__ import annotations

from .config import ToolConfig
from .executor import ActionExecutor, ArtifactLister, GradleExecutor, list_local_artifacts
from .models import ActionKind, ActionOutcome, BumpKind, PublishResult, PublishTarget
from .shell import step
from .targets import parse_target, resolve_target
from .version_store import load_version, store_version
from .versions import bump_version, parse_bump_kind


def run_publish(
    target: PublishTarget | str,
    bump_kind: BumpKind | str | None = BumpKind.PATCH,
    *,
    config: ToolConfig,
    executor: ActionExecutor | None = None,
    lister: ArtifactLister | None = None,
) -> PublishResult:
    """Execute a full publish run.

    Args:
        target: Publish target, or its command-line name.
        bump_kind: Component to bump when the target requires a bump.
        config: Repository settings.
        executor: Runs publish actions; defaults to a GradleExecutor.
        lister: Lists local artifacts; defaults to list_local_artifacts.

    Returns:
        PublishResult with an outcome per action that ran. Check ``ok``
        to see whether every required action succeeded.

    Raises:
        InvalidTargetError: If target is an unknown name. Nothing is read
            or written in that case.
        NotFoundError: If the module has no version line.
        ParseError: If the declared version is malformed.
    """
    if not isinstance(target, PublishTarget):
        target = parse_target(target)
    if not isinstance(bump_kind, BumpKind):
        bump_kind = parse_bump_kind(bump_kind)
    plan = resolve_target(target)
    executor = executor or GradleExecutor(config)
    lister = lister or list_local_artifacts

    step("Reading current version")
    current = load_version(config.version_path, config.module)
    print(f"  {config.module} {current} ({config.version_file})")

    if plan.should_bump:
        new = bump_version(current, bump_kind)
        store_version(config.version_path, config.module, new)
        print(f"  Updated {config.version_file} to version {new}")
        step("Version bumped")
        print(f"  Old version: {current}")
        print(f"  New version: {new}")
    else:
        new = current
        step("Version not bumped")
        print(f"  Publishing to {target.value} does NOT bump the version.")
        print(f"  Using currently declared version: {current}")

    result = PublishResult(
        target=target, old_version=str(current), new_version=str(new)
    )
    version = str(new)
    for action in plan.actions:
        step(action.title)
        outcome: ActionOutcome
        if action.kind is ActionKind.LIST_LOCAL:
            outcome = lister(config, version)
        else:
            outcome = executor.execute(action, version)
        result.outcomes.append(outcome)

        if outcome.success:
            continue
        if action.required:
            print(f"  FAILED: {outcome.message}")
            return result
        print(f"  {outcome.message}")

    step("Done publishing!")
    return result

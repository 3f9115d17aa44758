"""CLI entry point for publish-tool."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn

import click

from publish_tool.config import find_repo_root, load_config
from publish_tool.errors import ActionFailure, InvalidArgumentError, PublishToolError
from publish_tool.models import BumpKind
from publish_tool.pipeline import run_publish
from publish_tool.targets import parse_target
from publish_tool.versions import parse_bump_kind

TARGETS = "local | test | github | all"
BUMP_KINDS = "major | minor | patch"
BUMP_KIND_NAMES = {kind.value for kind in BumpKind}


def _fail(ctx: click.Context, exc: PublishToolError, *, usage: bool = False) -> NoReturn:
    message = f"{exc.stage}: {exc}"
    if usage:
        message += f"\n{ctx.get_usage()}"
    raise click.ClickException(message) from exc


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=f"TARGET: {TARGETS}\n\nBUMP: {BUMP_KINDS} (default: patch)",
)
@click.argument("target", required=False)
@click.argument("bump", required=False)
@click.option(
    "--repo-root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Repository root. Found from the current directory if omitted.",
)
@click.option("--module", default=None, help="Module to publish (default: common).")
@click.version_option(package_name="publish-tool")
@click.pass_context
def cli(
    ctx: click.Context,
    target: str | None,
    bump: str | None,
    repo_root: Path | None,
    module: str | None,
) -> None:
    """Bump a module version and publish it with Gradle.

    Only the github and all targets bump the version, so every public
    release gets a new one.
    """
    if target is None:
        _fail(ctx, InvalidArgumentError("missing publish target"), usage=True)

    try:
        publish_target = parse_target(target)
    except PublishToolError as exc:
        _fail(ctx, exc, usage=True)

    bump_kind = parse_bump_kind(bump)
    if bump is not None and bump.strip().lower() not in BUMP_KIND_NAMES:
        click.echo(f"Warning: unknown bump kind {bump!r}, using patch", err=True)

    try:
        root = repo_root or find_repo_root(Path.cwd())
        config = load_config(root, module=module)
        result = run_publish(publish_target, bump_kind, config=config)
        if not result.ok:
            raise ActionFailure(result)
    except PublishToolError as exc:
        _fail(ctx, exc)


def main(argv: list[str] | None = None) -> None:
    """Console script entry point.

    Every failure, including click usage errors, exits with status 1.
    """
    try:
        rv = cli.main(args=argv, prog_name="publish-tool", standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        sys.exit(1)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
    sys.exit(rv if isinstance(rv, int) else 0)

"""Tests for publish_tool.pipeline."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, call, patch

import pytest

from publish_tool.config import ToolConfig
from publish_tool.errors import InvalidTargetError, NotFoundError, ParseError
from publish_tool.models import ActionOutcome, BumpKind, PublishAction, PublishTarget
from publish_tool.pipeline import run_publish
from publish_tool.targets import LIST_LOCAL, PUBLISH_GITHUB, PUBLISH_LOCAL, PUBLISH_TEST
from publish_tool.version_store import load_version


def _succeed(action: PublishAction, version: str) -> ActionOutcome:
    return ActionOutcome(action=action, success=True, message="ok")


@pytest.fixture
def executor() -> MagicMock:
    """Executor whose actions all succeed."""
    mock = MagicMock()
    mock.execute.side_effect = _succeed
    return mock


@pytest.fixture
def lister() -> MagicMock:
    return MagicMock(
        return_value=ActionOutcome(action=LIST_LOCAL, success=True, message="2 files")
    )


@patch("publish_tool.pipeline.step")
class TestRunPublish:
    """Tests for run_publish()."""

    def test_github_minor_bumps_and_publishes_once(
        self,
        mock_step: MagicMock,
        config: ToolConfig,
        versions_file: Path,
        executor: MagicMock,
        lister: MagicMock,
    ) -> None:
        """common = 1.4.2 published to github with minor becomes 1.5.0."""
        result = run_publish(
            PublishTarget.GITHUB, BumpKind.MINOR, config=config, executor=executor, lister=lister
        )

        assert result.ok
        assert result.old_version == "1.4.2"
        assert result.new_version == "1.5.0"
        assert result.bumped
        assert str(load_version(versions_file, "common")) == "1.5.0"
        executor.execute.assert_called_once_with(PUBLISH_GITHUB, "1.5.0")
        lister.assert_not_called()

    def test_local_does_not_bump(
        self,
        mock_step: MagicMock,
        config: ToolConfig,
        versions_file: Path,
        executor: MagicMock,
        lister: MagicMock,
    ) -> None:
        before = versions_file.read_bytes()

        result = run_publish(
            PublishTarget.LOCAL, BumpKind.MAJOR, config=config, executor=executor, lister=lister
        )

        assert result.ok
        assert not result.bumped
        assert result.new_version == result.old_version == "1.4.2"
        assert versions_file.read_bytes() == before
        executor.execute.assert_called_once_with(PUBLISH_LOCAL, "1.4.2")
        lister.assert_called_once_with(config, "1.4.2")

    def test_test_target_uses_declared_version(
        self,
        mock_step: MagicMock,
        config: ToolConfig,
        versions_file: Path,
        executor: MagicMock,
        lister: MagicMock,
    ) -> None:
        before = versions_file.read_bytes()

        result = run_publish("test", config=config, executor=executor, lister=lister)

        assert result.target is PublishTarget.TEST
        assert versions_file.read_bytes() == before
        executor.execute.assert_called_once_with(PUBLISH_TEST, "1.4.2")

    def test_all_runs_actions_in_order(
        self,
        mock_step: MagicMock,
        config: ToolConfig,
        executor: MagicMock,
        lister: MagicMock,
    ) -> None:
        result = run_publish("all", "major", config=config, executor=executor, lister=lister)

        assert result.new_version == "2.0.0"
        assert executor.execute.call_args_list == [
            call(PUBLISH_LOCAL, "2.0.0"),
            call(PUBLISH_TEST, "2.0.0"),
            call(PUBLISH_GITHUB, "2.0.0"),
        ]
        lister.assert_called_once_with(config, "2.0.0")
        assert [o.action for o in result.outcomes] == [
            PUBLISH_LOCAL,
            PUBLISH_TEST,
            PUBLISH_GITHUB,
            LIST_LOCAL,
        ]

    def test_default_bump_is_patch(
        self, mock_step: MagicMock, config: ToolConfig, executor: MagicMock
    ) -> None:
        result = run_publish("github", config=config, executor=executor)
        assert result.new_version == "1.4.3"

    def test_unknown_bump_kind_is_patch(
        self, mock_step: MagicMock, config: ToolConfig, executor: MagicMock
    ) -> None:
        result = run_publish("github", "enormous", config=config, executor=executor)
        assert result.new_version == "1.4.3"

    def test_invalid_target_has_no_side_effects(
        self,
        mock_step: MagicMock,
        config: ToolConfig,
        versions_file: Path,
        executor: MagicMock,
        lister: MagicMock,
    ) -> None:
        before = versions_file.read_bytes()

        with pytest.raises(InvalidTargetError):
            run_publish("bogus", config=config, executor=executor, lister=lister)

        assert versions_file.read_bytes() == before
        executor.execute.assert_not_called()
        mock_step.assert_not_called()

    def test_failure_aborts_remaining_actions(
        self,
        mock_step: MagicMock,
        config: ToolConfig,
        versions_file: Path,
        executor: MagicMock,
        lister: MagicMock,
    ) -> None:
        """A failed publish stops the run; the bumped version is kept."""

        def fail_test_repo(action: PublishAction, version: str) -> ActionOutcome:
            return ActionOutcome(
                action=action, success=action != PUBLISH_TEST, message="boom"
            )

        executor.execute.side_effect = fail_test_repo

        result = run_publish("all", config=config, executor=executor, lister=lister)

        assert not result.ok
        assert result.failed is not None
        assert result.failed.action == PUBLISH_TEST
        assert executor.execute.call_count == 2
        lister.assert_not_called()
        assert str(load_version(versions_file, "common")) == "1.4.3"

    def test_listing_failure_is_not_fatal(
        self,
        mock_step: MagicMock,
        config: ToolConfig,
        executor: MagicMock,
        lister: MagicMock,
    ) -> None:
        lister.return_value = ActionOutcome(
            action=LIST_LOCAL, success=False, message="No files found"
        )

        result = run_publish("local", config=config, executor=executor, lister=lister)

        assert result.ok
        assert len(result.outcomes) == 2
        assert not result.outcomes[1].success
        assert mock_step.call_args_list[-1] == call("Done publishing!")

    @patch("pathlib.Path.iterdir", side_effect=PermissionError("denied"))
    def test_unreadable_maven_repository_is_not_fatal(
        self, mock_iterdir: MagicMock, mock_step: MagicMock, config: ToolConfig, executor: MagicMock
    ) -> None:
        config.artifact_dir("1.4.2").mkdir(parents=True)

        result = run_publish("local", config=config, executor=executor)

        assert result.ok
        assert not result.outcomes[-1].success
        assert "denied" in result.outcomes[-1].message

    def test_missing_module(
        self, mock_step: MagicMock, repo: Path, executor: MagicMock
    ) -> None:
        config = ToolConfig(root=repo, module="server")
        with pytest.raises(NotFoundError):
            run_publish("github", config=config, executor=executor)
        executor.execute.assert_not_called()

    def test_malformed_version(
        self, mock_step: MagicMock, config: ToolConfig, versions_file: Path, executor: MagicMock
    ) -> None:
        versions_file.write_text('common = "1.4"\n')
        with pytest.raises(ParseError):
            run_publish("github", config=config, executor=executor)
        assert versions_file.read_text() == 'common = "1.4"\n'
        executor.execute.assert_not_called()

    @patch("publish_tool.executor.run")
    def test_default_executor_runs_gradle(
        self, mock_run: MagicMock, mock_step: MagicMock, config: ToolConfig
    ) -> None:
        mock_run.return_value = MagicMock(returncode=0)

        result = run_publish("test", config=config)

        assert result.ok
        args = mock_run.call_args.args
        assert args[0] == config.gradle_command
        assert args[-1] == "-PcommonVersion=1.4.2"

"""Unit tests for the install session state machine."""

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
from agentctl.core.session import InstallSession, SessionResult, SessionState, install_tool
from agentctl.models.install import InstallResult, MethodOption
from agentctl.models.tool import InstallMethod, Platform, TargetTool


def _executor(outcomes: dict[InstallMethod, bool]) -> MagicMock:
    """Build an executor whose results depend on the method."""

    def execute(method: InstallMethod, tool: TargetTool) -> InstallResult:
        success = outcomes[method]
        return InstallResult(
            tool=tool,
            method=method.value,
            success=success,
            requested=method.value,
            error=None if success else f"{method.value} failed",
        )

    executor = MagicMock()
    executor.execute.side_effect = execute
    return executor


def _first_option(options: list[MethodOption]) -> InstallMethod | None:
    return options[0].method


class TestInstallSession:
    """Tests for InstallSession.run."""

    def _session(
        self,
        executor: MagicMock,
        choose: object = _first_option,
        retry: object = lambda result: True,
        tool: TargetTool = TargetTool.CLAUDE_CODE,
    ) -> InstallSession:
        return InstallSession(
            tool,
            executor,
            choose,  # type: ignore[arg-type]
            retry,  # type: ignore[arg-type]
            platform=Platform.LINUX,
            wsl=False,
        )

    def test_first_method_succeeds(self) -> None:
        """A successful first attempt ends the session without prompting to retry."""
        executor = _executor({InstallMethod.CURL: True})
        retry = MagicMock()

        result = self._session(executor, retry=retry).run()

        assert result.state == SessionState.DONE_SUCCESS
        assert result.attempted_methods == ["curl"]
        retry.assert_not_called()

    def test_retry_then_success(self) -> None:
        """After a failure the next remaining method is tried."""
        executor = _executor({InstallMethod.CURL: False, InstallMethod.NPM: True})

        result = self._session(executor).run()

        assert result.success
        assert result.attempted_methods == ["curl", "npm"]

    def test_each_method_attempted_once(self) -> None:
        """Two failing methods, retry accepted once then declined."""
        executor = _executor({InstallMethod.CURL: False, InstallMethod.NPM: False})
        answers = iter([True, False])

        result = self._session(executor, retry=lambda r: next(answers)).run()

        assert result.state == SessionState.DONE_FAILURE
        assert result.attempted_methods == ["curl", "npm"]
        assert executor.execute.call_count == 2

    def test_failed_methods_not_offered_again(self) -> None:
        """The chooser never sees a method that already failed."""
        executor = _executor({m: False for m in InstallMethod})
        seen: list[list[InstallMethod]] = []

        def choose(options: list[MethodOption]) -> InstallMethod | None:
            seen.append([o.method for o in options])
            return options[0].method

        result = self._session(executor, choose=choose).run()

        assert seen == [
            [InstallMethod.CURL, InstallMethod.NPM, InstallMethod.HOMEBREW],
            [InstallMethod.NPM, InstallMethod.HOMEBREW],
            [InstallMethod.HOMEBREW],
        ]
        assert result.state == SessionState.DONE_FAILURE
        assert len(result.attempts) == 3

    def test_effective_method_excluded_after_fallback(self) -> None:
        """A failed fallback excludes the method that actually ran."""
        executor = MagicMock()
        executor.execute.return_value = InstallResult(
            tool=TargetTool.CODEX, method="npm", success=False, requested="curl"
        )
        choices = iter([InstallMethod.CURL, None])
        offered: list[list[InstallMethod]] = []

        def choose(options: list[MethodOption]) -> InstallMethod | None:
            offered.append([o.method for o in options])
            return next(choices)

        self._session(executor, choose=choose, tool=TargetTool.CODEX).run()

        assert InstallMethod.NPM not in offered[1]

    def test_cancel_before_any_attempt(self) -> None:
        """Cancelling the first prompt ends in DONE_CANCELLED."""
        executor = _executor({})

        result = self._session(executor, choose=lambda options: None).run()

        assert result.state == SessionState.DONE_CANCELLED
        assert result.attempts == ()
        executor.execute.assert_not_called()

    def test_cancel_after_failure(self) -> None:
        """Cancelling after a failed attempt ends in DONE_FAILURE."""
        executor = _executor({InstallMethod.CURL: False})
        choices = iter([InstallMethod.CURL, None])

        result = self._session(executor, choose=lambda options: next(choices)).run()

        assert result.state == SessionState.DONE_FAILURE

    def test_declined_retry(self) -> None:
        """Declining the retry ends in DONE_FAILURE."""
        executor = _executor({InstallMethod.CURL: False})

        result = self._session(executor, retry=lambda r: False).run()

        assert result.state == SessionState.DONE_FAILURE
        assert result.attempted_methods == ["curl"]

    def test_retry_sees_last_failure(self) -> None:
        """The retry prompt receives the failed attempt."""
        executor = _executor({InstallMethod.CURL: False})
        retry = MagicMock(return_value=False)

        self._session(executor, retry=retry).run()

        failed = retry.call_args[0][0]
        assert failed.method == "curl"
        assert failed.error == "curl failed"

    def test_states_seen_by_callbacks(self) -> None:
        """Each callback runs in its own state; retry always gets the newest failure."""
        trace: list[tuple[str, SessionState]] = []
        executor = _executor({InstallMethod.CURL: False, InstallMethod.NPM: False})

        def choose(options: list[MethodOption]) -> InstallMethod | None:
            trace.append(("choose", session.state))
            return options[0].method

        def execute(method: InstallMethod, tool: TargetTool) -> InstallResult:
            trace.append(("execute", session.state))
            return InstallResult(tool=tool, method=method.value, success=False)

        def retry(result: InstallResult) -> bool:
            trace.append((f"retry:{result.method}", session.state))
            return result.method == "curl"

        executor.execute.side_effect = execute
        session = self._session(executor, choose=choose, retry=retry)
        result = session.run()

        assert trace == [
            ("choose", SessionState.SELECT),
            ("execute", SessionState.EXECUTE),
            ("retry:curl", SessionState.ASK_RETRY),
            ("choose", SessionState.SELECT),
            ("execute", SessionState.EXECUTE),
            ("retry:npm", SessionState.ASK_RETRY),
        ]
        assert result.state == SessionState.DONE_FAILURE


class TestSessionState:
    """Tests for SessionState helpers."""

    @pytest.mark.parametrize(
        ("state", "terminal"),
        [
            (SessionState.SELECT, False),
            (SessionState.EXECUTE, False),
            (SessionState.ASK_RETRY, False),
            (SessionState.DONE_SUCCESS, True),
            (SessionState.DONE_FAILURE, True),
            (SessionState.DONE_CANCELLED, True),
        ],
    )
    def test_is_terminal(self, state: SessionState, terminal: bool) -> None:
        """Only DONE_* states are terminal."""
        assert state.is_terminal is terminal


class TestInstallTool:
    """Tests for the install_tool entry point."""

    @pytest.fixture(autouse=True)
    def plain_environment(self) -> Iterator[None]:
        """Run as if outside Termux and WSL."""
        with (
            patch("agentctl.core.session.is_restricted_shell_env", return_value=False),
            patch("agentctl.core.session.is_wsl", return_value=False),
            patch("agentctl.core.session.detect_platform", return_value=Platform.LINUX),
        ):
            yield

    def test_already_installed(self) -> None:
        """An installed tool is reported and nothing runs."""
        executor = MagicMock()
        with (
            patch("agentctl.core.session.is_installed", return_value=True),
            patch("agentctl.core.session.detect_installed_version", return_value="1.2.3"),
        ):
            result = install_tool(TargetTool.GEMINI, executor=executor)

        assert result == SessionResult(state=SessionState.DONE_SUCCESS, already_installed=True)
        executor.execute.assert_not_called()

    def test_skip_selection_uses_npm(self) -> None:
        """skip_method_selection installs with npm without prompting."""
        executor = _executor({InstallMethod.NPM: True})
        choose = MagicMock()

        with patch("agentctl.core.session.is_installed", return_value=False):
            result = install_tool(
                TargetTool.CLAUDE_CODE,
                skip_method_selection=True,
                executor=executor,
                choose=choose,
            )

        assert result.success
        executor.execute.assert_called_once_with(InstallMethod.NPM, TargetTool.CLAUDE_CODE)
        choose.assert_not_called()

    def test_skip_selection_failure(self) -> None:
        """A failed npm install ends in DONE_FAILURE."""
        executor = _executor({InstallMethod.NPM: False})

        with patch("agentctl.core.session.is_installed", return_value=False):
            result = install_tool(TargetTool.CODEX, skip_method_selection=True, executor=executor)

        assert result.state == SessionState.DONE_FAILURE

    def test_interactive_session(self) -> None:
        """Without skip the injected prompts drive the session."""
        executor = _executor({InstallMethod.NPM: True})

        with patch("agentctl.core.session.is_installed", return_value=False):
            result = install_tool(
                TargetTool.GEMINI,
                executor=executor,
                choose=_first_option,
                retry=lambda r: False,
            )

        assert result.success
        assert result.attempted_methods == ["npm"]

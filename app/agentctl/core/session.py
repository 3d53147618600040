"""Install method selection and retry loop.

An InstallSession offers the available install methods, runs the chosen
one and, on failure, asks whether to try again with a method that has
not failed yet. Every method is attempted at most once per session, so
the loop always ends within as many rounds as there are methods.

    SELECT -> EXECUTE -> DONE_SUCCESS
                      -> ASK_RETRY -> SELECT (failed methods excluded)
                                   -> DONE_FAILURE
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from agentctl.core.catalog import available_methods
from agentctl.core.executor import InstallExecutor, detect_installed_version, is_installed
from agentctl.core.platform import (
    detect_platform,
    get_restricted_prefix,
    get_wsl_distro,
    is_restricted_shell_env,
    is_wsl,
)
from agentctl.models.install import InstallResult, MethodOption
from agentctl.models.tool import InstallMethod, Platform, TargetTool, get_tool_spec
from agentctl.utils.formatting import (
    print_error,
    print_hint,
    print_info,
    print_success,
    print_warning,
)
from agentctl.utils.prompts import confirm_retry, prompt_install_method

logger = logging.getLogger(__name__)

MethodChooser = Callable[[list[MethodOption]], InstallMethod | None]
RetryConfirmer = Callable[[InstallResult], bool]


class SessionState(str, Enum):
    """States of the install session."""

    SELECT = "select"
    EXECUTE = "execute"
    ASK_RETRY = "ask_retry"
    DONE_SUCCESS = "done_success"
    DONE_FAILURE = "done_failure"
    DONE_CANCELLED = "done_cancelled"

    @property
    def is_terminal(self) -> bool:
        """Check if the session has finished."""
        return self in (
            SessionState.DONE_SUCCESS,
            SessionState.DONE_FAILURE,
            SessionState.DONE_CANCELLED,
        )


@dataclass(frozen=True, slots=True)
class SessionResult:
    """Outcome of an install session.

    Attributes:
        state: Terminal state the session ended in.
        attempts: Every install attempt, in order.
        already_installed: True if nothing ran because the tool was present.
    """

    state: SessionState
    attempts: tuple[InstallResult, ...] = field(default_factory=tuple)
    already_installed: bool = False

    @property
    def success(self) -> bool:
        """Check if the tool ended up installed."""
        return self.state == SessionState.DONE_SUCCESS

    @property
    def attempted_methods(self) -> list[str]:
        """Methods that actually ran, in order."""
        return [attempt.method for attempt in self.attempts]


class InstallSession:
    """Interactive method selection with retry for one tool.

    The prompts are injected so the state machine can run without a
    terminal.

    Attributes:
        tool: Tool being installed.
        state: Current state.
    """

    def __init__(
        self,
        tool: TargetTool,
        executor: InstallExecutor,
        choose: MethodChooser,
        confirm_retry: RetryConfirmer,
        platform: Platform | None = None,
        wsl: bool | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            tool: Tool to install.
            executor: Runs the chosen method.
            choose: Picks one of the offered methods, or returns None to
                cancel.
            confirm_retry: Decides whether to retry after a failure.
            platform: Platform to offer methods for. Detected if omitted.
            wsl: Whether running under WSL. Detected if omitted.
        """
        self.tool = tool
        self._executor = executor
        self._choose = choose
        self._confirm_retry = confirm_retry
        self._platform = platform or detect_platform()
        self._wsl = is_wsl() if wsl is None else wsl
        self.state = SessionState.SELECT
        self._failed: set[InstallMethod] = set()
        self._attempts: list[InstallResult] = []

    def remaining_options(self) -> list[MethodOption]:
        """Return the available methods that have not failed yet."""
        return [
            option
            for option in available_methods(self.tool, self._platform, self._wsl)
            if option.method not in self._failed
        ]

    def run(self) -> SessionResult:
        """Drive the session to a terminal state.

        Returns:
            SessionResult with the terminal state and all attempts.
        """
        while not self.state.is_terminal:
            if self.state == SessionState.SELECT:
                method = self._select()
                if method is not None:
                    self._execute(method)
            elif self.state == SessionState.ASK_RETRY:
                retry = self._confirm_retry(self._attempts[-1])
                self.state = SessionState.SELECT if retry else SessionState.DONE_FAILURE

        return SessionResult(state=self.state, attempts=tuple(self._attempts))

    def _select(self) -> InstallMethod | None:
        options = self.remaining_options()
        if not options:
            logger.info("No install methods left for %s", self.tool.value)
            self.state = SessionState.DONE_FAILURE
            return None

        method = self._choose(options)
        if method is None:
            failed = bool(self._attempts)
            self.state = SessionState.DONE_FAILURE if failed else SessionState.DONE_CANCELLED
            return None
        self.state = SessionState.EXECUTE
        return method

    def _execute(self, method: InstallMethod) -> None:
        result = self._executor.execute(method, self.tool)
        self._attempts.append(result)
        if result.success:
            self.state = SessionState.DONE_SUCCESS
            return
        self._failed.add(method)
        self._failed.add(InstallMethod(result.method))
        self.state = SessionState.ASK_RETRY


def _print_environment_hints() -> None:
    if is_restricted_shell_env():
        prefix = get_restricted_prefix()
        print_info("Termux environment detected")
        print_hint(f"Node.js: {prefix}/bin/node")
        print_hint(f"npm: {prefix}/bin/npm")

    if is_wsl():
        distro = get_wsl_distro()
        if distro:
            print_info(f"WSL environment detected ({distro})")
        else:
            print_info("WSL environment detected")
        print_hint("Configuration files are stored in the Linux home directory, not in Windows")


def _print_attempt(result: InstallResult) -> None:
    if result.used_sudo:
        print_hint("Global npm prefix is not writable; used sudo")
    if result.success:
        print_success(f"Installed with {result.method}")
    else:
        print_warning(f"Installing with {result.method} failed")
        if result.error:
            print_hint(result.error)


def install_tool(
    tool: TargetTool,
    skip_method_selection: bool = False,
    executor: InstallExecutor | None = None,
    choose: MethodChooser = prompt_install_method,
    retry: RetryConfirmer = confirm_retry,
) -> SessionResult:
    """Install a tool interactively.

    Does nothing when the tool is already installed. Otherwise either
    installs through npm directly (``skip_method_selection``) or runs an
    InstallSession.

    Args:
        tool: Tool to install.
        skip_method_selection: Install with npm without prompting.
        executor: Executor to use. Created if omitted.
        choose: Method prompt.
        retry: Retry confirmation prompt.

    Returns:
        SessionResult of the install.
    """
    spec = get_tool_spec(tool)

    if is_installed(tool):
        print_success(f"{spec.display_name} is already installed")
        version = detect_installed_version(tool)
        if version:
            print_hint(f"  Detected version: {version}")
        return SessionResult(state=SessionState.DONE_SUCCESS, already_installed=True)

    _print_environment_hints()
    executor = executor or InstallExecutor()

    if skip_method_selection:
        print_info(f"Installing {spec.display_name} with npm...")
        attempt = executor.execute(InstallMethod.NPM, tool)
        _print_attempt(attempt)
        state = SessionState.DONE_SUCCESS if attempt.success else SessionState.DONE_FAILURE
        result = SessionResult(state=state, attempts=(attempt,))
    else:

        def retry_and_report(attempt: InstallResult) -> bool:
            _print_attempt(attempt)
            return retry(attempt)

        session = InstallSession(tool, executor, choose, retry_and_report)
        result = session.run()
        if result.success:
            _print_attempt(result.attempts[-1])

    if result.state == SessionState.DONE_CANCELLED:
        print_warning("Installation cancelled")
    elif result.success:
        if is_restricted_shell_env():
            prefix = get_restricted_prefix()
            print_hint(f"{spec.display_name} installed to: {prefix}/bin/{spec.command}")
        if is_wsl():
            print_hint(f"{spec.display_name} installed in WSL")
    else:
        print_error(f"Failed to install {spec.display_name}")
        if is_restricted_shell_env():
            print_hint(
                "In Termux, make sure Node.js is installed with 'pkg install nodejs' "
                "and retry the installation."
            )

    return result

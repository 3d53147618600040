"""Unit tests for ScriptOperator."""

from unittest.mock import MagicMock, patch

import pytest
from agentctl.models.tool import TOOL_SPECS, InstallMethod, TargetTool
from agentctl.operators import HomebrewOperator, NpmOperator, get_operator
from agentctl.operators.script import ScriptOperator
from agentctl.utils.shell import CommandResult


class TestScriptOperator:
    """Tests for ScriptOperator class."""

    def test_rejects_package_manager_method(self) -> None:
        """Only script methods are accepted."""
        with pytest.raises(ValueError, match="not a script install method"):
            ScriptOperator(InstallMethod.NPM)

    def test_curl_command(self) -> None:
        """The curl method pipes the vendor script into bash."""
        args, used_sudo = ScriptOperator(InstallMethod.CURL).install_command(
            TOOL_SPECS[TargetTool.CLAUDE_CODE]
        )

        assert args[:2] == ["bash", "-c"]
        assert "https://claude.ai/install.sh" in args[2]
        assert not used_sudo

    def test_powershell_command(self) -> None:
        """The PowerShell method runs the .ps1 installer."""
        args, _ = ScriptOperator(InstallMethod.POWERSHELL).install_command(
            TOOL_SPECS[TargetTool.CLAUDE_CODE]
        )

        assert args[0] == "powershell"
        assert "install.ps1" in args[-1]

    def test_tool_without_script(self) -> None:
        """Tools without a vendor script cannot use script methods."""
        with pytest.raises(ValueError, match="has no curl installer"):
            ScriptOperator(InstallMethod.CURL).install_command(TOOL_SPECS[TargetTool.CODEX])

    def test_uninstall_not_supported(self) -> None:
        """Script installs have no uninstall command."""
        with pytest.raises(ValueError, match="removed manually"):
            ScriptOperator(InstallMethod.CURL).uninstall_command(
                TOOL_SPECS[TargetTool.CLAUDE_CODE]
            )

    @patch("agentctl.operators.base.run_command")
    def test_install_runs_script(self, mock_run: MagicMock) -> None:
        """install runs the script and reports the method."""
        mock_run.return_value = CommandResult(stdout="done", stderr="", returncode=0)

        result = ScriptOperator(InstallMethod.CURL).install(TOOL_SPECS[TargetTool.CLAUDE_CODE])

        assert result.success
        assert result.method == "curl"

    def test_is_available_checks_runner(self) -> None:
        """is_available looks for the script runner binary."""
        with patch("agentctl.operators.script.command_exists", return_value=False) as mock_exists:
            assert not ScriptOperator(InstallMethod.POWERSHELL).is_available()
        mock_exists.assert_called_once_with("powershell")


class TestGetOperator:
    """Tests for get_operator factory."""

    def test_package_managers(self) -> None:
        """npm and Homebrew map to their operators."""
        assert isinstance(get_operator(InstallMethod.NPM), NpmOperator)
        assert isinstance(get_operator(InstallMethod.HOMEBREW), HomebrewOperator)

    @pytest.mark.parametrize(
        "method", [InstallMethod.CURL, InstallMethod.POWERSHELL, InstallMethod.CMD]
    )
    def test_scripts(self, method: InstallMethod) -> None:
        """Script methods map to a ScriptOperator for that method."""
        operator = get_operator(method)

        assert isinstance(operator, ScriptOperator)
        assert operator.method == method

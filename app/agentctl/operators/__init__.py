"""Install operators for obtaining and removing tool binaries.

This module provides the abstract operator interface and one concrete
implementation per install method (npm, Homebrew, vendor scripts), plus
manual binary removal.
"""

from agentctl.models.tool import InstallMethod
from agentctl.operators.base import InstallOperator
from agentctl.operators.homebrew import HomebrewOperator
from agentctl.operators.manual import ManualRemovalOperator
from agentctl.operators.npm import NpmOperator
from agentctl.operators.script import ScriptOperator


def get_operator(method: InstallMethod) -> InstallOperator:
    """Return the operator implementing an install method."""
    if method == InstallMethod.NPM:
        return NpmOperator()
    if method == InstallMethod.HOMEBREW:
        return HomebrewOperator()
    return ScriptOperator(method)


__all__ = [
    "InstallOperator",
    "HomebrewOperator",
    "ManualRemovalOperator",
    "NpmOperator",
    "ScriptOperator",
    "get_operator",
]

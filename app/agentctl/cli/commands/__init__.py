"""One module per top-level command or command group."""

from agentctl.cli.commands import custom, install, mcp, profile, settings, status, uninstall

__all__ = ["custom", "install", "mcp", "profile", "settings", "status", "uninstall"]

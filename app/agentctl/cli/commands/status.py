"""Status command.

Shows the platform and, for each tool, whether it is installed, its
version, install record and current profile.
"""

from agentctl.core.errors import ConfigIOError
from agentctl.core.executor import (
    InstallExecutor,
    detect_installed_version,
    get_installation_status,
    is_installed,
)
from agentctl.core.platform import detect_platform, is_restricted_shell_env, is_wsl
from agentctl.models.tool import TargetTool, get_tool_spec
from agentctl.profiles.store import ProfileStore
from agentctl.utils.formatting import console, create_table, print_warning


def status() -> None:
    """Show installation and profile status of every tool."""
    platform = detect_platform()
    environment = platform.value
    if is_wsl():
        environment += " (WSL)"
    if is_restricted_shell_env():
        environment += " (Termux)"
    console.print(f"[header]Platform:[/] {environment}")

    executor = InstallExecutor(platform)
    store = ProfileStore()
    profiles_readable = True
    try:
        store.get_collection(TargetTool.CLAUDE_CODE)
    except ConfigIOError as e:
        print_warning(f"Profiles unavailable: {e}")
        profiles_readable = False

    table = create_table("Tools", "Tool", "Installed", "Version", "Method", "Profile")
    for tool in TargetTool:
        spec = get_tool_spec(tool)
        installed = is_installed(tool)
        version = detect_installed_version(tool) if installed else None
        record = executor.read_install_record(tool)
        current = store.get_current_profile(tool) if profiles_readable else None

        table.add_row(
            spec.display_name,
            "[success]yes[/]" if installed else "[muted]no[/]",
            version or "-",
            getattr(record, "value", record) or "-",
            f"[current]{current.name}[/]" if current else "-",
        )
    console.print(table)

    local = get_installation_status(TargetTool.CLAUDE_CODE)
    if local.has_local:
        console.print(f"[muted]Local Claude Code installation: {local.local_path}[/]")

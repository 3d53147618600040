"""Profile management commands.

Manage named API profiles per tool and switch the tool's live settings
between them.
"""

from typing import Annotated

import typer

from agentctl.cli.types import ToolArgument
from agentctl.core.errors import AgentctlError
from agentctl.models.profile import AuthType, Profile
from agentctl.models.tool import TargetTool
from agentctl.profiles.apply import apply_profile_settings
from agentctl.profiles.presets import list_presets, profile_from_preset
from agentctl.profiles.store import ProfileStore
from agentctl.utils.formatting import (
    console,
    create_table,
    print_error,
    print_info,
    print_success,
)

app = typer.Typer(
    help="Manage API profiles.",
    invoke_without_command=True,
    no_args_is_help=True,
)


def _mask(key: str | None) -> str:
    if not key:
        return "-"
    if len(key) <= 8:
        return "****"
    return f"{key[:4]}...{key[-4:]}"


def _apply(tool: TargetTool, profile: Profile) -> None:
    apply_profile_settings(tool, profile)
    print_success(f"Applied profile '{profile.name}' to {tool.value}")


@app.command("list")
def list_profiles(tool: ToolArgument) -> None:
    """List the profiles of a tool."""
    try:
        collection = ProfileStore().get_collection(tool)
    except AgentctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not collection.profiles:
        print_info(f"No profiles for {tool.value}. Add one with 'agentctl profile add'.")
        return

    table = create_table(
        f"{tool.value} profiles", "", "ID", "Name", "Auth", "Base URL", "Model", "Key"
    )
    for profile_id, profile in collection.profiles.items():
        is_current = profile_id == collection.current_profile_id
        table.add_row(
            "[current]*[/]" if is_current else "",
            profile_id,
            profile.name,
            profile.auth_type.value,
            profile.base_url or "-",
            profile.primary_model or "-",
            _mask(profile.api_key),
        )
    console.print(table)


@app.command()
def add(
    tool: ToolArgument,
    name: Annotated[str, typer.Argument(help="Profile name.")],
    auth_type: Annotated[
        AuthType,
        typer.Option("--auth-type", "-a", help="How the key is sent.", case_sensitive=False),
    ] = AuthType.API_KEY,
    api_key: Annotated[
        str | None,
        typer.Option("--api-key", "-k", help="API key or token."),
    ] = None,
    base_url: Annotated[
        str | None,
        typer.Option("--base-url", "-u", help="API base URL."),
    ] = None,
    model: Annotated[
        str | None,
        typer.Option("--model", "-m", help="Primary model."),
    ] = None,
    fast_model: Annotated[
        str | None,
        typer.Option("--fast-model", help="Fast model."),
    ] = None,
    provider: Annotated[
        str | None,
        typer.Option("--provider", "-p", help="Fill endpoint and models from a provider preset."),
    ] = None,
    switch: Annotated[
        bool,
        typer.Option("--switch", "-s", help="Make the new profile current and apply it."),
    ] = False,
) -> None:
    """Add a profile.

    Examples:
        agentctl profile add claude-code Work -k sk-ant-...
        agentctl profile add codex GLM -p glm -k <key> --switch
    """
    store = ProfileStore()
    try:
        if provider:
            profile = profile_from_preset(tool, provider, api_key or "", name=name)
            overrides = {
                "base_url": base_url,
                "primary_model": model,
                "fast_model": fast_model,
            }
            profile = profile.model_copy(
                update={k: v for k, v in overrides.items() if v is not None}
            )
        else:
            profile = Profile(
                name=name,
                auth_type=auth_type,
                api_key=api_key,
                base_url=base_url,
                primary_model=model,
                fast_model=fast_model,
            )

        stored = store.add_profile(tool, profile)
        print_success(f"Added profile '{stored.name}' ({stored.id})")

        current = store.get_current_profile(tool)
        if switch and stored.id:
            store.switch_profile(tool, stored.id)
            _apply(tool, stored)
        elif current is not None and current.id == stored.id:
            _apply(tool, stored)
    except AgentctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@app.command()
def update(
    tool: ToolArgument,
    profile_id: Annotated[str, typer.Argument(help="Profile ID.")],
    name: Annotated[str | None, typer.Option("--name", "-n", help="New name.")] = None,
    auth_type: Annotated[
        AuthType | None,
        typer.Option("--auth-type", "-a", help="How the key is sent.", case_sensitive=False),
    ] = None,
    api_key: Annotated[str | None, typer.Option("--api-key", "-k", help="API key.")] = None,
    base_url: Annotated[str | None, typer.Option("--base-url", "-u", help="Base URL.")] = None,
    model: Annotated[str | None, typer.Option("--model", "-m", help="Primary model.")] = None,
    fast_model: Annotated[str | None, typer.Option("--fast-model", help="Fast model.")] = None,
) -> None:
    """Change fields of a profile. The current profile is re-applied."""
    changes = {
        "name": name,
        "auth_type": auth_type,
        "api_key": api_key,
        "base_url": base_url,
        "primary_model": model,
        "fast_model": fast_model,
    }
    changes = {k: v for k, v in changes.items() if v is not None}
    if not changes:
        print_info("Nothing to update.")
        return

    store = ProfileStore()
    try:
        updated = store.update_profile(tool, profile_id, **changes)
        print_success(f"Updated profile '{updated.name}' ({updated.id})")
        current = store.get_current_profile(tool)
        if current is not None and current.id == updated.id:
            _apply(tool, updated)
    except AgentctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@app.command()
def switch(
    tool: ToolArgument,
    profile_id: Annotated[str, typer.Argument(help="Profile ID.")],
) -> None:
    """Make a profile current and apply it to the tool's settings."""
    store = ProfileStore()
    try:
        store.switch_profile(tool, profile_id)
        _apply(tool, store.get_profile(tool, profile_id))
    except AgentctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@app.command()
def apply(tool: ToolArgument) -> None:
    """Re-apply the current profile to the tool's settings."""
    try:
        current = ProfileStore().get_current_profile(tool)
        if current is None:
            print_info(f"No current profile for {tool.value}.")
            return
        _apply(tool, current)
    except AgentctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@app.command()
def delete(
    tool: ToolArgument,
    profile_ids: Annotated[list[str], typer.Argument(help="Profile IDs to delete.")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete profiles.

    Deleting the current profile makes the first remaining profile current.
    """
    if not yes:
        if not typer.confirm(f"Delete {len(profile_ids)} profile(s)?"):
            print_info("Cancelled.")
            return

    store = ProfileStore()
    try:
        result = store.delete_profiles(tool, profile_ids)
        print_success(f"Deleted {len(result.deleted)} profile(s)")
        if result.current_changed:
            if result.current_profile_id:
                _apply(tool, store.get_profile(tool, result.current_profile_id))
            else:
                print_info(f"No profiles left for {tool.value}.")
    except AgentctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@app.command()
def providers(
    tool: Annotated[
        TargetTool | None,
        typer.Argument(help="Only show providers serving this tool.", case_sensitive=False),
    ] = None,
) -> None:
    """List the built-in API provider presets."""
    table = create_table("Providers", "ID", "Name", "Tools", "Description")
    for preset in list_presets(tool):
        tools = ", ".join(t.value for t in preset.endpoints)
        table.add_row(preset.id, preset.name, tools, preset.description)
    console.print(table)

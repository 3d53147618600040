"""agentctl command line.

Top-level commands act on one tool binary (install, uninstall, status);
the command groups edit a tool's configuration (profile, settings, mcp,
command).
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from agentctl import __version__
from agentctl.cli.commands import custom, install, mcp, profile, settings, status, uninstall
from agentctl.utils.formatting import err_console

app = typer.Typer(
    name="agentctl",
    help="Install and configure AI coding assistant CLIs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"agentctl version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send log records to stderr through Rich.

    Warnings are shown by default, everything with --verbose and only
    errors with --quiet. --verbose wins if both are given.
    """
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    handler = RichHandler(console=err_console, show_path=verbose, rich_tracebacks=verbose)
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=[handler], force=True
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=_show_version,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every step, including commands run."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only log errors."),
    ] = False,
) -> None:
    """agentctl - Install and configure Claude Code, Codex and Gemini CLI.

    Picks an install method that works on your platform, and switches
    each tool between named API profiles.
    """
    configure_logging(verbose, quiet)
    ctx.obj = {"verbose": verbose, "quiet": quiet}


app.command(name="install")(install.install)
app.command(name="uninstall")(uninstall.uninstall)
app.command(name="status")(status.status)
app.add_typer(profile.app, name="profile")
app.add_typer(settings.app, name="settings")
app.add_typer(mcp.app, name="mcp")
app.add_typer(custom.app, name="command")


if __name__ == "__main__":
    app()

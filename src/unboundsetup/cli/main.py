"""Main CLI entry point for unbound-setup."""

import logging
from pathlib import Path
from typing import Any, Callable, Optional

import typer
from rich.console import Console
from rich.markup import escape

from unboundsetup.core.base import BaseHost
from unboundsetup.core.errors import ProvisionError
from unboundsetup.core.host import LocalHost
from unboundsetup.core.models import Settings
from unboundsetup.core.sequencer import ProvisioningSequencer
from unboundsetup.core.settings import load_settings
from unboundsetup.log import configure_logging

logger = logging.getLogger(__name__)

# Create the main app
app = typer.Typer(
    name="unbound-setup",
    help="Install, configure and remove the Unbound DNS resolver",
)

console = Console()


# Global options stored in context
class GlobalOptions:
    def __init__(self):
        self.settings: Settings = Settings()
        self.verbose: bool = False
        self.debug: bool = False
        self._sequencer: Optional[ProvisioningSequencer] = None

    @property
    def sequencer(self) -> ProvisioningSequencer:
        if self._sequencer is None:
            from unboundsetup.cli.commands.actions import print_step

            host = build_host(self.settings)
            self._sequencer = ProvisioningSequencer(host, self.settings, on_step=print_step)
        return self._sequencer


def build_host(settings: Settings) -> BaseHost:
    """Host the commands act on."""
    return LocalHost(use_sudo=settings.use_sudo)


def run_guarded(fn: Callable[..., Any], *args) -> Any:
    """Run a command body; any provisioning failure exits with code 1."""
    try:
        return fn(*args)
    except ProvisionError as e:
        logger.error("%s", e)
        console.print(f"[red]✗ {escape(str(e))}[/]", highlight=False)
        raise typer.Exit(code=1)


# ============================================================================
# Provisioning Commands
# ============================================================================


@app.command("menu")
def menu(ctx: typer.Context):
    """Run the interactive menu."""
    from unboundsetup.cli.menu import run_menu

    code = run_guarded(run_menu, ctx.obj.sequencer, console)
    raise typer.Exit(code=code)


@app.command("install")
def install(ctx: typer.Context):
    """Install Unbound, write its configuration and restart it."""
    from unboundsetup.cli.commands.actions import install

    run_guarded(install, ctx.obj.sequencer)


@app.command("configure-dns")
def configure_dns(ctx: typer.Context):
    """Pin /etc/resolv.conf to the local resolver."""
    from unboundsetup.cli.commands.actions import configure_dns

    run_guarded(configure_dns, ctx.obj.sequencer)


@app.command("restart")
def restart(ctx: typer.Context):
    """Restart the Unbound service."""
    from unboundsetup.cli.commands.actions import restart

    run_guarded(restart, ctx.obj.sequencer)


@app.command("uninstall")
def uninstall(ctx: typer.Context):
    """Remove Unbound, its configuration and the resolv.conf pointer."""
    from unboundsetup.cli.commands.actions import uninstall

    run_guarded(uninstall, ctx.obj.sequencer)


@app.command("guide")
def guide(ctx: typer.Context):
    """Show features and useful commands."""
    from unboundsetup.cli.commands.actions import guide

    guide(ctx.obj.sequencer)


@app.command("status")
def status(ctx: typer.Context):
    """Show service and resolver file state."""
    from unboundsetup.cli.commands.actions import status

    run_guarded(status, ctx.obj.sequencer)


# ============================================================================
# Control Commands
# ============================================================================


@app.command("validate")
def validate(ctx: typer.Context):
    """Validate the installed configuration with unbound-checkconf."""
    from unboundsetup.cli.commands.control import validate

    run_guarded(validate, ctx.obj.sequencer)


@app.command("flush")
def flush(
    ctx: typer.Context,
    domain: str = typer.Argument(..., help="Domain to flush from the cache"),
):
    """Flush a domain from the Unbound cache."""
    from unboundsetup.cli.commands.control import flush

    run_guarded(flush, ctx.obj.sequencer, domain)


@app.command("lookup")
def lookup(
    ctx: typer.Context,
    domain: str = typer.Argument(..., help="Domain to look up"),
):
    """Show delegation and cache information for a domain."""
    from unboundsetup.cli.commands.control import lookup

    run_guarded(lookup, ctx.obj.sequencer, domain)


@app.command("test")
def resolve(
    ctx: typer.Context,
    name: str = typer.Argument("google.com", help="Name to resolve"),
    record_type: str = typer.Option("A", "--type", "-t", help="Record type"),
    server: str = typer.Option("127.0.0.1", "--server", "-s", help="Resolver address"),
):
    """Resolve a name through the local resolver."""
    from unboundsetup.cli.commands.control import resolve

    run_guarded(resolve, ctx.obj.sequencer, name, record_type, server)


# ============================================================================
# Version Command
# ============================================================================


@app.command("version")
def version():
    """Show version information."""
    from unboundsetup import __version__

    console.print(f"unbound-setup version {__version__}")


# ============================================================================
# Main Callback (Global Options)
# ============================================================================


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML settings file"
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Action log file (overrides settings)"
    ),
    no_sudo: bool = typer.Option(False, "--no-sudo", help="Never prefix commands with sudo"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug mode"),
):
    """Unbound setup - runs the interactive menu when no command is given."""
    ctx.ensure_object(GlobalOptions)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug

    try:
        settings = load_settings(config)
    except ProvisionError as e:
        console.print(f"[red]✗ {escape(str(e))}[/]", highlight=False)
        raise typer.Exit(code=1)

    updates = {}
    if log_file is not None:
        updates["log_file"] = log_file
    if no_sudo:
        updates["use_sudo"] = False
    ctx.obj.settings = settings.model_copy(update=updates)

    configure_logging(ctx.obj.settings.log_file, verbose=verbose, debug=debug)

    if ctx.invoked_subcommand is None:
        menu(ctx)


if __name__ == "__main__":
    app()

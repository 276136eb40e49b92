"""Provisioning action commands."""

from rich.console import Console
from rich.table import Table

from unboundsetup.core.models import ActionResult, ServiceState, StepRecord
from unboundsetup.core.sequencer import ProvisioningSequencer

console = Console()


def print_step(action: str, record: StepRecord) -> None:
    """Progress line for one sequencer step."""
    if record.skipped:
        console.print(f"  [dim]- {record.description} ({record.message})[/]")
    elif record.success:
        console.print(f"  [green]✓[/] {record.description}")
    else:
        console.print(f"  [red]✗ {record.description}[/]")


def _report(result: ActionResult) -> None:
    console.print(f"[green]✓ {result.message}[/]")


def install(sequencer: ProvisioningSequencer) -> None:
    """Install and configure Unbound."""
    console.print("[bold cyan]Installing Unbound...[/]")
    _report(sequencer.install())


def configure_dns(sequencer: ProvisioningSequencer) -> None:
    """Point resolv.conf at Unbound."""
    console.print("[bold cyan]Configuring DNS to use Unbound...[/]")
    _report(sequencer.configure_dns())


def restart(sequencer: ProvisioningSequencer) -> None:
    """Restart the Unbound service."""
    console.print("[bold cyan]Restarting Unbound service...[/]")
    _report(sequencer.restart())


def uninstall(sequencer: ProvisioningSequencer) -> None:
    """Remove Unbound."""
    console.print("[bold cyan]Uninstalling Unbound...[/]")
    _report(sequencer.uninstall())


def guide(sequencer: ProvisioningSequencer) -> None:
    """Show features and useful commands."""
    lines = sequencer.guide()
    console.print(f"[bold]{lines[0]}[/]", highlight=False)
    for line in lines[1:]:
        console.print(line, highlight=False, markup=False)


def status(sequencer: ProvisioningSequencer) -> None:
    """Show service and file state."""
    snapshot = sequencer.status()

    def state_cell(state: ServiceState) -> str:
        color = {
            ServiceState.ACTIVE: "[green]",
            ServiceState.FAILED: "[red]",
            ServiceState.INACTIVE: "[yellow]",
        }.get(state, "[dim]")
        return f"{color}{state.value}[/]"

    def yes_no(flag: bool) -> str:
        return "[green]yes[/]" if flag else "[yellow]no[/]"

    table = Table(title="Unbound Provisioning Status")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row(f"Service {snapshot.service}", state_cell(snapshot.service_state))
    table.add_row(f"Service {snapshot.competing_service}", state_cell(snapshot.competing_state))
    table.add_row("Config file", snapshot.config_path)
    table.add_row("Config present", yes_no(snapshot.config_present))
    table.add_row("Resolver file", snapshot.resolv_path)
    table.add_row("Resolver file present", yes_no(snapshot.resolv_present))
    table.add_row("Resolver file immutable", yes_no(snapshot.resolv_immutable))

    console.print(table)

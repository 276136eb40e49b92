"""Resolver control commands: validate, flush, lookup, test."""

from rich.console import Console
from rich.table import Table

from unboundsetup.core.errors import ProvisionError
from unboundsetup.core.sequencer import ProvisioningSequencer

console = Console()


def validate(sequencer: ProvisioningSequencer) -> None:
    """Run unbound-checkconf."""
    result = sequencer.control.check_config()

    if result.valid:
        console.print("[green]✓ Configuration is valid[/]")
        return

    console.print("[red]✗ Configuration is invalid[/]")
    for error in result.errors:
        console.print(f"  {error}", style="red", markup=False)
    raise ProvisionError("unbound-checkconf reported errors")


def flush(sequencer: ProvisioningSequencer, domain: str) -> None:
    """Flush a domain from the cache."""
    sequencer.control.flush(domain)
    console.print(f"[green]✓ Flushed {domain} from cache[/]")


def lookup(sequencer: ProvisioningSequencer, domain: str) -> None:
    """Show delegation information for a domain."""
    output = sequencer.control.lookup(domain)
    console.print(output.rstrip(), markup=False, highlight=False)


def resolve(sequencer: ProvisioningSequencer, name: str, record_type: str, server: str) -> None:
    """Query the local resolver directly."""
    rcode, answers, elapsed_ms = sequencer.control.query(name, record_type, server)

    table = Table(title=f"{name} {record_type.upper()} @{server}")
    table.add_column("Answer", style="green")
    for answer in answers:
        table.add_row(answer)

    console.print(table)
    console.print(f"Status: {rcode}  Time: {elapsed_ms:.1f}ms")

    if rcode != "NOERROR":
        raise ProvisionError(f"Query for {name} returned {rcode}")

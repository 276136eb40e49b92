"""Interactive numbered menu."""

from typing import Callable

from rich.console import Console

from unboundsetup.cli.commands import actions
from unboundsetup.core.models import MenuAction
from unboundsetup.core.sequencer import ProvisioningSequencer

PROMPT = "Enter your choice [1-6]: "

DISPATCH: dict[MenuAction, Callable[[ProvisioningSequencer], None]] = {
    MenuAction.INSTALL: actions.install,
    MenuAction.CONFIGURE_DNS: actions.configure_dns,
    MenuAction.RESTART: actions.restart,
    MenuAction.UNINSTALL: actions.uninstall,
    MenuAction.GUIDE: actions.guide,
}


def show_menu(console: Console) -> None:
    console.print("Choose an option:")
    for action in MenuAction:
        console.print(f"{action.value}) {action.label}", highlight=False)


def run_menu(
    sequencer: ProvisioningSequencer,
    console: Console,
    read: Callable[[str], str] | None = None,
) -> int:
    """
    Read-evaluate-dispatch loop.

    Returns 0 when the user exits (or stdin closes). Provisioning errors
    propagate to the caller, which ends the process.
    """
    if read is None:
        read = console.input

    while True:
        show_menu(console)
        try:
            choice = read(PROMPT)
        except EOFError:
            console.print("\nExiting...")
            return 0

        action = MenuAction.from_choice(choice)
        if action is None:
            console.print("[yellow]Invalid choice, please try again.[/]")
            continue

        if action is MenuAction.EXIT:
            console.print("Exiting...")
            return 0

        DISPATCH[action](sequencer)

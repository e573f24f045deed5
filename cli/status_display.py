"""Rich rendering of replay and classification results"""

from typing import Iterable, List, Tuple

from rich.table import Table

from hosted_login import (
    AuthFlowState,
    LoadURL,
    NavigationCommand,
    OpenExternally,
    RouteCategory,
    ShowErrorPage,
)

from cli.replay import ReplayStep


def describe_command(command: NavigationCommand) -> str:
    """One-line description of a follow-up command"""
    if isinstance(command, LoadURL):
        return f"LoadURL({command.url})"
    if isinstance(command, OpenExternally):
        return f"OpenExternally({command.url})"
    if isinstance(command, ShowErrorPage):
        message = command.message.replace("\n", " | ")
        return f"ShowErrorPage({message!r}, {command.url}, {command.status})"
    return type(command).__name__


def show_replay(steps: List[ReplayStep], state: AuthFlowState, console) -> None:
    """
    Display the replayed events and the final flow state

    Args:
        steps: Replay steps
        state: Flow state after the replay
        console: Rich console for output
    """
    table = Table(title="Navigation Replay")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Event", style="cyan")
    table.add_column("URL", overflow="fold")
    table.add_column("Decision")
    table.add_column("Commands", overflow="fold")

    for step in steps:
        decision_style = "red" if step.decision == "Cancel" else "green"
        decision = f"[{decision_style}]{step.decision}[/{decision_style}]" if step.decision else ""
        commands = "\n".join(describe_command(c) for c in step.commands)
        table.add_row(str(step.index), step.event, step.url, decision, commands)

    console.print(table)
    console.print(
        f" isLoading: [bold]{state.is_loading}[/bold]   "
        f"isExternalLink: [bold]{state.is_external_link}[/bold]"
    )


def show_classification(results: Iterable[Tuple[str, RouteCategory]], console) -> None:
    table = Table(title="Route Classification")
    table.add_column("URL", overflow="fold")
    table.add_column("Category", style="cyan")
    for url, category in results:
        table.add_row(url, str(category))
    console.print(table)

"""
Ring State Display Module

Rich-formatted rendering of a GlobalState snapshot for troubleshooting.
"""

import json
from typing import Any, Dict, Optional

from rich.console import Console
from rich.table import Table

from .models import GlobalState, RING_SIZE


def state_to_dict(state: GlobalState) -> Dict[str, Any]:
    """
    Convert a snapshot to plain data for JSON output.

    Ring ids become string keys so the result survives a JSON round trip.
    """
    return {
        "current_output": state.current_output_name,
        "next_ring_id": state.next_ring_id,
        "outputs": {
            name: {
                "current_ring_id": output.current_ring_id,
                "rings": {
                    str(ring_id): {
                        "current_index": ring.current_index,
                        "next_free_id": ring.next_free_id,
                        "workspaces": [ws.model_dump() for ws in ring.workspaces],
                    }
                    for ring_id, ring in output.rings_by_id.items()
                },
            }
            for name, output in state.outputs_by_name.items()
        },
    }


def format_state_json(state: GlobalState) -> str:
    return json.dumps(state_to_dict(state), indent=2)


def display_state(state: GlobalState, console: Optional[Console] = None) -> None:
    """
    Display the ring topology, one table per output.

    Args:
        state: Snapshot to render
        console: Rich console (optional, creates new if not provided)
    """
    if console is None:
        console = Console()

    console.print(
        f"\n[bold cyan]Ring state[/bold cyan] "
        f"[dim](next ring {state.next_ring_id} → workspace {state.next_ring_id * RING_SIZE})[/dim]\n"
    )

    for name, output in state.outputs_by_name.items():
        is_current_output = name == state.current_output_name
        title = f"{name} (focused)" if is_current_output else name

        table = Table(title=title)
        table.add_column("Ring", justify="right")
        table.add_column("Id", justify="right")
        table.add_column("Name")
        table.add_column("Windows", justify="right")
        table.add_column("Current")

        for ring_id in output.sorted_ring_ids():
            ring = output.rings_by_id[ring_id]
            for index, ws in enumerate(ring.workspaces):
                marker = ""
                if index == ring.current_index:
                    marker = "[dim]ring[/dim]"
                    if ring_id == output.current_ring_id:
                        marker = "[green]●[/green]" if is_current_output else "[yellow]output[/yellow]"
                table.add_row(str(ring_id), str(ws.id), ws.name, str(ws.active_window_count), marker)
            table.add_row("", "", f"[dim]next free: {ring.next_free_id}[/dim]", "", "")

        console.print(table)
        console.print()

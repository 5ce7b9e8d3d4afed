#!/usr/bin/env python3
"""
i3 Ring Navigator CLI

Usage:
    i3-ring-nav switch <left|right|up|down>
    i3-ring-nav move <left|right|up|down>

Exit codes:
  0 - Commands applied
  2 - Usage error (window manager not contacted)
  3 - Cannot connect to window manager IPC
  4 - Workspace/tree query failed or inconsistent
  5 - Window manager rejected a command
  6 - Invalid configuration
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console

from . import __version__
from .client import WindowManagerClient
from .config import load_config
from .display import display_state, format_state_json
from .emitter import CommandEmitter
from .errors import RingNavError, UsageError
from .models import CommandKind, Direction, NavigationDecision
from .navigation import plan
from .state_builder import build_state

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Configure logging on stderr.

    Args:
        level: Logging level name (e.g., "DEBUG")
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
        force=True,
    )


def parse_request(kind: str, direction: str) -> Tuple[CommandKind, Direction]:
    """
    Parse the two command line tokens.

    Raises:
        UsageError: If either token is not recognized
    """
    try:
        return CommandKind(kind), Direction(direction)
    except ValueError:
        raise UsageError(f"Wrong arguments: {kind} {direction}") from None


def run_navigation(
    client: WindowManagerClient,
    direction: Direction,
    kind: CommandKind,
    dry_run: bool = False,
    show_state: bool = False,
    output_json: bool = False,
    console: Optional[Console] = None,
) -> NavigationDecision:
    """
    Query the window manager, decide, and emit the resulting commands.

    Raises:
        RingNavError: On any connection, query or command failure
    """
    with client:
        workspaces = client.list_workspaces()
        tree = client.get_tree()
        state = build_state(workspaces, tree)

        if show_state:
            if output_json:
                click.echo(format_state_json(state))
            else:
                display_state(state, console)

        decision = plan(state, direction, kind)
        logger.info(
            f"{kind.value} {direction.value}: {decision.action.value} → workspace {decision.target_id}"
        )

        CommandEmitter(client, dry_run=dry_run).emit(decision.commands)

    return decision


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument('kind', metavar='<switch|move>')
@click.argument('direction', metavar='<left|right|up|down>')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Configuration file (default: ~/.config/i3-ring-nav/config.toml)')
@click.option('--socket', 'socket_path', help='Window manager IPC socket path')
@click.option('--dry-run', is_flag=True, help='Print commands instead of sending them')
@click.option('--show-state', is_flag=True, help='Show the derived ring topology')
@click.option('--json', 'output_json', is_flag=True, help='Output --show-state as JSON')
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose logging')
@click.version_option(__version__, prog_name="i3-ring-nav")
def cli(
    kind: str,
    direction: str,
    config_path: Optional[Path],
    socket_path: Optional[str],
    dry_run: bool,
    show_state: bool,
    output_json: bool,
    verbose: bool,
):
    """
    Navigate workspace rings.

    KIND is "switch" (move focus) or "move" (move the focused window and
    follow it). DIRECTION is left/right within a ring or up/down between rings.
    """
    console = Console(stderr=True)

    try:
        command_kind, nav_direction = parse_request(kind, direction)

        config = load_config(config_path)
        setup_logging("DEBUG" if verbose else config.log_level)

        dry_run = dry_run or config.dry_run
        client = WindowManagerClient(socket_path=socket_path or config.socket_path)

        decision = run_navigation(
            client,
            nav_direction,
            command_kind,
            dry_run=dry_run,
            show_state=show_state,
            output_json=output_json,
            console=console,
        )

        if dry_run:
            for command in decision.commands:
                click.echo(command)

    except RingNavError as e:
        if not isinstance(e, UsageError):
            logger.error(f"{e.code.name}: {e.message}")
        console.print(f"[red]Error: {e.message}[/red]")
        if e.suggestion:
            console.print(f"[dim]{e.suggestion}[/dim]")
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        console.print("\nInterrupted")
        sys.exit(130)


def main():
    """Main entry point."""
    cli(prog_name="i3-ring-nav")


if __name__ == "__main__":
    main()

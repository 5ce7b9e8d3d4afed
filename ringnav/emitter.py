"""
Command emitter.

Sends decided commands to the window manager strictly in order and stops at
the first failure. Commands already applied are not rolled back.
"""

import logging
from typing import List, Sequence

from .client import WindowManagerClient
from .errors import CommandError

logger = logging.getLogger(__name__)


class CommandEmitter:
    """Issues an ordered command list through a WindowManagerClient."""

    def __init__(self, client: WindowManagerClient, dry_run: bool = False):
        """
        Initialize command emitter.

        Args:
            client: Connected window manager client
            dry_run: Log commands instead of sending them
        """
        self.client = client
        self.dry_run = dry_run

    def emit(self, commands: Sequence[str]) -> List[str]:
        """
        Send commands in order.

        Args:
            commands: Command strings in execution order

        Returns:
            Commands that were applied (or would be, in dry-run mode)

        Raises:
            CommandError: On the first rejected command; its context records
                how many commands were applied before it
        """
        applied: List[str] = []

        for command in commands:
            if self.dry_run:
                logger.debug(f"[dry-run] {command}")
                applied.append(command)
                continue

            try:
                self.client.run_command(command)
            except CommandError as e:
                e.context["applied"] = len(applied)
                logger.error(f"Command failed after {len(applied)} applied: {command}")
                raise

            logger.info(f"Applied: {command}")
            applied.append(command)

        return applied

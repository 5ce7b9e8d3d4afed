"""
Window manager IPC client.

Synchronous wrapper over i3ipc.Connection exposing the three round trips the
navigator needs. Every failure is raised as a RingNavError subclass.
"""

import logging
from typing import List, Optional

import i3ipc
from pydantic import ValidationError

from .errors import CommandError, QueryError, WMConnectionError
from .models import TreeNode, WorkspaceDescriptor

logger = logging.getLogger(__name__)


class WindowManagerClient:
    """Request/reply client for i3 or sway IPC."""

    def __init__(self, socket_path: Optional[str] = None):
        """
        Initialize client.

        Args:
            socket_path: IPC socket path (discovered by i3ipc from
                I3SOCK/SWAYSOCK or the window manager if None)
        """
        self.socket_path = socket_path
        self.conn: Optional[i3ipc.Connection] = None

    def connect(self) -> None:
        """Establish connection to the window manager IPC socket."""
        if self.conn is not None:
            return

        try:
            self.conn = i3ipc.Connection(socket_path=self.socket_path)
        except Exception as e:
            raise WMConnectionError(str(e), self.socket_path) from e

        logger.debug(f"Connected to window manager IPC ({self.socket_path or 'auto-detected socket'})")

    def disconnect(self) -> None:
        """Close the IPC session."""
        if self.conn:
            self.conn.main_quit()
            # main_quit only tears down the event socket
            cmd_socket = getattr(self.conn, "_cmd_socket", None)
            if cmd_socket is not None:
                cmd_socket.close()
            self.conn = None

    def _connection(self) -> i3ipc.Connection:
        if self.conn is None:
            self.connect()
        return self.conn

    def list_workspaces(self) -> List[WorkspaceDescriptor]:
        """
        Query the flat workspace list.

        Returns:
            Workspace descriptors in the order the window manager returned them

        Raises:
            QueryError: If the query fails or a reply cannot be parsed
        """
        conn = self._connection()
        try:
            replies = conn.get_workspaces()
            return [WorkspaceDescriptor.from_i3_reply(reply) for reply in replies]
        except ValidationError as e:
            raise QueryError("get_workspaces", f"unexpected workspace data: {e}") from e
        except Exception as e:
            raise QueryError("get_workspaces", str(e)) from e

    def get_tree(self) -> TreeNode:
        """
        Query the window tree.

        Raises:
            QueryError: If the query fails
        """
        conn = self._connection()
        try:
            return TreeNode.from_i3_con(conn.get_tree())
        except Exception as e:
            raise QueryError("get_tree", str(e)) from e

    def run_command(self, text: str) -> None:
        """
        Run a single window manager command.

        Args:
            text: Command string (e.g., "workspace 5")

        Raises:
            CommandError: If the IPC call fails or the window manager rejects the command
        """
        conn = self._connection()
        try:
            replies = conn.command(text)
        except Exception as e:
            raise CommandError(text, str(e)) from e

        for reply in replies:
            if not reply.success:
                raise CommandError(text, reply.error or "rejected by window manager")

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()

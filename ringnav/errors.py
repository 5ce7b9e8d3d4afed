"""
Error handling for i3 Ring Navigator.

Every failure that ends an invocation is raised as a RingNavError subclass and
mapped to a process exit status by the CLI.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """
    Error codes for i3 Ring Navigator.

    Custom codes:
    - 1000-1099: Usage errors
    - 1100-1199: Configuration errors
    - 1400-1499: Window manager IPC errors
    """

    # Usage errors (1000-1099)
    USAGE = 1000

    # Configuration errors (1100-1199)
    CONFIG_LOAD_FAILED = 1100

    # Window manager IPC errors (1400-1499)
    WM_CONNECTION_FAILED = 1400
    WM_QUERY_FAILED = 1401
    WORKSPACE_NOT_IN_TREE = 1402
    NO_FOCUSED_WORKSPACE = 1403
    WM_COMMAND_FAILED = 1404


EXIT_CODES: Dict[ErrorCode, int] = {
    ErrorCode.USAGE: 2,
    ErrorCode.WM_CONNECTION_FAILED: 3,
    ErrorCode.WM_QUERY_FAILED: 4,
    ErrorCode.WORKSPACE_NOT_IN_TREE: 4,
    ErrorCode.NO_FOCUSED_WORKSPACE: 4,
    ErrorCode.WM_COMMAND_FAILED: 5,
    ErrorCode.CONFIG_LOAD_FAILED: 6,
}


class RingNavError(Exception):
    """Base exception for ring navigator errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize ring navigator error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    @property
    def exit_code(self) -> int:
        """Process exit status for this error."""
        return EXIT_CODES.get(self.code, 1)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for JSON output.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result


class UsageError(RingNavError):
    """Malformed command line input."""

    def __init__(self, message: str):
        super().__init__(
            code=ErrorCode.USAGE,
            message=message,
            suggestion="Usage: i3-ring-nav <switch|move> <left|right|up|down>"
        )


class WMConnectionError(RingNavError):
    """The window manager IPC session could not be established."""

    def __init__(self, reason: str, socket_path: Optional[str] = None):
        """
        Initialize connection error.

        Args:
            reason: Reason for failure
            socket_path: Socket that was tried, if one was configured
        """
        context = {"reason": reason}
        if socket_path:
            context["socket_path"] = socket_path

        super().__init__(
            code=ErrorCode.WM_CONNECTION_FAILED,
            message=f"Failed to connect to window manager IPC: {reason}",
            suggestion="Ensure i3 or sway is running and I3SOCK/SWAYSOCK is set",
            context=context
        )


class QueryError(RingNavError):
    """A read query failed or returned inconsistent data."""

    def __init__(
        self,
        operation: str,
        reason: str,
        code: ErrorCode = ErrorCode.WM_QUERY_FAILED,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize query error.

        Args:
            operation: Query that failed (e.g., "get_tree")
            reason: Reason for failure
            code: Specific query error code
            context: Additional context for debugging
        """
        ctx = {"operation": operation, "reason": reason}
        ctx.update(context or {})

        super().__init__(
            code=code,
            message=f"Window manager query {operation} failed: {reason}",
            suggestion="Re-run the command; the window layout may have changed mid-query",
            context=ctx
        )


class CommandError(RingNavError):
    """A window manager command was rejected or could not be sent."""

    def __init__(self, command: str, reason: str, applied: int = 0):
        """
        Initialize command error.

        Args:
            command: Command text that failed
            reason: Reason for failure
            applied: Number of commands of the same plan already applied
        """
        super().__init__(
            code=ErrorCode.WM_COMMAND_FAILED,
            message=f"Command '{command}' failed: {reason}",
            suggestion="Check the window manager log for details",
            context={"command": command, "reason": reason, "applied": applied}
        )


class ConfigLoadError(RingNavError):
    """Configuration loading error."""

    def __init__(self, file_path: str, reason: str):
        """
        Initialize configuration load error.

        Args:
            file_path: Path to configuration file
            reason: Reason for load failure
        """
        super().__init__(
            code=ErrorCode.CONFIG_LOAD_FAILED,
            message=f"Failed to load configuration from {file_path}: {reason}",
            suggestion="Check file syntax and permissions",
            context={"file_path": file_path, "reason": reason}
        )

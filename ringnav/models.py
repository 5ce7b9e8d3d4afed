"""
Pydantic data models for ring navigation.

Defines the window manager query inputs, the immutable ring topology snapshot,
and the commands produced by the navigation engine.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Workspace numbers are grouped into rings of this many numbers
RING_SIZE = 100

# Name marker flagging the workspace a ring should return to
ACTIVE_MARKER = "_act"


# Enumerations

class Direction(str, Enum):
    """Navigation direction."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class CommandKind(str, Enum):
    """Switch focus, or move the focused window and follow it."""
    SWITCH = "switch"
    MOVE = "move"


class CommandType(str, Enum):
    """Window manager command shapes issued by the navigator."""
    FOCUS = "focus"
    MOVE_CONTAINER = "move_container"


class TargetAction(str, Enum):
    """Terminal shape of a navigation decision."""
    STEP = "step"
    WRAP = "wrap"
    CREATE = "create"


# Window manager query models

class WorkspaceDescriptor(BaseModel):
    """One entry of the flat get_workspaces reply."""

    output: str = Field(..., description="Output (display) name")
    num: int = Field(..., ge=0, le=65535, description="Workspace number")
    name: str = Field(..., description="Workspace name")
    visible: bool = Field(False, description="Visible on its output")
    focused: bool = Field(False, description="Holds input focus")

    @classmethod
    def from_i3_reply(cls, reply: Any) -> "WorkspaceDescriptor":
        """Build from an i3ipc WorkspaceReply."""
        return cls(
            output=reply.output,
            num=reply.num,
            name=reply.name,
            visible=bool(reply.visible),
            focused=bool(reply.focused),
        )


class TreeNode(BaseModel):
    """Node of the window tree returned by get_tree."""

    name: Optional[str] = None
    type: str = "con"
    window: Optional[int] = Field(None, description="X11 window id of a window leaf")
    app_id: Optional[str] = Field(None, description="Wayland app id of a native sway window")
    nodes: List[TreeNode] = Field(default_factory=list)

    @property
    def is_workspace(self) -> bool:
        return self.type == "workspace"

    @property
    def is_window(self) -> bool:
        return self.window is not None or self.app_id is not None

    @classmethod
    def from_i3_con(cls, con: Any) -> "TreeNode":
        """Recursively convert an i3ipc Con into a TreeNode."""
        return cls(
            name=con.name,
            type=con.type,
            window=con.window,
            app_id=getattr(con, "app_id", None),
            nodes=[cls.from_i3_con(child) for child in con.nodes],
        )


# Topology snapshot

class Workspace(BaseModel):
    """Workspace as seen by the ring topology."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=0, description="Window manager workspace number")
    name: str
    active_window_count: int = Field(0, ge=0, description="Window leaves under the workspace")

    @property
    def ring_id(self) -> int:
        return self.id // RING_SIZE


class Ring(BaseModel):
    """Workspaces of one output sharing a hundreds band, in listing order."""

    model_config = ConfigDict(frozen=True)

    ring_id: int = Field(..., ge=0)
    workspaces: Tuple[Workspace, ...] = Field(..., min_length=1)
    current_index: int = Field(0, ge=0)
    next_free_id: int = Field(..., ge=0)

    @property
    def current_workspace(self) -> Workspace:
        return self.workspaces[self.current_index]

    @property
    def last_index(self) -> int:
        return len(self.workspaces) - 1


class Output(BaseModel):
    """Physical display with its own independent set of rings."""

    model_config = ConfigDict(frozen=True)

    name: str
    rings_by_id: Dict[int, Ring]
    current_ring_id: int

    @property
    def current_ring(self) -> Ring:
        return self.rings_by_id[self.current_ring_id]

    def sorted_ring_ids(self) -> List[int]:
        """Ring ids in ascending numeric order."""
        return sorted(self.rings_by_id)


class GlobalState(BaseModel):
    """Immutable snapshot of every output's rings and the current position."""

    model_config = ConfigDict(frozen=True)

    outputs_by_name: Dict[str, Output]
    current_output_name: str
    next_ring_id: int = Field(..., ge=0)

    @property
    def current_output(self) -> Output:
        return self.outputs_by_name[self.current_output_name]


# Navigation results

class WorkspaceCommand(BaseModel):
    """Single window manager command targeting a workspace number.

    Example:
        >>> WorkspaceCommand(command_type=CommandType.MOVE_CONTAINER, workspace_id=7).to_wm_command()
        'move container to workspace 7'
    """

    model_config = ConfigDict(frozen=True)

    command_type: CommandType
    workspace_id: int = Field(..., ge=0)

    def to_wm_command(self) -> str:
        """Render the i3/sway IPC command string."""
        match self.command_type:
            case CommandType.FOCUS:
                return f"workspace {self.workspace_id}"
            case CommandType.MOVE_CONTAINER:
                return f"move container to workspace {self.workspace_id}"


class NavigationDecision(BaseModel):
    """Outcome of one navigation request."""

    model_config = ConfigDict(frozen=True)

    direction: Direction
    kind: CommandKind
    action: TargetAction
    target_id: int = Field(..., ge=0)
    commands: Tuple[str, ...]


TreeNode.model_rebuild()

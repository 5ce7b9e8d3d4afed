"""
Navigation engine.

Pure decision procedure mapping a GlobalState, a direction and a command kind
to the ordered window manager commands that carry it out.

Boundary policy:
- Left at the first workspace and Up at the first ring always create a new
  workspace / ring.
- Right at the last workspace and Down at the last ring wrap around when the
  current workspace is vacant, and create otherwise.

For move commands the current workspace still contains the window being moved,
so it counts as vacant with one window left.
"""

from typing import List, Tuple

from .models import (
    RING_SIZE,
    CommandKind,
    CommandType,
    Direction,
    GlobalState,
    NavigationDecision,
    TargetAction,
    WorkspaceCommand,
)

# Highest window count at which the current workspace counts as vacant
VACANCY_THRESHOLD = {
    CommandKind.SWITCH: 0,
    CommandKind.MOVE: 1,
}


def _resolve_target(state: GlobalState, direction: Direction, kind: CommandKind) -> Tuple[TargetAction, int]:
    output = state.current_output
    ring = output.current_ring
    idx = ring.current_index
    vacant = ring.current_workspace.active_window_count <= VACANCY_THRESHOLD[kind]

    if direction == Direction.LEFT:
        if idx == 0:
            return TargetAction.CREATE, ring.next_free_id
        return TargetAction.STEP, ring.workspaces[idx - 1].id

    if direction == Direction.RIGHT:
        if idx == ring.last_index:
            if vacant:
                return TargetAction.WRAP, ring.workspaces[0].id
            return TargetAction.CREATE, ring.next_free_id
        return TargetAction.STEP, ring.workspaces[idx + 1].id

    ring_ids = output.sorted_ring_ids()
    pos = ring_ids.index(output.current_ring_id)
    new_ring_workspace = state.next_ring_id * RING_SIZE

    if direction == Direction.DOWN:
        if pos == len(ring_ids) - 1:
            if vacant:
                first_ring = output.rings_by_id[ring_ids[0]]
                return TargetAction.WRAP, first_ring.current_workspace.id
            return TargetAction.CREATE, new_ring_workspace
        return TargetAction.STEP, output.rings_by_id[ring_ids[pos + 1]].current_workspace.id

    if direction == Direction.UP:
        if pos == 0:
            return TargetAction.CREATE, new_ring_workspace
        return TargetAction.STEP, output.rings_by_id[ring_ids[pos - 1]].current_workspace.id

    raise ValueError(f"Unknown direction: {direction}")


def _render(kind: CommandKind, target_id: int) -> List[WorkspaceCommand]:
    focus = WorkspaceCommand(command_type=CommandType.FOCUS, workspace_id=target_id)
    if kind == CommandKind.MOVE:
        move = WorkspaceCommand(command_type=CommandType.MOVE_CONTAINER, workspace_id=target_id)
        return [move, focus]
    return [focus]


def plan(state: GlobalState, direction: Direction, kind: CommandKind) -> NavigationDecision:
    """
    Decide where a navigation request lands and how to get there.

    Args:
        state: Snapshot built for this invocation
        direction: Requested direction
        kind: Switch focus, or move the focused window and follow it

    Returns:
        NavigationDecision with the target and the ordered command strings
    """
    action, target_id = _resolve_target(state, direction, kind)
    commands = tuple(cmd.to_wm_command() for cmd in _render(kind, target_id))
    return NavigationDecision(
        direction=direction,
        kind=kind,
        action=action,
        target_id=target_id,
        commands=commands,
    )


def decide(state: GlobalState, direction: Direction, kind: CommandKind) -> List[str]:
    """Ordered command strings for a navigation request."""
    return list(plan(state, direction, kind).commands)

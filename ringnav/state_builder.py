"""
Ring topology reconstruction.

Folds the flat workspace list and the window tree into an immutable
GlobalState. Nothing is carried over between invocations.
"""

import logging
from typing import Dict, Iterable, List, Optional

from .errors import ErrorCode, QueryError
from .models import (
    ACTIVE_MARKER,
    RING_SIZE,
    GlobalState,
    Output,
    Ring,
    TreeNode,
    Workspace,
    WorkspaceDescriptor,
)

logger = logging.getLogger(__name__)


class _RingDraft:
    """Mutable accumulator for one ring while the workspace list is scanned."""

    def __init__(self, ring_id: int):
        self.ring_id = ring_id
        self.workspaces: List[Workspace] = []
        self.current_index = 0
        self.next_free_id = 0

    def add(self, workspace: Workspace, is_current: bool) -> None:
        if is_current:
            self.current_index = len(self.workspaces)
        if self.next_free_id <= workspace.id:
            self.next_free_id = workspace.id + 1
        self.workspaces.append(workspace)

    def freeze(self) -> Ring:
        return Ring(
            ring_id=self.ring_id,
            workspaces=tuple(self.workspaces),
            current_index=self.current_index,
            next_free_id=self.next_free_id,
        )


class _OutputDraft:
    """Mutable accumulator for one output."""

    def __init__(self, name: str):
        self.name = name
        self.rings: Dict[int, _RingDraft] = {}
        self.focused_ring_id: Optional[int] = None
        self.visible_ring_id: Optional[int] = None

    def ring(self, ring_id: int) -> _RingDraft:
        if ring_id not in self.rings:
            self.rings[ring_id] = _RingDraft(ring_id)
        return self.rings[ring_id]

    def freeze(self) -> Output:
        # Dicts keep insertion order, so the first key is the first ring seen
        current_ring_id = self.focused_ring_id
        if current_ring_id is None:
            current_ring_id = self.visible_ring_id
        if current_ring_id is None:
            current_ring_id = next(iter(self.rings))

        return Output(
            name=self.name,
            rings_by_id={ring_id: draft.freeze() for ring_id, draft in self.rings.items()},
            current_ring_id=current_ring_id,
        )


def find_workspace_node(descriptor: WorkspaceDescriptor, tree: TreeNode) -> Optional[TreeNode]:
    """
    Locate the tree node of a listed workspace.

    Searches the top-level branch named after the workspace's output for a
    workspace-typed descendant carrying the workspace's name.

    Args:
        descriptor: Workspace from the get_workspaces reply
        tree: Root of the get_tree reply

    Returns:
        The workspace node, or None if the tree does not contain it
    """
    for output_node in tree.nodes:
        if output_node.name != descriptor.output:
            continue

        stack = list(reversed(output_node.nodes))
        while stack:
            node = stack.pop()
            if node.is_workspace:
                if node.name == descriptor.name:
                    return node
                # Workspaces never nest
                continue
            stack.extend(reversed(node.nodes))

    return None


def count_windows(node: TreeNode) -> int:
    """Count window leaves among all descendants of node."""
    count = 0
    for child in node.nodes:
        if child.is_window:
            count += 1
        count += count_windows(child)
    return count


def build_state(workspaces: Iterable[WorkspaceDescriptor], tree: TreeNode) -> GlobalState:
    """
    Build the ring topology snapshot from the two window manager queries.

    Args:
        workspaces: get_workspaces reply, in the order the window manager returned it
        tree: get_tree reply from the same session

    Returns:
        Immutable GlobalState

    Raises:
        QueryError: If a listed workspace is missing from the tree, or no
            workspace is focused
    """
    outputs: Dict[str, _OutputDraft] = {}
    current_output_name: Optional[str] = None
    next_ring_id = 0

    for descriptor in workspaces:
        if descriptor.output not in outputs:
            outputs[descriptor.output] = _OutputDraft(descriptor.output)
        output = outputs[descriptor.output]

        ring_id = descriptor.num // RING_SIZE
        if next_ring_id <= ring_id:
            next_ring_id = ring_id + 1

        node = find_workspace_node(descriptor, tree)
        if node is None:
            raise QueryError(
                "get_tree",
                f"workspace '{descriptor.name}' on output '{descriptor.output}' is not in the tree",
                code=ErrorCode.WORKSPACE_NOT_IN_TREE,
                context={"workspace": descriptor.name, "output": descriptor.output},
            )

        workspace = Workspace(
            id=descriptor.num,
            name=descriptor.name,
            active_window_count=count_windows(node),
        )
        is_current = descriptor.visible or ACTIVE_MARKER in descriptor.name
        output.ring(ring_id).add(workspace, is_current)

        if descriptor.visible:
            output.visible_ring_id = ring_id

        if descriptor.focused:
            output.focused_ring_id = ring_id
            current_output_name = descriptor.output

    if not outputs:
        raise QueryError(
            "get_workspaces",
            "no workspaces reported",
            code=ErrorCode.NO_FOCUSED_WORKSPACE,
        )

    if current_output_name is None:
        raise QueryError(
            "get_workspaces",
            "no workspace is focused",
            code=ErrorCode.NO_FOCUSED_WORKSPACE,
        )

    state = GlobalState(
        outputs_by_name={name: draft.freeze() for name, draft in outputs.items()},
        current_output_name=current_output_name,
        next_ring_id=next_ring_id,
    )

    logger.debug(
        f"Built ring state: {len(state.outputs_by_name)} outputs, "
        f"current output {state.current_output_name}, next ring {state.next_ring_id}"
    )
    return state

"""
Pytest configuration and fixtures for i3 Ring Navigator tests.

Layouts are lists of workspace dicts:
    {"output": "DP-1", "num": 5, "name": "5", "windows": 2,
     "visible": False, "focused": False}
from which both the get_workspaces reply and a matching get_tree reply
are generated.
"""

import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple
from unittest.mock import MagicMock, Mock

import pytest

# Add repository root to Python path so ringnav imports without installation
package_root = Path(__file__).parent.parent
if str(package_root) not in sys.path:
    sys.path.insert(0, str(package_root))

from ringnav.models import GlobalState, TreeNode, WorkspaceDescriptor
from ringnav.state_builder import build_state

Layout = List[Dict[str, Any]]

_next_window_id = 1000


def _window_nodes(count: int) -> List[TreeNode]:
    """Window leaves, the second half nested inside a split container."""
    global _next_window_id
    leaves = []
    for _ in range(count):
        _next_window_id += 1
        leaves.append(TreeNode(name=f"window-{_next_window_id}", type="con", window=_next_window_id))

    half = len(leaves) // 2
    if half == 0:
        return leaves
    split = TreeNode(name=None, type="con", nodes=leaves[half:])
    return leaves[:half] + [split]


def descriptors_from(layout: Layout) -> List[WorkspaceDescriptor]:
    return [
        WorkspaceDescriptor(
            output=ws["output"],
            num=ws["num"],
            name=ws.get("name", str(ws["num"])),
            visible=ws.get("visible", False),
            focused=ws.get("focused", False),
        )
        for ws in layout
    ]


def tree_from(layout: Layout) -> TreeNode:
    """Build an i3-shaped tree: root → output → content → workspace → windows."""
    outputs: Dict[str, List[TreeNode]] = {}
    for ws in layout:
        workspace_node = TreeNode(
            name=ws.get("name", str(ws["num"])),
            type="workspace",
            nodes=_window_nodes(ws.get("windows", 0)),
        )
        outputs.setdefault(ws["output"], []).append(workspace_node)

    scratch = TreeNode(
        name="__i3",
        type="output",
        nodes=[TreeNode(name="content", type="con", nodes=[
            TreeNode(name="__i3_scratch", type="workspace"),
        ])],
    )
    output_nodes = [
        TreeNode(
            name=name,
            type="output",
            nodes=[
                TreeNode(name="topdock", type="dockarea"),
                TreeNode(name="content", type="con", nodes=workspaces),
                TreeNode(name="bottomdock", type="dockarea"),
            ],
        )
        for name, workspaces in outputs.items()
    ]
    return TreeNode(name="root", type="root", nodes=[scratch] + output_nodes)


@pytest.fixture
def snapshot_factory() -> Callable[[Layout], Tuple[List[WorkspaceDescriptor], TreeNode]]:
    """Build (workspace list, tree) query replies from a layout."""
    def factory(layout: Layout):
        return descriptors_from(layout), tree_from(layout)
    return factory


@pytest.fixture
def state_factory() -> Callable[[Layout], GlobalState]:
    """Build a GlobalState from a layout through the state builder."""
    def factory(layout: Layout) -> GlobalState:
        return build_state(descriptors_from(layout), tree_from(layout))
    return factory


@pytest.fixture
def single_ring_layout() -> Layout:
    """One output, ring 0 with workspaces 5, 6, 7 (6 visible and focused)."""
    return [
        {"output": "DP-1", "num": 5, "windows": 1},
        {"output": "DP-1", "num": 6, "windows": 2, "visible": True, "focused": True},
        {"output": "DP-1", "num": 7, "windows": 0},
    ]


@pytest.fixture
def multi_ring_layout() -> Layout:
    """Two outputs; DP-1 holds rings 0, 1 and 3, HDMI-A-1 holds ring 2."""
    return [
        {"output": "DP-1", "num": 1, "windows": 1},
        {"output": "DP-1", "num": 2, "windows": 3, "visible": True, "focused": True},
        {"output": "DP-1", "num": 101, "windows": 0},
        {"output": "DP-1", "num": 102, "name": "102_act", "windows": 1},
        {"output": "DP-1", "num": 103, "windows": 2},
        {"output": "HDMI-A-1", "num": 201, "windows": 1, "visible": True},
        {"output": "DP-1", "num": 305, "windows": 0},
        {"output": "DP-1", "num": 304, "windows": 4},
    ]


def _i3_con(node: TreeNode) -> Mock:
    con = Mock()
    con.name = node.name
    con.type = node.type
    con.window = node.window
    con.app_id = node.app_id
    con.nodes = [_i3_con(child) for child in node.nodes]
    return con


@pytest.fixture
def mock_i3_connection(single_ring_layout):
    """Mock synchronous i3ipc.Connection serving single_ring_layout."""
    conn = MagicMock()

    replies = []
    for ws in single_ring_layout:
        reply = Mock(num=ws["num"], output=ws["output"],
                     visible=ws.get("visible", False), focused=ws.get("focused", False))
        # Mock(name=...) names the mock itself, so set it afterwards
        reply.name = ws.get("name", str(ws["num"]))
        replies.append(reply)

    conn.get_workspaces.return_value = replies
    conn.get_tree.return_value = _i3_con(tree_from(single_ring_layout))
    conn.command.return_value = [Mock(success=True, error=None)]
    return conn

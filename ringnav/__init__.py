"""
i3 Ring Navigator

Two-dimensional workspace navigation for i3/sway.
Workspaces on an output are grouped into rings of 100 numbers; left/right
moves inside a ring, up/down moves between rings.
"""

__version__ = "1.0.0"
__author__ = "NixOS Configuration Team"

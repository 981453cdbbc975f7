"""
Wangfill Editor - Editor State

Manages terrain brush state, view settings, and canvas position.
"""

from typing import Dict, Tuple

from editor.core.constants import DEFAULT_SCALE


class EditorState:
    """Manages editor application state."""

    def __init__(self):
        # Canvas position and zoom
        self.canvas_offset_x: int = 0
        self.canvas_offset_y: int = 0
        self.canvas_scale: int = DEFAULT_SCALE

        # Terrain brush settings
        self.selected_terrain: int = 0

        # Tiles a paint at the hovered target would produce: (x, y) -> tile
        self.terrain_preview: Dict[Tuple[int, int], int] = {}

        # Cells touched by the hovered target (for outline rendering)
        self.brush_cells: list = []

        # Diagnostic trace of the fill algorithm
        self.trace_enabled: bool = False

    def select_terrain(self, index: int, terrain_count: int):
        """Select a terrain by index, wrapping around the terrain count."""
        if terrain_count > 0:
            self.selected_terrain = index % terrain_count

    def toggle_trace(self):
        """Toggle the fill algorithm trace."""
        self.trace_enabled = not self.trace_enabled

    def clear_preview(self):
        self.terrain_preview = {}
        self.brush_cells = []

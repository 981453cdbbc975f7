"""
Terrain brush tool - paints Wang terrain at corners and edges.

The mouse position is resolved to the corner or edge under the cursor for
the active terrain set's topology; painting runs the Wang filler over the
cells touching that target. While hovering, the tool keeps a preview of the
tiles a click would place.
"""

import pygame

from editor.controllers.view_state import ViewState
from editor.core.constants import TILE_SIZE
from wangfill.core.paint_target import get_paint_target
from wangfill.core.painting import (
    affected_region,
    paint_terrain_at_target,
    preview_terrain_at_target,
)

from .base_tool import ToolContext, ToolResult


class TerrainBrushTool:
    """Terrain brush - paints the selected terrain with automatic tile matching."""

    def __init__(self):
        self.is_painting = False
        self.last_paint_target = None
        self.last_preview_target = None

    def handle_mouse_down(self, pos, button, modifiers, context):
        if button != 1:  # Only left click
            return ToolResult.not_handled()

        if context.terrain_set is None or context.tile_layer is None:
            return ToolResult(handled=True, message="Terrain Brush: No terrain set selected")

        # Start paint stroke
        if not self.is_painting:
            self.is_painting = True
            self.last_paint_target = None

        return self._paint_at(pos, context)

    def handle_mouse_up(self, pos, button, context):
        if button == 1:
            self.is_painting = False
            self.last_paint_target = None
        return ToolResult.handled()

    def handle_mouse_motion(self, pos, context):
        if context.terrain_set is None or context.tile_layer is None:
            return ToolResult.not_handled()
        if self.is_painting:
            return self._paint_at(pos, context)
        return self._update_preview(pos, context)

    def handle_key_down(self, key, modifiers, context):
        if key == pygame.K_d and modifiers & pygame.KMOD_CTRL:
            context.state.toggle_trace()
            status = "on" if context.state.trace_enabled else "off"
            return ToolResult(handled=True, message=f"Terrain Brush: Trace {status}")

        if key in (pygame.K_LEFTBRACKET, pygame.K_RIGHTBRACKET):
            count = context.terrain_count()
            if count == 0:
                return ToolResult.handled()
            step = 1 if key == pygame.K_RIGHTBRACKET else -1
            context.state.select_terrain(context.state.selected_terrain + step, count)
            # Preview depends on the terrain, so recompute on next motion
            self.last_preview_target = None
            context.state.clear_preview()
            name = context.terrain_set.terrains[context.state.selected_terrain]
            return ToolResult(handled=True, needs_render=True, message=f"Terrain: {name}")

        return ToolResult.not_handled()

    def handle_key_up(self, key, context):
        return ToolResult.not_handled()

    def on_activated(self, context):
        pass

    def on_deactivated(self, context):
        context.state.clear_preview()
        self.reset()

    def reset(self):
        self.is_painting = False
        self.last_paint_target = None
        self.last_preview_target = None

    def get_hotkey(self) -> int | None:
        """Return 'T' key for Terrain Brush tool."""
        return pygame.K_t

    def _resolve_target(self, pos: tuple[int, int], context: ToolContext):
        """Paint target under a screen position, or None outside the canvas."""
        view_state = ViewState(
            context.canvas_rect(),
            context.state.canvas_offset_x,
            context.state.canvas_offset_y,
            context.state.canvas_scale,
        )

        world = view_state.screen_to_world(pos, context.tile_layer.height)
        if world is None:
            return None
        return get_paint_target(world[0], world[1], TILE_SIZE, context.terrain_set.set_type)

    def _paint_at(self, pos: tuple[int, int], context: ToolContext) -> ToolResult:
        """Paint at screen position; each target is painted once per stroke."""
        target = self._resolve_target(pos, context)
        if target is None or target == self.last_paint_target:
            return ToolResult.handled()
        self.last_paint_target = target

        layer = context.tile_layer
        region = affected_region(target, layer.width, layer.height)
        if not region:
            return ToolResult.handled()

        before = list(layer.tiles)
        paint_terrain_at_target(
            layer.tiles,
            layer.width,
            layer.height,
            target,
            context.terrain_set,
            context.state.selected_terrain,
            debug=context.state.trace_enabled,
        )

        # Preview is stale once the layer changed
        self.last_preview_target = None
        context.state.clear_preview()

        changed = sum(1 for old, new in zip(before, layer.tiles) if old != new)
        unmatched = [cell for cell in region if layer.tiles[cell[1] * layer.width + cell[0]] is None]

        if changed == 0:
            if unmatched:
                return ToolResult(handled=True, message="Terrain Brush: No tile matched")
            return ToolResult.handled()

        layer.modified = True
        return ToolResult.modified(message=f"Terrain Brush: {changed} tile(s) changed")

    def _update_preview(self, pos: tuple[int, int], context: ToolContext) -> ToolResult:
        """Recompute the hover preview when the target under the cursor changes."""
        target = self._resolve_target(pos, context)
        if target == self.last_preview_target:
            return ToolResult.handled()
        self.last_preview_target = target

        if target is None:
            context.state.clear_preview()
            return ToolResult(handled=True, needs_render=True)

        layer = context.tile_layer
        changes = preview_terrain_at_target(
            layer.tiles,
            layer.width,
            layer.height,
            target,
            context.terrain_set,
            context.state.selected_terrain,
        )
        context.state.terrain_preview = dict(changes)
        context.state.brush_cells = affected_region(target, layer.width, layer.height)
        return ToolResult(handled=True, needs_render=True)

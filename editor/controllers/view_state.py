"""
Wangfill Editor - View State

Camera for the layer canvas. Screen pixels grow downward while layer and
world coordinates grow upward, so every conversion flips Y against the
layer height.
"""

from pygame import Rect

from editor.core.constants import MAX_SCALE, MIN_SCALE, TILE_SIZE


class ViewState:
    """Scroll offset and zoom of the canvas showing one tile layer."""

    def __init__(
        self, canvas_rect: Rect, offset_x: int = 0, offset_y: int = 0, scale: int = 2
    ):
        """
        Args:
            canvas_rect: Screen area the layer is drawn into
            offset_x: Pixels scrolled right
            offset_y: Pixels scrolled down from the layer's top row
            scale: Zoom factor, clamped to MIN_SCALE..MAX_SCALE
        """
        self.canvas_rect = canvas_rect
        self.offset_x = offset_x
        self.offset_y = offset_y
        self.scale = max(MIN_SCALE, min(MAX_SCALE, scale))

    @property
    def tile_size(self) -> int:
        """On-screen tile edge in pixels."""
        return TILE_SIZE * self.scale

    def screen_to_world(
        self, screen_pos: tuple[int, int], layer_height: int
    ) -> tuple[float, float] | None:
        """
        Map a screen pixel to world units (TILE_SIZE per tile, Y-up).

        The canvas top edge shows the top of row layer_height - 1, so world
        Y = layer_height * TILE_SIZE there and 0 at the bottom of row 0.

        Returns:
            (world_x, world_y), or None when the pixel is off the canvas
        """
        if not self.canvas_rect.collidepoint(screen_pos):
            return None

        canvas_x = screen_pos[0] - self.canvas_rect.x + self.offset_x
        canvas_y = screen_pos[1] - self.canvas_rect.y + self.offset_y

        return (canvas_x / self.scale, layer_height * TILE_SIZE - canvas_y / self.scale)

    def screen_to_tile(
        self, screen_pos: tuple[int, int], layer_height: int
    ) -> tuple[int, int] | None:
        """Tile (x, y) under a screen pixel, Y-up; None off the canvas."""
        world = self.screen_to_world(screen_pos, layer_height)
        if world is None:
            return None
        return (int(world[0] // TILE_SIZE), int(world[1] // TILE_SIZE))

    def tile_to_screen(self, tile_pos: tuple[int, int], layer_height: int) -> tuple[int, int]:
        """Screen pixel of a tile's top-left corner."""
        x, y = tile_pos
        row_from_top = layer_height - 1 - y
        return (
            self.canvas_rect.x + x * self.tile_size - self.offset_x,
            self.canvas_rect.y + row_from_top * self.tile_size - self.offset_y,
        )

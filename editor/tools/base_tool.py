"""
Tool interface shared by the editor's layer tools.

A tool receives raw pygame input (screen positions, buttons, key codes) plus a
ToolContext, and reports back through a ToolResult so the host application
decides when to redraw or mark the layer dirty.
"""

from typing import Protocol

from pygame import Rect

from editor.core.constants import CANVAS_OFFSET_X, CANVAS_OFFSET_Y, STATUS_HEIGHT


class Tool(Protocol):
    """Structural interface for layer tools; no base class required."""

    def handle_mouse_down(
        self, pos: tuple[int, int], button: int, modifiers: int, context: "ToolContext"
    ) -> "ToolResult": ...

    def handle_mouse_up(
        self, pos: tuple[int, int], button: int, context: "ToolContext"
    ) -> "ToolResult": ...

    def handle_mouse_motion(self, pos: tuple[int, int], context: "ToolContext") -> "ToolResult": ...

    def handle_key_down(self, key: int, modifiers: int, context: "ToolContext") -> "ToolResult": ...

    def handle_key_up(self, key: int, context: "ToolContext") -> "ToolResult": ...

    def on_activated(self, context: "ToolContext") -> None: ...

    def on_deactivated(self, context: "ToolContext") -> None:
        """Drop any hover state the tool left in the editor state."""
        ...

    def reset(self) -> None: ...

    def get_hotkey(self) -> int | None:
        """pygame key that selects this tool, or None."""
        ...


class ToolContext:
    """What a tool may touch: the layer being edited, its terrain set and editor state."""

    def __init__(
        self,
        tile_layer,
        terrain_set,
        state,
        screen_width: int,
        screen_height: int,
    ):
        self.tile_layer = tile_layer
        self.terrain_set = terrain_set
        self.state = state
        self.screen_width = screen_width
        self.screen_height = screen_height

    def terrain_count(self) -> int:
        """Number of terrains in the active terrain set (0 if none)."""
        if self.terrain_set is None:
            return 0
        return len(self.terrain_set.terrains)

    def canvas_rect(self) -> Rect:
        """Screen area the layer is drawn in (right of the picker, between toolbar and status bar)."""
        return Rect(
            CANVAS_OFFSET_X,
            CANVAS_OFFSET_Y,
            self.screen_width - CANVAS_OFFSET_X,
            self.screen_height - CANVAS_OFFSET_Y - STATUS_HEIGHT,
        )


class ToolResult:
    """Outcome of one input event."""

    def __init__(
        self,
        handled: bool = False,
        needs_render: bool = False,
        layer_modified: bool = False,
        message: str | None = None,
    ):
        self.handled = handled
        self.needs_render = needs_render
        self.layer_modified = layer_modified
        self.message = message

    @staticmethod
    def handled() -> "ToolResult":
        return ToolResult(handled=True)

    @staticmethod
    def not_handled() -> "ToolResult":
        return ToolResult(handled=False)

    @staticmethod
    def modified(message: str | None = None) -> "ToolResult":
        """Tiles in the layer changed; redraw and mark the layer dirty."""
        return ToolResult(
            handled=True,
            needs_render=True,
            layer_modified=True,
            message=message,
        )

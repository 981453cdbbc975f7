"""
Wangfill Editor - Tools

Editor tools for painting terrain onto tile layers.
"""

from .base_tool import Tool, ToolContext, ToolResult
from .terrain_brush_tool import TerrainBrushTool

__all__ = [
    "Tool",
    "ToolContext",
    "ToolResult",
    "TerrainBrushTool",
]

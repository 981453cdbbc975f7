"""
Wangfill Editor - Constants

Configuration constants for the terrain brush: tile dimensions and the
canvas layout the brush converts mouse positions against.
"""

# Tile size in world units (pixels at scale 1)
TILE_SIZE = 16

# UI Layout
PICKER_WIDTH = 200
TOOLBAR_HEIGHT = 40
STATUS_HEIGHT = 30
CANVAS_OFFSET_X = PICKER_WIDTH
CANVAS_OFFSET_Y = TOOLBAR_HEIGHT

# Zoom limits
MIN_SCALE = 1
MAX_SCALE = 8
DEFAULT_SCALE = 2

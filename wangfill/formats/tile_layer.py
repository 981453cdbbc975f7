"""
Wangfill - Tile Layer

A width x height grid of optional tile ids, stored row-major as the flat
list the Wang filler operates on. Handles loading from and saving to JSON.

File format:
    {"width": W, "height": H, "rows": [[id or null, ...], ...]}

rows[y] is grid row y; y = 0 is the bottom row (Y-up).
"""

from typing import List, Optional

from . import compact_json as json


class TileLayer:
    """Flat row-major tile grid; None marks an empty cell."""

    def __init__(self, width: int, height: int, tiles: Optional[List[Optional[int]]] = None):
        if width < 0 or height < 0:
            raise ValueError(f"Layer size must be non-negative, got {width}x{height}")
        if tiles is None:
            tiles = [None] * (width * height)
        elif len(tiles) != width * height:
            raise ValueError(
                f"Expected {width * height} tiles for a {width}x{height} layer, got {len(tiles)}"
            )
        self.width = width
        self.height = height
        self.tiles: List[Optional[int]] = list(tiles)
        self.filepath: Optional[str] = None
        self.modified: bool = False

    @classmethod
    def from_rows(cls, rows: List[List[Optional[int]]]) -> "TileLayer":
        """Build a layer from rows, rows[0] being the bottom row."""
        if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
            raise ValueError("Layer rows must be a list of lists")
        height = len(rows)
        width = len(rows[0]) if rows else 0
        tiles: List[Optional[int]] = []
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} tiles, expected {width}")
            tiles.extend(row)
        return cls(width, height, tiles)

    def to_rows(self) -> List[List[Optional[int]]]:
        return [self.tiles[y * self.width:(y + 1) * self.width] for y in range(self.height)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> Optional[int]:
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile ({x}, {y}) outside {self.width}x{self.height} layer")
        return self.tiles[y * self.width + x]

    def set_tile(self, x: int, y: int, tile: Optional[int]):
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile ({x}, {y}) outside {self.width}x{self.height} layer")
        idx = y * self.width + x
        if self.tiles[idx] != tile:
            self.tiles[idx] = tile
            self.modified = True

    def copy(self) -> "TileLayer":
        layer = TileLayer(self.width, self.height, self.tiles)
        layer.filepath = self.filepath
        return layer

    def diff(self, other: "TileLayer") -> List[tuple]:
        """
        Cells whose tile differs in `other`.

        Returns:
            List of ((x, y), old_tile, new_tile), row-major

        Raises:
            ValueError: If the layers have different sizes
        """
        if (self.width, self.height) != (other.width, other.height):
            raise ValueError(
                f"Layer size mismatch: {self.width}x{self.height} vs {other.width}x{other.height}"
            )
        changes = []
        for idx, (old, new) in enumerate(zip(self.tiles, other.tiles)):
            if old != new:
                changes.append(((idx % self.width, idx // self.width), old, new))
        return changes

    @classmethod
    def load(cls, path: str) -> "TileLayer":
        """Load a layer from JSON file."""
        with open(path, 'r') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Layer file {path} must contain a JSON object")
        try:
            rows = data["rows"]
        except KeyError:
            raise ValueError(f"Layer file {path} has no 'rows'") from None

        layer = cls.from_rows(rows)
        if "width" in data and data["width"] != layer.width:
            raise ValueError(f"Layer width {data['width']} does not match rows ({layer.width})")
        if "height" in data and data["height"] != layer.height:
            raise ValueError(f"Layer height {data['height']} does not match rows ({layer.height})")

        layer.filepath = str(path)
        layer.modified = False
        return layer

    def save(self, path: Optional[str] = None):
        """Save layer to JSON file."""
        if path is None:
            path = self.filepath
        if path is None:
            raise ValueError("No save path specified")

        data = {
            "width": self.width,
            "height": self.height,
            "rows": self.to_rows(),
        }

        with open(path, 'w') as f:
            json.dump(data, f, indent=2)

        self.filepath = str(path)
        self.modified = False

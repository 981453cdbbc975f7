"""
Wangfill - Positional Color Model

Per-cell terrain colors at the 8 clock positions around a tile, and the
constraint record the filler builds for each cell it touches.

Position indices (clockwise from top, Y-up):

    7|0|1
    6|X|2
    5|4|3

Even indices are edges (Top, Right, Bottom, Left), odd indices are corners
(TopRight, BottomRight, BottomLeft, TopLeft). All indices wrap modulo 8.
"""

from enum import IntEnum

# Color 0 = empty / no terrain; terrain index N is stored as color N + 1
EMPTY_COLOR = 0

POSITION_COUNT = 8

# Neighbor offsets (dx, dy) in Y-up coordinates, indexed by position
NEIGHBOR_OFFSETS = (
    (0, 1),    # 0 = Top
    (1, 1),    # 1 = TopRight
    (1, 0),    # 2 = Right
    (1, -1),   # 3 = BottomRight
    (0, -1),   # 4 = Bottom
    (-1, -1),  # 5 = BottomLeft
    (-1, 0),   # 6 = Left
    (-1, 1),   # 7 = TopLeft
)


def terrain_to_color(terrain_index: int) -> int:
    """Convert a terrain index to its stored color (index + 1)."""
    return terrain_index + 1


def color_to_terrain(color: int) -> int | None:
    """Convert a stored color back to a terrain index, None for empty."""
    if color == EMPTY_COLOR:
        return None
    return color - 1


class WangPosition(IntEnum):
    """Clock position around a tile."""

    TOP = 0
    TOP_RIGHT = 1
    RIGHT = 2
    BOTTOM_RIGHT = 3
    BOTTOM = 4
    BOTTOM_LEFT = 5
    LEFT = 6
    TOP_LEFT = 7

    @classmethod
    def from_index(cls, i: int) -> "WangPosition":
        return cls(i % POSITION_COUNT)

    def opposite(self) -> "WangPosition":
        """Position across the tile (the one a neighbor uses to face us)."""
        return WangPosition.from_index(self + 4)

    def is_corner(self) -> bool:
        return self % 2 == 1

    def next(self) -> "WangPosition":
        return WangPosition.from_index(self + 1)

    def prev(self) -> "WangPosition":
        return WangPosition.from_index(self + 7)


class WangId:
    """
    Terrain colors at the 8 positions of a single tile.

    A WangId with every color 0 is the wildcard and matches anything.
    """

    __slots__ = ("colors",)

    def __init__(self, colors=None):
        if colors is None:
            colors = [EMPTY_COLOR] * POSITION_COUNT
        self.colors: list[int] = list(colors)
        if len(self.colors) != POSITION_COUNT:
            raise ValueError(f"WangId needs {POSITION_COUNT} colors, got {len(self.colors)}")

    @classmethod
    def wildcard(cls) -> "WangId":
        return cls()

    @classmethod
    def filled(cls, color: int) -> "WangId":
        """Create a WangId with every position set to one color."""
        return cls([color] * POSITION_COUNT)

    def color_at(self, pos: int) -> int:
        return self.colors[pos % POSITION_COUNT]

    def set_color(self, pos: int, color: int) -> None:
        self.colors[pos % POSITION_COUNT] = color

    @staticmethod
    def opposite(pos: int) -> int:
        """Index on the neighbor that faces position `pos`."""
        return (pos + 4) % POSITION_COUNT

    @staticmethod
    def is_corner(pos: int) -> bool:
        return pos % 2 == 1

    @staticmethod
    def next(pos: int) -> int:
        return (pos + 1) % POSITION_COUNT

    @staticmethod
    def prev(pos: int) -> int:
        return (pos + 7) % POSITION_COUNT

    def has_any_terrain(self) -> bool:
        return any(c != EMPTY_COLOR for c in self.colors)

    def copy(self) -> "WangId":
        return WangId(self.colors)

    def __eq__(self, other):
        if not isinstance(other, WangId):
            return NotImplemented
        return self.colors == other.colors

    def __hash__(self):
        return hash(tuple(self.colors))

    def __repr__(self):
        return f"WangId({self.colors})"


# Shared all-empty WangId; use wildcard() or copy() for one you intend to modify
WangId.WILDCARD = WangId()


class CellInfo:
    """
    Constraint information for a single cell.

    `desired` holds the wanted color at each position. When `mask[i]` is set
    the candidate tile must carry exactly `desired[i]` (0 only matches 0);
    otherwise a non-zero `desired[i]` is a soft preference.
    """

    __slots__ = ("desired", "mask")

    def __init__(self):
        self.desired = WangId()
        self.mask: list[bool] = [False] * POSITION_COUNT

    def set_constraint(self, pos: int, color: int) -> None:
        """Set a hard constraint. Always wins over preferences."""
        idx = pos % POSITION_COUNT
        self.desired.colors[idx] = color
        self.mask[idx] = True

    def set_preference(self, pos: int, color: int) -> None:
        """Set a soft preference unless the position is hard-constrained."""
        idx = pos % POSITION_COUNT
        if not self.mask[idx]:
            self.desired.colors[idx] = color

    def is_constrained(self, pos: int) -> bool:
        return self.mask[pos % POSITION_COUNT]

    def copy(self) -> "CellInfo":
        cell = CellInfo()
        cell.desired = self.desired.copy()
        cell.mask = list(self.mask)
        return cell

    def __repr__(self):
        return f"CellInfo(desired={self.desired.colors}, mask={self.mask})"

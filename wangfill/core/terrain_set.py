"""
Wangfill - Terrain Set

Describes which terrain each tile carries at its corners and/or edges, the
cost of transitioning between terrains, and per-tile selection weights.

Tile terrain is stored in the terrain set's own slot order (see
SLOT_POSITIONS) and converted to a WangId for matching.
"""

import json
from enum import Enum
from pathlib import Path

from .wang_id import WangId, terrain_to_color

# Penalty for a soft preference landing on a different terrain when no
# explicit transition cost is defined
DEFAULT_TRANSITION_PENALTY = 1.0

DEFAULT_TILE_PROBABILITY = 1.0


class TerrainSetType(Enum):
    """Topology of a terrain set."""

    CORNER = "corner"
    EDGE = "edge"
    MIXED = "mixed"


# Slot order of TileTerrainData -> WangId position, per set type
SLOT_POSITIONS = {
    # TL, TR, BL, BR
    TerrainSetType.CORNER: (7, 1, 5, 3),
    # Top, Right, Bottom, Left
    TerrainSetType.EDGE: (0, 2, 4, 6),
    # TL, Top, TR, Right, BR, Bottom, BL, Left
    TerrainSetType.MIXED: (7, 0, 1, 2, 3, 4, 5, 6),
}

# Positions that take part in matching for each set type
ACTIVE_POSITIONS = {
    TerrainSetType.CORNER: (1, 3, 5, 7),
    TerrainSetType.EDGE: (0, 2, 4, 6),
    TerrainSetType.MIXED: (0, 1, 2, 3, 4, 5, 6, 7),
}


def get_active_positions(set_type: TerrainSetType) -> tuple[int, ...]:
    return ACTIVE_POSITIONS[set_type]


class TileTerrainData:
    """Terrain index (or None) per slot of a single tile."""

    __slots__ = ("slots",)

    def __init__(self, slots):
        self.slots: tuple[int | None, ...] = tuple(slots)

    def get(self, slot: int) -> int | None:
        """Terrain index at a slot, None when unset or out of range."""
        if 0 <= slot < len(self.slots):
            return self.slots[slot]
        return None

    def has_any_terrain(self) -> bool:
        return any(t is not None for t in self.slots)

    def __eq__(self, other):
        if not isinstance(other, TileTerrainData):
            return NotImplemented
        return self.slots == other.slots

    def __repr__(self):
        return f"TileTerrainData({list(self.slots)})"


def tile_terrain_to_wang_id(data: TileTerrainData, set_type: TerrainSetType) -> WangId:
    """
    Convert per-slot terrain data to a WangId.

    Args:
        data: Tile terrain data in the set type's slot order
        set_type: Topology deciding which positions the slots map to

    Returns:
        WangId with color terrain+1 at mapped positions, 0 elsewhere
    """
    wang = WangId()
    for slot, pos in enumerate(SLOT_POSITIONS[set_type]):
        terrain = data.get(slot)
        if terrain is not None:
            wang.colors[pos] = terrain_to_color(terrain)
    return wang


class TerrainSet:
    """
    A set of terrains plus the tiles that draw them.

    Unknown tiles have no terrain data and contribute a wildcard to matching.
    """

    def __init__(
        self,
        set_type: TerrainSetType,
        terrains: list[str] | None = None,
        name: str = "",
    ):
        self.name = name
        self.set_type = set_type
        self.terrains: list[str] = list(terrains or [])
        self.tile_terrains: dict[int, TileTerrainData] = {}
        self.tile_probabilities: dict[int, float] = {}
        self.transitions: dict[tuple[int, int], float] = {}

    @property
    def slot_count(self) -> int:
        return len(SLOT_POSITIONS[self.set_type])

    def set_tile_terrain(self, tile_id: int, slots, probability: float | None = None):
        """
        Assign terrain to a tile.

        Args:
            tile_id: Tile identifier
            slots: Terrain index or None per slot (Corner/Edge: 4, Mixed: 8)
            probability: Optional selection weight (> 0)

        Raises:
            ValueError: If too many slots or a non-positive probability is given
        """
        slots = tuple(slots)
        if len(slots) > self.slot_count:
            raise ValueError(
                f"Tile {tile_id}: {self.set_type.value} terrain sets take "
                f"{self.slot_count} slots, got {len(slots)}"
            )
        self.tile_terrains[tile_id] = TileTerrainData(slots)
        if probability is not None:
            if probability <= 0:
                raise ValueError(f"Tile {tile_id}: probability must be > 0, got {probability}")
            self.tile_probabilities[tile_id] = float(probability)

    def set_transition(self, from_terrain: int, to_terrain: int, penalty: float):
        if penalty < 0:
            raise ValueError(
                f"Transition {from_terrain}->{to_terrain}: penalty must be >= 0, got {penalty}"
            )
        self.transitions[(from_terrain, to_terrain)] = float(penalty)

    def get_tile_terrain(self, tile_id: int) -> TileTerrainData | None:
        return self.tile_terrains.get(tile_id)

    def wang_id_for_tile(self, tile_id: int) -> WangId | None:
        """WangId of a tile, or None if the tile carries no terrain data."""
        data = self.tile_terrains.get(tile_id)
        if data is None:
            return None
        return tile_terrain_to_wang_id(data, self.set_type)

    def tiles_with_terrain(self) -> list[int]:
        """Tile ids carrying at least one terrain, in ascending id order."""
        return sorted(
            tile_id for tile_id, data in self.tile_terrains.items() if data.has_any_terrain()
        )

    def transition_penalty(self, from_terrain: int, to_terrain: int) -> float:
        """Cost of wanting `from_terrain` and getting `to_terrain`."""
        penalty = self.transitions.get((from_terrain, to_terrain))
        if penalty is not None:
            return penalty
        if from_terrain == to_terrain:
            return 0.0
        return DEFAULT_TRANSITION_PENALTY

    def get_tile_probability(self, tile_id: int) -> float:
        return self.tile_probabilities.get(tile_id, DEFAULT_TILE_PROBABILITY)

    @classmethod
    def from_dict(cls, data: dict) -> "TerrainSet":
        """
        Build a terrain set from its JSON representation.

        Raises:
            ValueError: If the set type is unknown or an entry is malformed
        """
        type_name = data.get("type")
        try:
            set_type = TerrainSetType(type_name)
        except ValueError:
            raise ValueError(f"Unknown terrain set type: {type_name!r}") from None

        terrain_set = cls(set_type, data.get("terrains", []), data.get("name", ""))

        for tile_key, entry in data.get("tiles", {}).items():
            try:
                tile_id = int(tile_key)
            except ValueError:
                raise ValueError(f"Tile id must be an integer, got {tile_key!r}") from None
            if "terrain" not in entry:
                raise ValueError(f"Tile {tile_id}: missing 'terrain' slots")
            terrain_set.set_tile_terrain(tile_id, entry["terrain"], entry.get("probability"))

        for transition in data.get("transitions", []):
            try:
                terrain_set.set_transition(
                    transition["from"], transition["to"], transition["penalty"]
                )
            except KeyError as e:
                raise ValueError(f"Transition missing field {e}") from None

        return terrain_set

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "type": self.set_type.value,
            "terrains": list(self.terrains),
            "tiles": {},
            "transitions": [
                {"from": a, "to": b, "penalty": p} for (a, b), p in sorted(self.transitions.items())
            ],
        }
        for tile_id in sorted(self.tile_terrains):
            entry = {"terrain": list(self.tile_terrains[tile_id].slots)}
            if tile_id in self.tile_probabilities:
                entry["probability"] = self.tile_probabilities[tile_id]
            data["tiles"][str(tile_id)] = entry
        return data

    @classmethod
    def load(cls, path) -> "TerrainSet":
        """
        Load a terrain set from a JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a valid terrain set
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Terrain set file not found: {path}")

        with open(path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid terrain set JSON in {path}: {e}") from e

        return cls.from_dict(data)

    def __repr__(self):
        return (
            f"TerrainSet(name={self.name!r}, type={self.set_type.value}, "
            f"tiles={len(self.tile_terrains)})"
        )

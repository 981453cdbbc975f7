"""
Wangfill - Terrain Painting

Turns a paint target + terrain into hard constraints on the 2 or 4 cells
touching the target and runs the Wang filler over them. Also provides a
non-destructive preview.

In mixed terrain sets corners and edges are independent: painting a corner
never constrains the adjacent edges, and painting an edge never constrains
the adjacent corners.
"""

import structlog

from .paint_target import Corner, HorizontalEdge, PaintTarget, VerticalEdge
from .terrain_set import TerrainSet
from .wang_filler import WangFiller
from .wang_id import POSITION_COUNT, WangPosition, terrain_to_color

logger = structlog.get_logger(__name__)

# Seed salts so corner / edge paints at the same coordinates don't collide
HORIZONTAL_EDGE_SEED_SALT = 0x1000_0000_0000_0000
VERTICAL_EDGE_SEED_SALT = 0x2000_0000_0000_0000


def affected_cells(target: PaintTarget) -> list[tuple[int, int, int]]:
    """
    Cells touching a paint target and the position painted on each.

    A corner is the intersection of 4 tiles (Y-up):
        (cx-1, cy-1) below-left   -> its TopRight
        (cx,   cy-1) below-right  -> its TopLeft
        (cx-1, cy  ) above-left   -> its BottomRight
        (cx,   cy  ) above-right  -> its BottomLeft

    Returns:
        List of (x, y, position); coordinates are not bounds-checked
    """
    if isinstance(target, Corner):
        cx, cy = target.corner_x, target.corner_y
        return [
            (cx - 1, cy - 1, WangPosition.TOP_RIGHT),
            (cx, cy - 1, WangPosition.TOP_LEFT),
            (cx - 1, cy, WangPosition.BOTTOM_RIGHT),
            (cx, cy, WangPosition.BOTTOM_LEFT),
        ]
    if isinstance(target, HorizontalEdge):
        tx, ey = target.tile_x, target.edge_y
        return [
            (tx, ey - 1, WangPosition.TOP),
            (tx, ey, WangPosition.BOTTOM),
        ]
    if isinstance(target, VerticalEdge):
        ex, ty = target.edge_x, target.tile_y
        return [
            (ex - 1, ty, WangPosition.RIGHT),
            (ex, ty, WangPosition.LEFT),
        ]
    raise TypeError(f"Unknown paint target: {target!r}")


def target_seed(target: PaintTarget) -> int:
    """Deterministic filler seed derived from the target's coordinates."""
    if isinstance(target, Corner):
        return (target.corner_x << 32) | target.corner_y
    if isinstance(target, HorizontalEdge):
        return (target.tile_x << 32) | target.edge_y | HORIZONTAL_EDGE_SEED_SALT
    if isinstance(target, VerticalEdge):
        return (target.edge_x << 32) | target.tile_y | VERTICAL_EDGE_SEED_SALT
    raise TypeError(f"Unknown paint target: {target!r}")


def affected_region(target: PaintTarget, width: int, height: int) -> list[tuple[int, int]]:
    """In-bounds cells touching a target, without duplicates."""
    region = []
    for x, y, _ in affected_cells(target):
        if 0 <= x < width and 0 <= y < height and (x, y) not in region:
            region.append((x, y))
    return region


def seed_target_constraints(
    filler: WangFiller, target: PaintTarget, width: int, height: int, color: int
) -> list[tuple[int, int]]:
    """
    Hard-constrain the painted position on each in-bounds cell touching `target`.

    Returns:
        The constrained cells, without duplicates, ready for `filler.apply`
    """
    region = []
    for x, y, pos in affected_cells(target):
        if not (0 <= x < width and 0 <= y < height):
            continue

        filler.get_cell(x, y).set_constraint(pos, color)
        if filler.debug:
            logger.info("hard_constraint_painted", x=x, y=y, position=int(pos), color=color)

        if (x, y) not in region:
            region.append((x, y))
    return region


def paint_terrain_at_target(
    tiles: list,
    width: int,
    height: int,
    target: PaintTarget,
    terrain_set: TerrainSet,
    terrain_index: int,
    debug: bool = False,
) -> None:
    """
    Paint terrain at a corner or edge, mutating `tiles` in place.

    Args:
        tiles: Flat row-major grid of tile ids (None = empty)
        width: Grid width
        height: Grid height
        target: Corner or edge being painted
        terrain_set: Terrain set to pick tiles from
        terrain_index: Terrain to paint (stored as color terrain_index + 1)
        debug: Log constraint and candidate trace events
    """
    color = terrain_to_color(terrain_index)
    filler = WangFiller(terrain_set, seed=target_seed(target), debug=debug)

    if debug:
        logger.info(
            "paint_terrain_at_target",
            target=repr(target),
            terrain=terrain_index,
            color=color,
            set_type=terrain_set.set_type.value,
        )

    region = seed_target_constraints(filler, target, width, height, color)

    if debug:
        logger.info(
            "paint_region", region=region, terrain_tiles=len(terrain_set.tile_terrains)
        )

    filler.apply(tiles, width, height, region)


def paint_terrain(
    tiles: list,
    width: int,
    height: int,
    corner_x: int,
    corner_y: int,
    terrain_set: TerrainSet,
    terrain_index: int,
    debug: bool = False,
) -> None:
    """Paint terrain at a corner intersection (affects up to 4 tiles)."""
    paint_terrain_at_target(
        tiles, width, height, Corner(corner_x, corner_y), terrain_set, terrain_index, debug
    )


def paint_terrain_horizontal_edge(
    tiles: list,
    width: int,
    height: int,
    tile_x: int,
    edge_y: int,
    terrain_set: TerrainSet,
    terrain_index: int,
    debug: bool = False,
) -> None:
    """Paint terrain at the edge between tile rows edge_y - 1 and edge_y."""
    paint_terrain_at_target(
        tiles, width, height, HorizontalEdge(tile_x, edge_y), terrain_set, terrain_index, debug
    )


def paint_terrain_vertical_edge(
    tiles: list,
    width: int,
    height: int,
    edge_x: int,
    tile_y: int,
    terrain_set: TerrainSet,
    terrain_index: int,
    debug: bool = False,
) -> None:
    """Paint terrain at the edge between tile columns edge_x - 1 and edge_x."""
    paint_terrain_at_target(
        tiles, width, height, VerticalEdge(edge_x, tile_y), terrain_set, terrain_index, debug
    )


def update_tile_with_neighbors(
    tiles: list,
    width: int,
    height: int,
    x: int,
    y: int,
    terrain_set: TerrainSet,
    primary_terrain: int,
) -> None:
    """
    Re-select a single tile so it fits its neighbors.

    Every position gets a soft preference for `primary_terrain`; the facing
    colors of existing neighbors are merged in by the filler.
    """
    if not (0 <= x < width and 0 <= y < height):
        return

    color = terrain_to_color(primary_terrain)
    filler = WangFiller(terrain_set)
    cell = filler.get_cell(x, y)
    for i in range(POSITION_COUNT):
        cell.set_preference(i, color)

    filler.apply(tiles, width, height, [(x, y)])


def preview_terrain_at_target(
    tiles: list,
    width: int,
    height: int,
    target: PaintTarget,
    terrain_set: TerrainSet,
    terrain_index: int,
) -> list[tuple[tuple[int, int], int]]:
    """
    Calculate the tiles a paint would produce without modifying `tiles`.

    Returns:
        ((x, y), new_tile) for every cell that would change, row-major
    """
    return preview_terrain_at_targets(tiles, width, height, [target], terrain_set, terrain_index)


def preview_terrain_at_targets(
    tiles: list,
    width: int,
    height: int,
    targets,
    terrain_set: TerrainSet,
    terrain_index: int,
) -> list[tuple[tuple[int, int], int]]:
    """
    Calculate preview tiles for several targets sharing one working copy.

    Targets are painted in order onto the same scratch grid, so later targets
    see the result of earlier ones, exactly as a brush stroke would.

    Returns:
        ((x, y), new_tile) for every cell that would change, row-major
    """
    targets = list(targets)
    if not targets:
        return []

    preview_tiles = list(tiles)
    for target in targets:
        paint_terrain_at_target(preview_tiles, width, height, target, terrain_set, terrain_index)

    changes = []
    for idx, (old, new) in enumerate(zip(tiles, preview_tiles)):
        if new != old and new is not None:
            changes.append(((idx % width, idx // width), new))
    return changes

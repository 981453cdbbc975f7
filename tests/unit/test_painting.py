"""
Unit tests for terrain painting at corners and edges.
"""

import random

import pytest
from structlog.testing import capture_logs

from wangfill.core.paint_target import Corner, HorizontalEdge, VerticalEdge
from wangfill.core.painting import (
    HORIZONTAL_EDGE_SEED_SALT,
    VERTICAL_EDGE_SEED_SALT,
    affected_cells,
    affected_region,
    paint_terrain,
    paint_terrain_at_target,
    paint_terrain_horizontal_edge,
    paint_terrain_vertical_edge,
    preview_terrain_at_target,
    preview_terrain_at_targets,
    seed_target_constraints,
    target_seed,
    update_tile_with_neighbors,
)
from wangfill.core.terrain_set import TerrainSet, TerrainSetType
from wangfill.core.wang_filler import WangFiller
from wangfill.core.wang_id import WangPosition

GRASS = 0
DIRT = 1


# =============================================================================
# Helper Functions
# =============================================================================

def random_grid(terrain_set: TerrainSet, width: int, height: int, seed: int) -> list:
    """Grid filled with random tiles of the set, with some empty cells."""
    rng = random.Random(seed)
    choices = terrain_set.tiles_with_terrain() + [None]
    return [rng.choice(choices) for _ in range(width * height)]


def all_targets(width: int, height: int) -> list:
    """Every corner and edge target of a grid."""
    targets = []
    for y in range(height + 1):
        for x in range(width + 1):
            targets.append(Corner(x, y))
            targets.append(HorizontalEdge(x, y))
            targets.append(VerticalEdge(x, y))
    return targets


# =============================================================================
# Target Geometry Tests
# =============================================================================

class TestAffectedCells:
    """Cells and positions touched by each target kind."""

    def test_corner(self):
        assert affected_cells(Corner(2, 3)) == [
            (1, 2, WangPosition.TOP_RIGHT),
            (2, 2, WangPosition.TOP_LEFT),
            (1, 3, WangPosition.BOTTOM_RIGHT),
            (2, 3, WangPosition.BOTTOM_LEFT),
        ]

    def test_horizontal_edge(self):
        assert affected_cells(HorizontalEdge(4, 1)) == [
            (4, 0, WangPosition.TOP),
            (4, 1, WangPosition.BOTTOM),
        ]

    def test_vertical_edge(self):
        assert affected_cells(VerticalEdge(1, 4)) == [
            (0, 4, WangPosition.RIGHT),
            (1, 4, WangPosition.LEFT),
        ]

    def test_corners_touch_only_corner_positions(self):
        assert all(pos.is_corner() for _, _, pos in affected_cells(Corner(1, 1)))

    def test_edges_touch_only_edge_positions(self):
        for target in (HorizontalEdge(1, 1), VerticalEdge(1, 1)):
            assert not any(pos.is_corner() for _, _, pos in affected_cells(target))

    def test_unknown_target(self):
        with pytest.raises(TypeError):
            affected_cells((1, 1))

    def test_region_bounds(self):
        assert affected_region(Corner(0, 0), 2, 2) == [(0, 0)]
        assert affected_region(Corner(2, 2), 2, 2) == [(1, 1)]
        assert affected_region(Corner(5, 5), 2, 2) == []
        assert affected_region(HorizontalEdge(0, 2), 1, 2) == [(0, 1)]


class TestTargetSeed:

    def test_corner_seed(self):
        assert target_seed(Corner(1, 2)) == (1 << 32) | 2

    def test_edge_seeds_are_salted(self):
        assert target_seed(HorizontalEdge(1, 2)) == (1 << 32) | 2 | HORIZONTAL_EDGE_SEED_SALT
        assert target_seed(VerticalEdge(1, 2)) == (1 << 32) | 2 | VERTICAL_EDGE_SEED_SALT

    def test_kinds_do_not_collide(self):
        seeds = {target_seed(t) for t in (Corner(3, 3), HorizontalEdge(3, 3), VerticalEdge(3, 3))}
        assert len(seeds) == 3


# =============================================================================
# Painting Tests
# =============================================================================

class TestPaintExamples:
    """Small worked examples."""

    def test_mixed_single_tile_corner(self, mixed_single_set):
        tiles = [None] * 9

        paint_terrain(tiles, 3, 3, 1, 1, mixed_single_set, GRASS)

        assert tiles == [1, 1, None,
                         1, 1, None,
                         None, None, None]

    def test_edge_set_horizontal_edge(self):
        terrain_set = TerrainSet(TerrainSetType.EDGE, ["a", "b"])
        terrain_set.set_tile_terrain(1, [0, 0, 0, 0])
        terrain_set.set_tile_terrain(2, [1, 1, 1, 1])
        terrain_set.set_transition(0, 1, 0.0)
        terrain_set.set_transition(1, 0, 0.0)
        tiles = [None, None]

        paint_terrain_horizontal_edge(tiles, 1, 2, 0, 1, terrain_set, 0)

        assert tiles == [1, 1]

    def test_vertical_edge(self, edge_set):
        tiles = [None, None]

        paint_terrain_vertical_edge(tiles, 2, 1, 1, 0, edge_set, DIRT)

        assert tiles == [2, 2]

    def test_corner_on_empty_grid(self, corner_set):
        tiles = [None] * 4

        paint_terrain(tiles, 2, 2, 1, 1, corner_set, DIRT)

        # Every cell carries dirt at the shared corner
        for x, y, pos in affected_cells(Corner(1, 1)):
            wang = corner_set.wang_id_for_tile(tiles[y * 2 + x])
            assert wang.colors[pos] == DIRT + 1

    def test_existing_terrain_kept_where_not_painted(self, corner_set, corner_tile_id):
        tiles = [16] * 4

        paint_terrain(tiles, 2, 2, 1, 1, corner_set, GRASS)

        assert tiles == [
            corner_tile_id(1, 0, 1, 1), corner_tile_id(0, 1, 1, 1),
            corner_tile_id(1, 1, 1, 0), corner_tile_id(1, 1, 0, 1),
        ]

    def test_mixed_corner_leaves_edges(self, mixed_set):
        tiles = [1] * 4

        paint_terrain(tiles, 2, 2, 1, 1, mixed_set, DIRT)

        # Dirt corners with grass edges, not the all-dirt tile
        assert tiles == [2, 2, 2, 2]

    def test_mixed_corner_seeds_only_corner_constraints(self, mixed_set):
        filler = WangFiller(mixed_set)

        region = seed_target_constraints(filler, Corner(1, 1), 2, 2, DIRT + 1)

        assert sorted(region) == [(0, 0), (0, 1), (1, 0), (1, 1)]
        painted = {(x, y): pos for x, y, pos in affected_cells(Corner(1, 1))}
        for x, y in region:
            cell = filler.get_cell(x, y)
            assert [i for i in range(8) if cell.is_constrained(i)] == [painted[(x, y)]]
            assert cell.desired.color_at(painted[(x, y)]) == DIRT + 1

    def test_correction_outside_painted_cells(self, edge_set):
        tiles = [1, 1, 1]

        paint_terrain_horizontal_edge(tiles, 3, 1, 1, 1, edge_set, DIRT)

        assert tiles == [2, 2, 2]

    def test_no_matching_tile(self):
        terrain_set = TerrainSet(TerrainSetType.CORNER, ["grass", "dirt"])
        terrain_set.set_tile_terrain(1, [0, 0, 0, 0])
        tiles = [None] * 4

        paint_terrain(tiles, 2, 2, 1, 1, terrain_set, DIRT)

        assert tiles == [None] * 4


class TestRegionContainment:
    """Only the cells touching the target (and their neighbors) change."""

    def test_grid_corner(self, corner_set):
        tiles = [None] * 4

        paint_terrain(tiles, 2, 2, 0, 0, corner_set, DIRT)

        assert tiles[1:] == [None, None, None]
        assert corner_set.wang_id_for_tile(tiles[0]).colors[WangPosition.BOTTOM_LEFT] == DIRT + 1

    def test_target_outside_grid(self, corner_set):
        tiles = random_grid(corner_set, 2, 2, seed=1)
        before = list(tiles)

        paint_terrain(tiles, 2, 2, 5, 5, corner_set, DIRT)

        assert tiles == before

    def test_changes_stay_near_target(self, corner_set):
        tiles = random_grid(corner_set, 6, 6, seed=2)
        before = list(tiles)

        paint_terrain(tiles, 6, 6, 3, 3, corner_set, DIRT)

        for idx, (old, new) in enumerate(zip(before, tiles)):
            if old != new:
                x, y = idx % 6, idx // 6
                # Painted cells span 2..3, neighbors one further
                assert 1 <= x <= 4 and 1 <= y <= 4


class TestPaintProperties:
    """Invariants over many random grids and targets."""

    @pytest.mark.parametrize("seed", [3, 4, 5])
    def test_painted_positions_hold_terrain(self, corner_set, seed):
        tiles = random_grid(corner_set, 5, 5, seed)
        rng = random.Random(seed)

        for _ in range(15):
            cx, cy = rng.randint(0, 5), rng.randint(0, 5)
            terrain = rng.choice([GRASS, DIRT])
            paint_terrain(tiles, 5, 5, cx, cy, corner_set, terrain)

            for x, y, pos in affected_cells(Corner(cx, cy)):
                if 0 <= x < 5 and 0 <= y < 5:
                    wang = corner_set.wang_id_for_tile(tiles[y * 5 + x])
                    assert wang.colors[pos] == terrain + 1

    def test_deterministic(self, corner_set):
        start = random_grid(corner_set, 4, 4, seed=6)
        first, second = list(start), list(start)

        for target in all_targets(4, 4):
            paint_terrain_at_target(first, 4, 4, target, corner_set, DIRT)
            paint_terrain_at_target(second, 4, 4, target, corner_set, DIRT)

        assert first == second

    def test_only_known_tiles_placed(self, corner_set):
        tiles = random_grid(corner_set, 4, 4, seed=7)
        known = set(corner_set.tiles_with_terrain()) | {None}

        for target in all_targets(4, 4):
            paint_terrain_at_target(tiles, 4, 4, target, corner_set, GRASS)

        assert set(tiles) <= known

    def test_trace_logged_with_debug(self, edge_set):
        tiles = [None, None]

        with capture_logs() as logs:
            paint_terrain_vertical_edge(tiles, 2, 1, 1, 0, edge_set, DIRT, debug=True)

        events = [entry["event"] for entry in logs]
        assert events[0] == "paint_terrain_at_target"
        assert events.count("hard_constraint_painted") == 2
        assert "find_best_match" in events


# =============================================================================
# Preview Tests
# =============================================================================

class TestPreview:
    """Preview computes a paint without touching the grid."""

    def test_preview_does_not_modify_grid(self, corner_set):
        tiles = random_grid(corner_set, 4, 4, seed=8)
        before = list(tiles)

        preview_terrain_at_target(tiles, 4, 4, Corner(2, 2), corner_set, DIRT)

        assert tiles == before

    @pytest.mark.parametrize("target", [Corner(2, 2), HorizontalEdge(1, 3), VerticalEdge(4, 0)])
    def test_preview_matches_paint(self, corner_set, target):
        tiles = random_grid(corner_set, 4, 4, seed=9)
        before = list(tiles)

        preview = preview_terrain_at_target(tiles, 4, 4, target, corner_set, DIRT)
        paint_terrain_at_target(tiles, 4, 4, target, corner_set, DIRT)

        painted = [
            ((idx % 4, idx // 4), new)
            for idx, (old, new) in enumerate(zip(before, tiles))
            if old != new
        ]
        assert preview == painted

    def test_preview_includes_corrections(self, edge_set):
        preview = preview_terrain_at_target(
            [1, 1, 1], 3, 1, HorizontalEdge(1, 1), edge_set, DIRT
        )
        assert preview == [((0, 0), 2), ((1, 0), 2), ((2, 0), 2)]

    def test_preview_unchanged_paint_is_empty(self, edge_set):
        assert preview_terrain_at_target([2, 2], 2, 1, VerticalEdge(1, 0), edge_set, DIRT) == []

    def test_multi_target_preview_chains(self, corner_set):
        tiles = [None] * 9
        targets = [Corner(1, 1), Corner(2, 1), Corner(2, 2)]

        preview = preview_terrain_at_targets(tiles, 3, 3, targets, corner_set, DIRT)
        for target in targets:
            paint_terrain_at_target(tiles, 3, 3, target, corner_set, DIRT)

        painted = [((idx % 3, idx // 3), tile) for idx, tile in enumerate(tiles) if tile is not None]
        assert preview == painted

    def test_no_targets(self, corner_set):
        assert preview_terrain_at_targets([None], 1, 1, [], corner_set, DIRT) == []


# =============================================================================
# Single Tile Update Tests
# =============================================================================

class TestUpdateTileWithNeighbors:

    def test_isolated_tile(self, edge_set):
        tiles = [None]
        update_tile_with_neighbors(tiles, 1, 1, 0, 0, edge_set, DIRT)
        assert tiles == [2]

    def test_out_of_bounds_is_noop(self, edge_set):
        tiles = [1]
        update_tile_with_neighbors(tiles, 1, 1, 3, 0, edge_set, DIRT)
        assert tiles == [1]

    def test_neighbors_outvote_primary(self, edge_set):
        # Grass on all four sides beats the dirt preference
        tiles = [None, 1, None,
                 1, None, 1,
                 None, 1, None]
        update_tile_with_neighbors(tiles, 3, 3, 1, 1, edge_set, DIRT)
        assert tiles[4] == 1

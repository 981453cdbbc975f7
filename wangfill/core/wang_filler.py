"""
Wangfill - Wang Filler

Fills a region with Wang tiles, matching Tiled's wangfiller behavior.

Algorithm overview:
1. Build constraints: soft preferences from the tiles already in the region
   and from the facing colors of their neighbors
2. Place tiles + propagate: select a tile for each region cell, then set hard
   constraints on the facing positions of every non-empty neighbor
3. Corrections: neighbors outside the region whose tile now violates a hard
   constraint are re-selected once (single pass, no cascading)
"""

import random

import structlog

from .terrain_set import TerrainSet, get_active_positions
from .wang_id import EMPTY_COLOR, NEIGHBOR_OFFSETS, POSITION_COUNT, CellInfo, WangId

logger = structlog.get_logger(__name__)

# Penalty for a soft preference on a position where the tile has no terrain
NO_TERRAIN_PENALTY = 1.0

# Tiles whose penalty is within this of the best are equally good (float32 epsilon)
PENALTY_EPSILON = 1.1920929e-07


class WangFiller:
    """
    Fills a region of a tile grid with Wang tiles.

    Owns its working constraint map, correction queue and random generator
    for the lifetime of one `apply` call; borrows the terrain set and grid.
    """

    def __init__(self, terrain_set: TerrainSet, seed: int = 0, debug: bool = False):
        """
        Args:
            terrain_set: Terrain description used for matching
            seed: Seed for the probability-weighted tile selection
            debug: Emit trace events for every candidate considered
        """
        self.terrain_set = terrain_set
        self.cells: dict[tuple[int, int], CellInfo] = {}
        self.corrections: list[tuple[int, int]] = []
        self.rng = random.Random(seed)
        self.debug = debug

    def get_cell(self, x: int, y: int) -> CellInfo:
        """Get or create the constraint record for a cell."""
        cell = self.cells.get((x, y))
        if cell is None:
            cell = CellInfo()
            self.cells[(x, y)] = cell
        return cell

    def _wang_id_at(self, tiles, width: int, x: int, y: int) -> WangId | None:
        tile = tiles[y * width + x]
        if tile is None:
            return None
        return self.terrain_set.wang_id_for_tile(tile)

    def _wang_id_from_surroundings(self, tiles, width: int, height: int, x: int, y: int) -> WangId:
        """Colors the 8 neighbors present toward this cell."""
        result = WangId()

        for i, (dx, dy) in enumerate(NEIGHBOR_OFFSETS):
            nx, ny = x + dx, y + dy
            if not (0 <= nx < width and 0 <= ny < height):
                continue

            neighbor_wang = self._wang_id_at(tiles, width, nx, ny)
            if neighbor_wang is None:
                continue

            color = neighbor_wang.colors[WangId.opposite(i)]
            if color != EMPTY_COLOR:
                result.colors[i] = color

        return result

    def score_tile(self, cell: CellInfo, tile_wang: WangId) -> float | None:
        """
        Score a tile against cell constraints.

        Only the active positions for the terrain set type are scored.

        Returns:
            None if the tile violates a hard constraint, otherwise the
            penalty (lower is better)
        """
        penalty = 0.0

        for i in get_active_positions(self.terrain_set.set_type):
            want = cell.desired.colors[i]
            have = tile_wang.colors[i]

            if cell.mask[i]:
                if want != have:
                    return None
            elif want != EMPTY_COLOR and want != have:
                if have == EMPTY_COLOR:
                    penalty += NO_TERRAIN_PENALTY
                else:
                    penalty += self.terrain_set.transition_penalty(want - 1, have - 1)

        return penalty

    def find_best_match(self, cell: CellInfo) -> int | None:
        """
        Find the best tile for a cell.

        Every tile with terrain is scored; tiles tied at the lowest penalty
        are picked at random, weighted by probability / (1 + penalty).

        Returns:
            Tile id, or None if every tile was rejected
        """
        if self.debug:
            self._trace_constraints(cell)

        candidates: list[tuple[int, float]] = []
        best_penalty = float("inf")
        rejected_count = 0

        for tile_id in self.terrain_set.tiles_with_terrain():
            tile_wang = self.terrain_set.wang_id_for_tile(tile_id)
            penalty = self.score_tile(cell, tile_wang)

            if penalty is None:
                rejected_count += 1
                if self.debug:
                    logger.info("candidate_rejected", tile=tile_id, wang=tile_wang.colors)
                continue

            if self.debug:
                logger.info(
                    "candidate_accepted", tile=tile_id, penalty=penalty, wang=tile_wang.colors
                )

            if penalty < best_penalty:
                best_penalty = penalty
                candidates.clear()
            if abs(penalty - best_penalty) < PENALTY_EPSILON:
                weight = self.terrain_set.get_tile_probability(tile_id) / (1.0 + penalty)
                candidates.append((tile_id, weight))

        result = self._random_pick(candidates)

        if self.debug:
            logger.info(
                "find_best_match",
                candidates=len(candidates),
                rejected=rejected_count,
                selected=result,
            )
            if result is None:
                logger.warning("no_matching_tile")

        return result

    def _trace_constraints(self, cell: CellInfo) -> None:
        set_type = self.terrain_set.set_type
        for i in get_active_positions(set_type):
            color = cell.desired.colors[i]
            if cell.mask[i]:
                logger.info("hard_constraint", position=i, color=color, set_type=set_type.value)
            elif color != EMPTY_COLOR:
                logger.info("soft_preference", position=i, color=color, set_type=set_type.value)

    def _random_pick(self, candidates: list[tuple[int, float]]) -> int | None:
        """Pick a candidate with probability proportional to its weight."""
        if not candidates:
            return None

        # A single candidate consumes no randomness
        if len(candidates) == 1:
            return candidates[0][0]

        total = sum(weight for _, weight in candidates)
        if total <= 0.0:
            return candidates[0][0]

        remaining = self.rng.random() * total
        for tile_id, weight in candidates:
            remaining -= weight
            if remaining <= 0.0:
                return tile_id

        return candidates[-1][0]

    def _update_adjacent(self, placed_wang: WangId, nx: int, ny: int, dir_idx: int) -> None:
        """Force the neighbor's facing position to continue the placed tile."""
        cell = self.get_cell(nx, ny)
        cell.set_constraint(WangId.opposite(dir_idx), placed_wang.colors[dir_idx])

    @staticmethod
    def cell_violates_constraints(cell: CellInfo, tile_wang: WangId) -> bool:
        """True if any hard-constrained, non-empty position mismatches the tile."""
        for i in range(POSITION_COUNT):
            if cell.mask[i]:
                want = cell.desired.colors[i]
                if want != EMPTY_COLOR and want != tile_wang.colors[i]:
                    return True
        return False

    def apply(self, tiles: list, width: int, height: int, region) -> None:
        """
        Fill `region` of a row-major tile grid in place.

        Args:
            tiles: Flat grid of tile ids (None = empty), index y * width + x
            width: Grid width
            height: Grid height
            region: Ordered (x, y) cells to fill; duplicates are harmless
        """
        region = list(region)
        region_set = set(region)

        def in_bounds(x, y):
            return 0 <= x < width and 0 <= y < height

        # Phase 1: build constraints. Existing tiles are soft preferences only.
        for x, y in region:
            if not in_bounds(x, y):
                continue

            existing = self._wang_id_at(tiles, width, x, y)
            if existing is not None:
                cell = self.get_cell(x, y)
                for i in range(POSITION_COUNT):
                    if existing.colors[i] != EMPTY_COLOR:
                        cell.set_preference(i, existing.colors[i])

            around = self._wang_id_from_surroundings(tiles, width, height, x, y)
            cell = self.get_cell(x, y)
            for i in range(POSITION_COUNT):
                if around.colors[i] != EMPTY_COLOR:
                    cell.set_preference(i, around.colors[i])

        # Phase 2: place tiles and propagate hard constraints
        for x, y in region:
            if not in_bounds(x, y):
                continue

            cell = self.cells.get((x, y))
            cell = cell.copy() if cell is not None else CellInfo()

            chosen_tile = self.find_best_match(cell)
            if chosen_tile is None:
                continue

            tiles[y * width + x] = chosen_tile
            chosen_wang = self.terrain_set.wang_id_for_tile(chosen_tile)
            if chosen_wang is None:
                continue

            for dir_idx, (dx, dy) in enumerate(NEIGHBOR_OFFSETS):
                nx, ny = x + dx, y + dy
                if not in_bounds(nx, ny):
                    continue
                if tiles[ny * width + nx] is None:
                    continue

                self._update_adjacent(chosen_wang, nx, ny, dir_idx)

                if (nx, ny) in region_set:
                    continue

                neighbor_wang = self._wang_id_at(tiles, width, nx, ny)
                if neighbor_wang is None:
                    continue
                if self.cell_violates_constraints(self.cells[(nx, ny)], neighbor_wang):
                    if (nx, ny) not in self.corrections:
                        self.corrections.append((nx, ny))

        # Phase 3: single-pass corrections
        correction_list = self.corrections
        self.corrections = []

        for x, y in correction_list:
            if (x, y) in region_set or not in_bounds(x, y):
                continue

            current_wang = self._wang_id_at(tiles, width, x, y)
            if current_wang is None:
                continue

            cell = self.cells.get((x, y))
            if cell is None or not self.cell_violates_constraints(cell, current_wang):
                continue

            fix_tile = self.find_best_match(cell.copy())
            if fix_tile is not None:
                if self.debug:
                    logger.info("corrected_tile", x=x, y=y, tile=fix_tile)
                tiles[y * width + x] = fix_tile

"""
Wangfill - Command Line

Applies terrain paint operations to a tile layer file.

Usage:
    wangfill terrain_set.json layer.json ops.json [-o out.json]
    wangfill terrain_set.json layer.json ops.json --preview
    wangfill terrain_set.json layer.json ops.json --trace --json-log

Each operation in ops.json paints one terrain at one target:
    {"terrain": 0, "corner": [x, y]}
    {"terrain": 0, "horizontal_edge": [tile_x, edge_y]}
    {"terrain": 0, "vertical_edge": [edge_x, tile_y]}
    {"terrain": 0, "world": [world_x, world_y]}   # resolved with --tile-size
"""

import argparse
import json
import sys
from pathlib import Path

import structlog

from wangfill.core.paint_target import Corner, HorizontalEdge, VerticalEdge, get_paint_target
from wangfill.core.painting import paint_terrain_at_target, preview_terrain_at_targets
from wangfill.core.terrain_set import TerrainSet
from wangfill.formats.tile_layer import TileLayer
from wangfill.log import configure_logging

logger = structlog.get_logger(__name__)

TARGET_KINDS = {
    "corner": Corner,
    "horizontal_edge": HorizontalEdge,
    "vertical_edge": VerticalEdge,
}


def _coordinates(op: dict, key: str) -> tuple:
    """The [x, y] pair stored under `key`; raises ValueError if it isn't two numbers."""
    value = op[key]
    if (
        not isinstance(value, list)
        or len(value) != 2
        or not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in value)
    ):
        raise ValueError(f"'{key}' must be a list of two numbers, got {value!r}")
    return value[0], value[1]


def parse_operation(op: dict, terrain_set: TerrainSet, tile_size: float):
    """
    Turn one operation entry into (target, terrain_index).

    Raises:
        ValueError: If the entry has no terrain, no target, or bad coordinates
    """
    if not isinstance(op, dict):
        raise ValueError(f"Operation must be a JSON object, got {op!r}")
    if "terrain" not in op:
        raise ValueError(f"Operation missing 'terrain': {op}")
    terrain_index = op["terrain"]
    if not isinstance(terrain_index, int) or isinstance(terrain_index, bool) or terrain_index < 0:
        raise ValueError(f"Terrain index must be a non-negative integer, got {terrain_index!r}")

    for key, target_cls in TARGET_KINDS.items():
        if key in op:
            x, y = _coordinates(op, key)
            if x < 0 or y < 0:
                raise ValueError(f"Target coordinates must be non-negative: {op}")
            return target_cls(int(x), int(y)), terrain_index

    if "world" in op:
        wx, wy = _coordinates(op, "world")
        target = get_paint_target(float(wx), float(wy), tile_size, terrain_set.set_type)
        return target, terrain_index

    raise ValueError(f"Operation has no target: {op}")


def load_operations(path: Path, terrain_set: TerrainSet, tile_size: float) -> list:
    if not path.exists():
        raise FileNotFoundError(f"Operations file not found: {path}")
    with open(path) as f:
        try:
            ops = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid operations JSON in {path}: {e}") from e
    if not isinstance(ops, list):
        raise ValueError("Operations file must contain a JSON list")
    return [parse_operation(op, terrain_set, tile_size) for op in ops]


def run_preview(layer: TileLayer, terrain_set: TerrainSet, operations: list) -> list:
    """Preview all operations on one scratch copy; returns the combined diff."""
    scratch = list(layer.tiles)
    for target, terrain_index in operations:
        # Each op may use a different terrain, so chain single-target previews
        for (x, y), tile in preview_terrain_at_targets(
            scratch, layer.width, layer.height, [target], terrain_set, terrain_index
        ):
            scratch[y * layer.width + x] = tile

    return [
        {"x": idx % layer.width, "y": idx // layer.width, "tile": new}
        for idx, (old, new) in enumerate(zip(layer.tiles, scratch))
        if old != new
    ]


def run_paint(layer: TileLayer, terrain_set: TerrainSet, operations: list, debug: bool) -> int:
    """Paint all operations into the layer; returns number of changed cells."""
    before = layer.copy()
    for target, terrain_index in operations:
        paint_terrain_at_target(
            layer.tiles, layer.width, layer.height, target, terrain_set, terrain_index, debug
        )
    changes = before.diff(layer)
    if changes:
        layer.modified = True
    return len(changes)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Paint Wang terrain onto a tile layer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("terrain_set", help="Terrain set JSON file")
    parser.add_argument("layer", help="Tile layer JSON file")
    parser.add_argument("operations", help="Paint operations JSON file")
    parser.add_argument("-o", "--output", help="Output layer file (default: overwrite input)")
    parser.add_argument(
        "--preview", action="store_true", help="Print the changes as JSON without writing"
    )
    parser.add_argument(
        "--tile-size", type=float, default=1.0, help="World units per tile for 'world' targets"
    )
    parser.add_argument("--trace", action="store_true", help="Log the fill algorithm's decisions")
    parser.add_argument("--json-log", action="store_true", help="Log one JSON object per line")

    args = parser.parse_args(argv)
    configure_logging(debug=args.trace, json_output=args.json_log)

    if args.tile_size <= 0:
        print(f"Error: --tile-size must be positive, got {args.tile_size}")
        sys.exit(1)

    try:
        terrain_set = TerrainSet.load(args.terrain_set)
        layer = TileLayer.load(args.layer)
        operations = load_operations(Path(args.operations), terrain_set, args.tile_size)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    logger.info(
        "operations_loaded",
        terrain_set=terrain_set.name,
        set_type=terrain_set.set_type.value,
        layer=f"{layer.width}x{layer.height}",
        operations=len(operations),
    )

    if args.preview:
        changes = run_preview(layer, terrain_set, operations)
        print(json.dumps(changes))
        return

    changed = run_paint(layer, terrain_set, operations, args.trace)
    layer.save(args.output or args.layer)
    print(f"Painted {len(operations)} operation(s), {changed} tile(s) changed")


if __name__ == "__main__":
    main()

"""
JSON writer for layer files.

Tile rows (lists of tile ids and nulls) stay on one line so a layer file reads
as a grid; all other containers get one item per line.
"""

import json


def _is_tile_row(value) -> bool:
    if not isinstance(value, list):
        return False
    return all(x is None or (isinstance(x, int) and not isinstance(x, bool)) for x in value)


def _format(value, level: int, indent: int) -> str:
    if _is_tile_row(value) or not isinstance(value, (list, dict)) or not value:
        return json.dumps(value)

    if isinstance(value, dict):
        open_, close = "{", "}"
        lines = [f"{json.dumps(k)}: {_format(v, level + 1, indent)}" for k, v in value.items()]
    else:
        open_, close = "[", "]"
        lines = [_format(v, level + 1, indent) for v in value]

    item_pad = " " * (indent * (level + 1))
    body = ",\n".join(item_pad + line for line in lines)
    return f"{open_}\n{body}\n{' ' * (indent * level)}{close}"


def dumps(obj, indent: int = 2) -> str:
    """Serialize obj, keeping tile rows on single lines."""
    return _format(obj, 0, indent)


def dump(obj, fp, indent: int = 2):
    fp.write(dumps(obj, indent))
    fp.write("\n")


def load(fp):
    return json.load(fp)


def loads(s):
    return json.loads(s)

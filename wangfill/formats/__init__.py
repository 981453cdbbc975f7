"""
Tile layer file formats.
"""

from .tile_layer import TileLayer

__all__ = ["TileLayer"]

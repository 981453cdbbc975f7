"""
Wangfill - Terrain Autotiling

Constraint-based Wang tile filling for tile-map editors.
"""

__version__ = "0.1.0"

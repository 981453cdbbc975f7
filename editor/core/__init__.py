"""
Wangfill Editor - Core Module

Editor configuration constants.
"""

from . import constants

__all__ = ['constants']

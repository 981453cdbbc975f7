"""
Wangfill Editor - Controllers Module

Application state management and coordinate transforms.
"""

from .editor_state import EditorState
from .view_state import ViewState

__all__ = ['EditorState', 'ViewState']

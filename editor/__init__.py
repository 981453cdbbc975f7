"""
Wangfill Editor - Editor Package

Pygame-side glue between user input and the terrain autotiler.
"""

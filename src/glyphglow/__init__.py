"""Shaded extruded-glyph demo scenes rendered with pygame and OpenGL."""

__version__ = "0.1.0"

"""Reading and validating .cub raycaster scenes and their XPM textures."""

__version__ = "0.1.0"
__all__ = ["cli", "colors", "mapgrid", "scene", "xpm"]
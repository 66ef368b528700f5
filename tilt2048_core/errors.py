from __future__ import annotations


class Tilt2048Error(ValueError):
    """Base class for every rejected board operation."""


class TileCollisionError(Tilt2048Error):
    """A tile was placed on an occupied (or nonexistent) cell."""


class InvalidDirectionError(Tilt2048Error):
    """A tilt was requested toward something other than UP, DOWN, LEFT or RIGHT."""


class MalformedGridError(Tilt2048Error):
    """The grid is not square or is smaller than 2x2."""


class InvalidTileError(Tilt2048Error):
    """A tile value is not a positive power of two."""

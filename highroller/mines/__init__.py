"""Tile-reveal game: hazard board and progressive cash-out multiplier."""

"""Wheel game: pockets, bet selectors and the spin resolver."""

"""Reel game: weighted symbols, match tiers and the jackpot pool."""

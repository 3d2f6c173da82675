"""
Building blocks shared by the games: cards, decks, entropy and results.
"""

"""Card game: hand scoring, dealer policy and round state machine."""

"""Drop game: binomial bucket draw."""

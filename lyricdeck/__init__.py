"""LyricDeck: keyboard-driven lyrics projector."""

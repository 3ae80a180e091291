"""Game logic for a side-scrolling action game: map files, player, input, settings, sound and frame pacing."""

__version__ = "0.1.0"
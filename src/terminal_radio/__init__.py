"""Terminal Radio - discover and play internet radio streams from the terminal."""

__version__ = "0.1.0"

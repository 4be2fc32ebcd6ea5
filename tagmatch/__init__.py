"""pgn-tagmatch: select chess games by criteria on their header tags."""

__version__ = "1.0.0"

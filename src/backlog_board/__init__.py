"""backlog-board - browse Backlog issues from the terminal."""

__version__ = "0.1.0"

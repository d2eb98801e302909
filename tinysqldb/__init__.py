"""A tiny file-backed SQL database with an interactive shell."""

__version__ = "0.1.0"
__all__ = ["column", "row", "table", "database", "cli"]
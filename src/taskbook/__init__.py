"""taskbook: a single-user command-line task manager backed by a flat file."""

__version__ = "0.1.0"

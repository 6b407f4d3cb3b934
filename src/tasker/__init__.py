"""tasker: a small command-line task tracker backed by SQLite or a JSON file."""

__version__ = "0.1.0"

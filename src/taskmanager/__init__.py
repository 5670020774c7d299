"""Task list manager: remote fetch + local SQLite store + reactive synchronizer."""

__version__ = "0.1.0"

"""In-memory task tracking: store, query engine and console."""

__version__ = "0.1.0"

"""Near-duplicate removal for sequential slide captures."""

__version__ = "0.1.0"

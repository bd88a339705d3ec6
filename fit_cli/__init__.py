"""Personal fitness log and training analytics CLI."""

__version__ = "0.1.0"

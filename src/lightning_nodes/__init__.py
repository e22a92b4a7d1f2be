"""Local mirror of the Lightning Network node connectivity ranking."""

__version__ = "0.1.0"

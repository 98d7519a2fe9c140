"""Stack Engine - tool stack recommendation and scenario building."""

__version__ = "0.4.0"

"""Carbon accounting engine for personal footprint tracking."""

__version__ = "0.1.0"

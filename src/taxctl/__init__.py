"""taxctl — Domain taxonomy control CLI."""

__version__ = "0.1.0"

"""Paint a 7-pixel-high image onto a contribution graph with empty commits."""

__version__ = "0.1.0"

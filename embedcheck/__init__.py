"""Validate rich message embed JSON and probe the images it links to."""

__version__ = "0.1.0"

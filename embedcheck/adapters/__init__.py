"""Adapters for external systems."""

from .image_prober import ImageProber, classify_response

__all__ = ["ImageProber", "classify_response"]

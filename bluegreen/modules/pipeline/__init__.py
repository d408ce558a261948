"""
Pipeline Module - Black Box Interface

Purpose: Build and push the blue and green container images
Interface: ImageBuilder.build(), push(), build_and_push()
Hidden: docker CLI arguments
"""

from .builder import VARIANTS, ImageBuilder

__all__ = ["ImageBuilder", "VARIANTS"]

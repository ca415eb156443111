"""Utility functions for the application."""
from .slugify import slugify, generate_slug
from .metadata import ShareMetadata, build_share_metadata, decode_description

__all__ = [
    "slugify",
    "generate_slug",
    "ShareMetadata",
    "build_share_metadata",
    "decode_description"
]

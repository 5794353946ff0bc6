"""Pagecraft block-document editing core."""

__version__ = "0.1.0"

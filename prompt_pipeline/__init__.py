"""Retrieval-augmented prompt construction pipeline."""

__version__ = "0.3.0"

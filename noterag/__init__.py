"""Semantic note-taking backend with retrieval-augmented answers."""

__version__ = "0.1.0"

"""Similarity scoring and ranking."""

from noterag.retrieve.ranker import Ranker
from noterag.retrieve.similarity import cosine_similarity

__all__ = ["Ranker", "cosine_similarity"]

"""Embedding providers and the stored embedding codec."""

from noterag.embed.codec import decode_embedding, encode_embedding
from noterag.embed.factory import get_embedder
from noterag.embed.openai import OpenAIEmbedder

__all__ = [
    "OpenAIEmbedder",
    "get_embedder",
    "encode_embedding",
    "decode_embedding",
]

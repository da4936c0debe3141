"""Serialization of embeddings for storage.

Embeddings are stored as JSON float arrays in a text column.
"""

import json
import math

from noterag.errors import IntegrityError


def encode_embedding(embedding: list[float]) -> str:
    """Serialize an embedding to its stored text form.

    Args:
        embedding: Embedding vector

    Returns:
        JSON array text

    Raises:
        ValueError: If the embedding is empty or contains non-finite values
    """
    if not embedding:
        raise ValueError("Cannot encode an empty embedding")

    values = [float(x) for x in embedding]
    if not all(math.isfinite(x) for x in values):
        raise ValueError("Embedding contains non-finite values")

    return json.dumps(values, separators=(",", ":"))


def decode_embedding(text: str | None) -> list[float]:
    """Deserialize a stored embedding.

    Args:
        text: JSON array text as written by encode_embedding

    Returns:
        Embedding vector

    Raises:
        IntegrityError: If the text is not a non-empty array of finite numbers
    """
    if text is None:
        raise IntegrityError("Stored embedding is missing")

    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise IntegrityError(f"Stored embedding is not valid JSON: {e}") from e

    if not isinstance(data, list) or not data:
        raise IntegrityError("Stored embedding is not a non-empty array")

    values = []
    for item in data:
        # bool is an int subclass, but never a valid component
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            raise IntegrityError(
                f"Stored embedding contains a non-numeric value: {item!r}"
            )
        value = float(item)
        if not math.isfinite(value):
            raise IntegrityError("Stored embedding contains non-finite values")
        values.append(value)

    return values

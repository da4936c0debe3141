"""Error taxonomy for the note retrieval pipeline.

Every error carries a short ``kind`` so callers can flatten failures to a
single textual message without losing which collaborator failed.
"""


class NoteRAGError(Exception):
    """Base class for all pipeline errors."""

    kind = "error"


class ProviderError(NoteRAGError):
    """Raised when the embedding or completion service fails.

    Covers unreachable services, transport errors and malformed
    responses (for example an empty embedding).
    """

    kind = "provider_error"


class GenerationError(ProviderError):
    """Raised when the completion service errors or returns no usable text."""

    kind = "generation_error"


class StorageError(NoteRAGError):
    """Raised when a persistence read or write cannot be performed."""

    kind = "storage_error"


class IntegrityError(NoteRAGError):
    """Raised when stored data violates an invariant.

    The typical case is an embedding that cannot be decoded.
    """

    kind = "integrity_error"


class DimensionMismatchError(IntegrityError, ValueError):
    """Raised when two embeddings of different lengths are compared."""

    def __init__(self, left: int, right: int):
        self.left = left
        self.right = right
        super().__init__(
            f"Embedding dimensions differ: {left} != {right}"
        )

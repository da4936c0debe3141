"""Similarity ranking and context assembly."""

from collections.abc import Sequence

import structlog

from noterag.errors import DimensionMismatchError
from noterag.generate.prompts import format_context
from noterag.models.note import StoredNote
from noterag.models.retrieval import RankedContext, ScoredEntry
from noterag.retrieve.similarity import cosine_similarity

logger = structlog.get_logger(__name__)


class Ranker:
    """Ranks stored notes against a query embedding.

    Every call recomputes scores over the full entry set; nothing is
    cached between calls. Ties keep their input order.
    """

    def __init__(self, top_k: int = 10):
        """Initialize ranker.

        Args:
            top_k: Maximum number of notes placed in the context
        """
        if top_k <= 0:
            raise ValueError("top_k must be positive")
        self.top_k = top_k

    def score(
        self,
        query: Sequence[float],
        entries: Sequence[StoredNote],
    ) -> tuple[list[tuple[StoredNote, float]], int]:
        """Score entries against the query.

        Entries whose embedding length differs from the query are excluded.

        Returns:
            Tuple of (scored entries in input order, number excluded)
        """
        scored: list[tuple[StoredNote, float]] = []
        skipped = 0

        for entry in entries:
            try:
                similarity = cosine_similarity(entry.embedding, query)
            except DimensionMismatchError as e:
                skipped += 1
                logger.error(
                    "embedding_dimension_mismatch",
                    note_id=entry.note.id,
                    stored_dimension=e.left,
                    query_dimension=e.right,
                )
                continue
            scored.append((entry, similarity))

        return scored, skipped

    def rank(
        self,
        query: Sequence[float],
        entries: Sequence[StoredNote],
    ) -> RankedContext:
        """Rank entries by descending similarity and build the context.

        Args:
            query: Query embedding
            entries: Stored notes with embeddings

        Returns:
            RankedContext with at most top_k entries in ranked order
        """
        scored, skipped = self.score(query, entries)

        # sorted() is stable, so equal scores keep input order
        ordered = sorted(scored, key=lambda item: item[1], reverse=True)

        selected = [
            ScoredEntry(
                note=entry.note,
                embedding=entry.embedding,
                score=similarity,
                rank=position,
            )
            for position, (entry, similarity) in enumerate(
                ordered[: self.top_k], start=1
            )
        ]

        return RankedContext(
            entries=selected,
            context=format_context(selected),
            total_candidates=len(entries),
            skipped=skipped,
        )

"""Trace writer for persisting answer traces."""

import asyncio
from datetime import datetime, timezone
from pathlib import Path

import structlog
from pydantic import ValidationError

from noterag.models.generation import AnswerTrace

logger = structlog.get_logger(__name__)


class TraceWriter:
    """Appends answer traces to daily JSONL files.

    Traces record which notes were ranked into the context and with what
    score, which is the main tool for judging retrieval quality.
    """

    def __init__(self, output_dir: str | Path = "traces"):
        """Initialize trace writer.

        Args:
            output_dir: Directory to write traces
        """
        self.output_dir = Path(output_dir)

    def write(self, trace: AnswerTrace) -> str:
        """Write a trace to storage.

        Args:
            trace: Trace to write

        Returns:
            Path to written file
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        date_str = trace.timestamp.strftime("%Y-%m-%d")
        filepath = self.output_dir / f"traces_{date_str}.jsonl"

        with open(filepath, "a", encoding="utf-8") as f:
            f.write(trace.model_dump_json() + "\n")

        return str(filepath)

    async def awrite(self, trace: AnswerTrace) -> str:
        """Write a trace without blocking the event loop."""
        return await asyncio.to_thread(self.write, trace)

    def load_traces(
        self,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        limit: int | None = None,
    ) -> list[AnswerTrace]:
        """Load traces from storage.

        Malformed lines are logged and skipped.

        Args:
            start_date: Filter traces after this date (naive means UTC)
            end_date: Filter traces before this date (naive means UTC)
            limit: Maximum traces to return

        Returns:
            List of AnswerTrace objects
        """
        start_date = _as_utc(start_date)
        end_date = _as_utc(end_date)
        traces = []

        for filepath in sorted(self.output_dir.glob("traces_*.jsonl")):
            with open(filepath, encoding="utf-8") as f:
                for line_number, line in enumerate(f, start=1):
                    if not line.strip():
                        continue

                    try:
                        trace = AnswerTrace.model_validate_json(line)
                    except ValidationError as e:
                        logger.warning(
                            "trace_line_invalid",
                            path=str(filepath),
                            line=line_number,
                            error=str(e),
                        )
                        continue

                    if start_date and trace.timestamp < start_date:
                        continue
                    if end_date and trace.timestamp > end_date:
                        continue

                    traces.append(trace)

                    if limit and len(traces) >= limit:
                        return traces

        return traces


def _as_utc(bound: datetime | None) -> datetime | None:
    if bound is not None and bound.tzinfo is None:
        return bound.replace(tzinfo=timezone.utc)
    return bound

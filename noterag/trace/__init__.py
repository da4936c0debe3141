"""Answer trace persistence."""

from noterag.trace.writer import TraceWriter

__all__ = ["TraceWriter"]

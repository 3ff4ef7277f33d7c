"""Query parsing for todoist-blocks."""

from .parser import parse_query, extract_query_source, dedupe_sorting

__all__ = ["parse_query", "extract_query_source", "dedupe_sorting"]

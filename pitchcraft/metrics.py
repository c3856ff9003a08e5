"""Prometheus metric definitions for Pitchcraft."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# --- Research ---

research_requests_total = Counter(
    "pitchcraft_research_requests_total",
    "Research calls by outcome (synthesized from search hits or fallback table)",
    labelnames=["outcome"],
)

search_errors_total = Counter(
    "pitchcraft_search_errors_total",
    "Web search lookups that failed and degraded to the fallback table",
    labelnames=["kind"],
)

search_duration_seconds = Histogram(
    "pitchcraft_search_duration_seconds",
    "Time spent waiting on the web search provider",
    buckets=(0.1, 0.25, 0.5, 1, 2, 5, 10),
)

# --- LLM tokens ---

llm_tokens_total = Counter(
    "pitchcraft_llm_tokens_total",
    "Total LLM tokens consumed by the pitch agent",
    labelnames=["model", "token_type"],
)

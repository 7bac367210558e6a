"""Monitoring configuration for the drill engine."""
from prometheus_client import Counter, start_http_server

# Selection metrics
words_served = Counter(
    "hpvocab_words_served_total",
    "Total number of words served, by the pool they were drawn from",
    ["pool"],
)

recency_resets = Counter(
    "hpvocab_recency_resets_total",
    "Total number of times the recency buffer was cleared",
)

# Answer metrics
answers = Counter(
    "hpvocab_answers_total",
    "Total number of answered questions",
    ["result"],
)

# Error metrics
catalog_fallbacks = Counter(
    "hpvocab_catalog_fallbacks_total",
    "Total number of times the built-in catalog replaced a failed load",
)

progress_restore_failures = Counter(
    "hpvocab_progress_restore_failures_total",
    "Total number of stored progress blobs that could not be restored",
)


def start_monitoring(port: int = 9090) -> None:
    """Start the Prometheus metrics server."""
    start_http_server(port)

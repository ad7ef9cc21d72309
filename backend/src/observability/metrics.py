"""Prometheus metrics for QuoteFlow.

Defines and exposes operational metrics for monitoring and alerting.
"""

from prometheus_client import Counter, Histogram, Gauge

# Mapping metrics
mapping_lines_total = Counter(
    "quoteflow_mapping_lines_total",
    "Total number of RFQ lines mapped",
    ["status"]  # status: auto_mapped|needs_review|failed
)

mapping_top_score = Histogram(
    "quoteflow_mapping_top_score",
    "Score distribution of the best candidate per line",
    buckets=[0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0]
)

mapping_batch_duration_seconds = Histogram(
    "quoteflow_mapping_batch_duration_seconds",
    "Time spent mapping a batch of RFQ lines in seconds",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0]
)

# Catalog snapshot metrics
catalog_skus = Gauge(
    "quoteflow_catalog_skus",
    "Number of SKUs in the active catalog snapshot"
)

catalog_reloads_total = Counter(
    "quoteflow_catalog_reloads_total",
    "Total catalog snapshot reloads",
    ["status"]  # status: success|error
)

alias_seed_fallback = Gauge(
    "quoteflow_alias_seed_fallback",
    "1 if the active snapshot uses the built-in seed aliases"
)

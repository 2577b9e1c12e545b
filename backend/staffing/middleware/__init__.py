"""
Middleware Package

Contains FastAPI middleware for:
- Prometheus metrics collection
- Search and keyword recomputation metrics helpers
"""

from staffing.middleware.metrics import (
    PrometheusMiddleware,
    setup_metrics,
    REQUEST_LATENCY,
    REQUEST_COUNT,
    ACTIVE_REQUESTS,
    SEARCH_LATENCY,
    CORPUS_SIZE,
    KEYWORD_RECOMPUTE_FAILURES,
)

__all__ = [
    "PrometheusMiddleware",
    "setup_metrics",
    "REQUEST_LATENCY",
    "REQUEST_COUNT",
    "ACTIVE_REQUESTS",
    "SEARCH_LATENCY",
    "CORPUS_SIZE",
    "KEYWORD_RECOMPUTE_FAILURES",
]

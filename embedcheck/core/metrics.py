"""
Prometheus metrics for validation passes and image probes.

All metrics live on a private registry so importing this module never
touches the process-wide default registry.
"""

from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

# ============================================================================
# Counters
# ============================================================================

embedcheck_validations_total = Counter(
    "embedcheck_validations_total",
    "Validation passes by outcome (valid, invalid, unparseable)",
    labelnames=("outcome",),
    registry=_registry,
)

embedcheck_image_probes_total = Counter(
    "embedcheck_image_probes_total",
    "Image URL fetches by classified status",
    labelnames=("status",),
    registry=_registry,
)

embedcheck_image_cache_hits_total = Counter(
    "embedcheck_image_cache_hits_total",
    "Image checks answered from the per-URL cache",
    registry=_registry,
)

# ============================================================================
# Histograms
# ============================================================================

embedcheck_image_probe_seconds = Histogram(
    "embedcheck_image_probe_seconds",
    "Wall time of one image fetch in seconds",
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=_registry,
)


# ============================================================================
# Helper Functions
# ============================================================================


def mark_validation(outcome: str) -> None:
    """Count one validation pass.

    Args:
        outcome: 'valid', 'invalid' or 'unparseable'
    """
    embedcheck_validations_total.labels(outcome=outcome).inc()


def mark_image_probe(status: str, duration_seconds: float) -> None:
    """Count one network probe and record how long it took."""
    embedcheck_image_probes_total.labels(status=status).inc()
    embedcheck_image_probe_seconds.observe(duration_seconds)


def mark_cache_hit() -> None:
    embedcheck_image_cache_hits_total.inc()


def render_latest() -> tuple[bytes, str]:
    """Render latest metrics for Prometheus scraping.

    Returns:
        Tuple of (payload bytes, content_type string)
    """
    return generate_latest(_registry), CONTENT_TYPE_LATEST

"""Observability helpers for monitoring and error reporting."""
from __future__ import annotations

from functools import lru_cache

from fastapi import FastAPI
from prometheus_client import Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

from slateplanner.core.logging import get_logger
from slateplanner.core.settings import get_settings

try:  # Optional
    import sentry_sdk
except Exception:  # pragma: no cover
    sentry_sdk = None  # type: ignore

logger = get_logger(__name__)


class RecommendationMetrics:
    """Counters describing what the estimate endpoint recommends."""

    def __init__(self, namespace: str) -> None:
        self.recommendations = Counter(
            "recommendations_total",
            "Plans recommended by the estimate endpoint.",
            labelnames=("plan", "add_on"),
            namespace=namespace,
        )
        self.ongoing_credits = Histogram(
            "estimated_ongoing_credits",
            "Estimated ongoing monthly credits per estimate request.",
            namespace=namespace,
            buckets=(0, 250, 500, 1000, 2000, 5000, 10000, 20000),
        )

    def observe(self, plan: str, needs_add_on: bool, ongoing_total: float) -> None:
        self.recommendations.labels(plan=plan, add_on=str(needs_add_on).lower()).inc()
        self.ongoing_credits.observe(ongoing_total)


@lru_cache()
def get_recommendation_metrics() -> RecommendationMetrics:
    # collectors register once per process in the default registry
    return RecommendationMetrics(get_settings().metrics_namespace)


def configure_observability(app: FastAPI) -> None:
    settings = get_settings()

    if settings.enable_prometheus:
        get_recommendation_metrics()
        Instrumentator(excluded_handlers=["/healthz", "/metrics"]).instrument(
            app, metric_namespace=settings.metrics_namespace
        ).expose(app, include_in_schema=False)

    if settings.sentry_dsn:
        if sentry_sdk is None:  # pragma: no cover - optional dependency not installed
            logger.warning("sentry_not_available", dsn="configured_but_missing_dependency")
            return
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            traces_sample_rate=0.2,
            environment=settings.environment,
        )
        logger.info("sentry_initialised", environment=settings.environment)


__all__ = ["RecommendationMetrics", "configure_observability", "get_recommendation_metrics"]

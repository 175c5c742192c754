"""Tracing, metrics and structured logging for the tourmarket API."""

import logging
from typing import Optional

import structlog
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

from .config import settings

SERVICE_NAME = "tourmarket-api"
SERVICE_VERSION = "1.0.0"

METRICS_NAMESPACE = "tourmarket"
LOG_HANDLER_NAME = "tourmarket"

# Buckets sized for API calls backed by a single database round trip
LATENCY_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0)


def _bind_span_ids(logger, method_name, event_dict):
    """Copy the active span's IDs into the event."""
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        event_dict.setdefault("trace_id", trace.format_trace_id(span_context.trace_id))
        event_dict.setdefault("span_id", trace.format_span_id(span_context.span_id))
    return event_dict


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        _bind_span_ids,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def build_log_formatter(renderer=None) -> structlog.stdlib.ProcessorFormatter:
    """
    Formatter rendering stdlib ``logging`` records through structlog.

    Records pick up the request context bound with ``bound_contextvars``,
    the active span IDs and any ``extra=`` fields passed to the logger.
    """
    if renderer is None:
        renderer = structlog.dev.ConsoleRenderer() if settings.debug else structlog.processors.JSONRenderer()

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[*_shared_processors(), structlog.stdlib.ExtraAdder()],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )


def setup_structured_logging() -> None:
    """Configure structlog and install its formatter on the root logger."""
    structlog.configure(
        processors=[*_shared_processors(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.set_name(LOG_HANDLER_NAME)
    handler.setFormatter(build_log_formatter())

    root = logging.getLogger()
    # Replace the handler from an earlier call instead of stacking a second one
    for existing in [h for h in root.handlers if h.get_name() == LOG_HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(settings.log_level)


def setup_tracing(service_name: str = SERVICE_NAME) -> trace.Tracer:
    """
    Install the global tracer provider.

    Spans are always created so log lines carry trace IDs; they are only
    exported when ``OTLP_ENDPOINT`` is set.
    """
    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": service_name,
                "service.version": SERVICE_VERSION,
                "deployment.environment": settings.environment,
            }
        )
    )

    if settings.otlp_endpoint:
        exporter = OTLPSpanExporter(endpoint=settings.otlp_endpoint)
        provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(provider)
    return trace.get_tracer(service_name, SERVICE_VERSION)


def instrument_fastapi(app) -> None:
    """Create a server span per request."""
    FastAPIInstrumentor.instrument_app(app, excluded_urls="health,ready,metrics")


def instrument_sqlalchemy(engine) -> None:
    """Create a client span per statement on the async engine's sync core."""
    SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)


class MetricsCollector:
    """
    Owns the Prometheus registry and every metric the service exposes.

    HTTP metrics are labelled by route template. The booking and tour
    counters are fed by the services after a successful commit.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()

        self.requests = Counter(
            "http_requests",
            "HTTP requests handled",
            ["method", "endpoint", "status_code"],
            namespace=METRICS_NAMESPACE,
            registry=self.registry,
        )
        self.latency = Histogram(
            "http_request_duration_seconds",
            "Time spent handling HTTP requests",
            ["method", "endpoint"],
            namespace=METRICS_NAMESPACE,
            buckets=LATENCY_BUCKETS,
            registry=self.registry,
        )
        self.bookings_created = Counter(
            "bookings_created",
            "Bookings stored",
            namespace=METRICS_NAMESPACE,
            registry=self.registry,
        )
        self.status_changes = Counter(
            "booking_status_changes",
            "Payment status notifications, by new status and whether any booking matched",
            ["status", "matched"],
            namespace=METRICS_NAMESPACE,
            registry=self.registry,
        )
        self.tours_created = Counter(
            "tours_created",
            "Tour products stored together with their tour and dates",
            namespace=METRICS_NAMESPACE,
            registry=self.registry,
        )

    def record_request(self, method: str, endpoint: str, status_code: int, duration: float) -> None:
        self.requests.labels(method=method, endpoint=endpoint, status_code=str(status_code)).inc()
        self.latency.labels(method=method, endpoint=endpoint).observe(duration)

    def record_booking_created(self) -> None:
        self.bookings_created.inc()

    def record_status_change(self, status: str, matched: bool) -> None:
        self.status_changes.labels(status=status, matched="true" if matched else "false").inc()

    def record_tour_created(self) -> None:
        self.tours_created.inc()

    def exposition(self) -> bytes:
        """Render the registry in the Prometheus text format."""
        return generate_latest(self.registry)


metrics_collector = MetricsCollector()


def get_prometheus_metrics() -> bytes:
    return metrics_collector.exposition()

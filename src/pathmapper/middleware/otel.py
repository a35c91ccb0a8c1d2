"""OpenTelemetry tracing and metrics middleware.

Creates a span and records metrics for each lookup.

Install with: pip install "pathmapper[otel]"
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from pathmapper.mapper import Lookup, Middleware
    from pathmapper.match import Match

try:
    from opentelemetry import metrics, trace
    from opentelemetry.trace import SpanKind, TracerProvider
except ImportError as e:
    msg = (
        "OpenTelemetry middleware requires the 'otel' extra. "
        "Install with: pip install 'pathmapper[otel]'"
    )
    raise ImportError(msg) from e


T = TypeVar("T")

_DURATION_BUCKETS = (
    0.000001,
    0.000005,
    0.00001,
    0.000025,
    0.00005,
    0.0001,
    0.00025,
    0.0005,
    0.001,
    0.005,
    0.01,
)


def otel(
    *,
    tracer_provider: TracerProvider | None = None,
    meter_provider: metrics.MeterProvider | None = None,
) -> Middleware[T]:
    """Create OpenTelemetry tracing and metrics middleware.

    Creates an internal span named ``pathmapper.lookup`` for each lookup, with
    the looked up path, whether it matched, the matched template and the
    captured variables as attributes. Only depends on ``opentelemetry-api``;
    users bring their own SDK and exporters.

    Metrics emitted:
        - ``pathmapper.lookup.duration`` (histogram, seconds)
        - ``pathmapper.lookups`` (counter)

    Args:
        tracer_provider: Optional TracerProvider. If None, uses the global provider.
        meter_provider: Optional MeterProvider. If None, uses the global provider.

    Returns:
        Middleware function that wraps lookup with tracing and metrics.

    Example:
        mapper.use(otel())
    """
    tracer = trace.get_tracer(
        "pathmapper",
        tracer_provider=tracer_provider,
    )
    meter = metrics.get_meter(
        "pathmapper",
        meter_provider=meter_provider,
    )
    duration_histogram = meter.create_histogram(
        "pathmapper.lookup.duration",
        unit="s",
        description="Duration of path lookups.",
        explicit_bucket_boundaries_advisory=_DURATION_BUCKETS,
    )
    lookups_counter = meter.create_counter(
        "pathmapper.lookups",
        unit="{lookup}",
        description="Number of path lookups.",
    )

    def middleware(lookup: Lookup[T]) -> Lookup[T]:
        def traced_lookup(path: str) -> Match[T] | None:
            start = time.perf_counter()
            matched = False
            with tracer.start_as_current_span(
                "pathmapper.lookup",
                kind=SpanKind.INTERNAL,
                attributes={"pathmapper.path": path},
                record_exception=True,
                set_status_on_exception=True,
            ) as span:
                try:
                    match = lookup(path)
                    matched = match is not None
                    span.set_attribute("pathmapper.matched", matched)
                    if match is not None:
                        span.set_attribute("pathmapper.template", match.template)
                        for key, value in match.variables.items():
                            span.set_attribute(f"pathmapper.variable.{key}", value)
                        if match.remaining:
                            span.set_attribute(
                                "pathmapper.remaining", "/".join(match.remaining)
                            )
                finally:
                    metric_attrs = {"pathmapper.matched": matched}
                    lookups_counter.add(1, metric_attrs)
                    duration_histogram.record(
                        time.perf_counter() - start, metric_attrs
                    )
            return match

        return traced_lookup

    return middleware

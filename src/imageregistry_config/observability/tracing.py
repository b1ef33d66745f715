"""
OpenTelemetry span helpers for the registry configuration model.

Spans are created through the global tracer provider; without a configured
provider they are no-ops. Span creation is skipped entirely unless tracing
is enabled in settings.
"""

import functools
from collections.abc import Callable
from typing import ParamSpec, TypeVar

from opentelemetry import trace
from opentelemetry.trace import SpanKind, Status, StatusCode, Tracer

from imageregistry_config.settings import settings

P = ParamSpec("P")
R = TypeVar("R")


def get_tracer(name: str = __name__) -> Tracer:
    """
    Get a tracer instance for creating spans.

    Args:
        name: Name of the tracer (typically __name__ of the module)

    Returns:
        Tracer instance (no-op if no provider is configured)
    """
    return trace.get_tracer(name)


def is_tracing_enabled() -> bool:
    return settings.tracing_enabled


def traced_operation(
    operation_name: str,
    span_kind: SpanKind = SpanKind.INTERNAL,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator that wraps a synchronous operation in a span.

    This decorator:
    - Creates a span with the operation name
    - Records exceptions as span events
    - Sets span status based on success/failure

    Args:
        operation_name: Name of the operation (e.g., "validate_config")
        span_kind: Kind of span (INTERNAL, SERVER, CLIENT, etc.)

    Returns:
        Decorated function
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            if not is_tracing_enabled():
                return func(*args, **kwargs)

            tracer = get_tracer(func.__module__ or __name__)
            attributes = {"registry.operation": getattr(func, "__name__", "unknown")}

            with tracer.start_as_current_span(
                operation_name,
                kind=span_kind,
                attributes=attributes,
            ) as span:
                try:
                    result = func(*args, **kwargs)
                    span.set_status(Status(StatusCode.OK))
                    return result
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise

        return wrapper

    return decorator

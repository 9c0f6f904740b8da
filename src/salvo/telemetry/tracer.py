"""Span export setup for game sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)
from opentelemetry.trace import Tracer

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .config import TelemetryConfig


_TRACER_PROVIDER: TracerProvider | None = None


def get_tracer(name: str = "salvo") -> Tracer:
    """Return a tracer from the provider installed by :func:`init_tracing`.

    Engine modules call this at import time, before telemetry is set up, so
    without an installed provider the global (proxy) tracer is returned.
    """
    if _TRACER_PROVIDER is not None:
        return _TRACER_PROVIDER.get_tracer(name)
    return trace.get_tracer(name)


def _span_processor(config: TelemetryConfig) -> SpanProcessor | None:
    if config.otlp_traces_endpoint:
        return BatchSpanProcessor(OTLPSpanExporter(endpoint=config.otlp_traces_endpoint, insecure=True))
    # Console output shares the terminal with the board, so it is opt-in.
    if config.trace_to_console:
        return SimpleSpanProcessor(ConsoleSpanExporter())
    return None


def init_tracing(config: TelemetryConfig) -> TracerProvider:
    """Install a TracerProvider for the game's spans.

    Spans go to the OTLP endpoint when one is configured, to stdout when
    ``trace_to_console`` is set, and are otherwise recorded but not exported.
    """
    global _TRACER_PROVIDER

    provider = TracerProvider(resource=Resource.create(config.resource_dict()))
    processor = _span_processor(config)
    if processor is not None:
        provider.add_span_processor(processor)

    trace.set_tracer_provider(provider)
    _TRACER_PROVIDER = provider
    return provider


def shutdown_tracing() -> None:
    """Flush pending spans and drop the installed provider, if any."""
    global _TRACER_PROVIDER

    if _TRACER_PROVIDER is None:
        return
    _TRACER_PROVIDER.shutdown()
    _TRACER_PROVIDER = None

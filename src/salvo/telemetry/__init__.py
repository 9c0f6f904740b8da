"""Telemetry helpers shared by the engine and the front end."""

from __future__ import annotations

from .config import TelemetryConfig, init_telemetry, load_telemetry_config
from .logger import configure_console_logging, get_logger, init_logging
from .metrics import get_meter, init_metrics, record_game_duration, record_game_metric
from .tracer import get_tracer, init_tracing, shutdown_tracing

__all__ = [
    "TelemetryConfig",
    "configure_console_logging",
    "get_logger",
    "get_tracer",
    "get_meter",
    "record_game_metric",
    "record_game_duration",
    "init_logging",
    "init_tracing",
    "shutdown_tracing",
    "init_metrics",
    "load_telemetry_config",
    "init_telemetry",
]

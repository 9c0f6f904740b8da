"""Telemetry configuration helpers."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, Field

from .logger import init_logging
from .metrics import init_metrics
from .tracer import init_tracing

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(*names: str) -> bool | None:
    """Return the first boolean env var found among ``names``, or None."""
    for name in names:
        value = os.getenv(name)
        if value is not None:
            return value.strip().lower() in _TRUTHY
    return None


def _signal_endpoint(explicit: str | None, base: str | None, signal: str) -> str | None:
    if explicit:
        return explicit
    if not base:
        return None
    return f"{base.rstrip('/')}/v1/{signal}"


def _parse_resource_attributes(raw: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for part in raw.split(","):
        if "=" not in part:
            continue
        key, value = part.split("=", 1)
        attrs[key.strip()] = value.strip()
    return attrs


class TelemetryConfig(BaseModel):
    """Which OpenTelemetry signals to export, and where."""

    enable_tracing: bool = False
    enable_metrics: bool = False
    enable_logging: bool = False
    otlp_traces_endpoint: str | None = None
    otlp_metrics_endpoint: str | None = None
    otlp_logs_endpoint: str | None = None
    trace_to_console: bool = False
    service_name: str = "salvo"
    service_namespace: str = "game"
    resource_attributes: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_env(cls, **overrides: Any) -> TelemetryConfig:
        """Construct config from env vars (`SALVO_*` + `OTEL_*`).

        Configuring an OTLP endpoint for a signal switches that signal on.
        Keyword ``overrides`` win over the environment.
        """
        base = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
        data: dict[str, Any] = {
            "otlp_traces_endpoint": _signal_endpoint(
                os.getenv("OTEL_EXPORTER_OTLP_TRACES_ENDPOINT"), base, "traces"
            ),
            "otlp_metrics_endpoint": _signal_endpoint(
                os.getenv("OTEL_EXPORTER_OTLP_METRICS_ENDPOINT"), base, "metrics"
            ),
            "otlp_logs_endpoint": _signal_endpoint(
                os.getenv("OTEL_EXPORTER_OTLP_LOGS_ENDPOINT"), base, "logs"
            ),
        }

        signals = {
            "enable_tracing": ("SALVO_ENABLE_TRACING", "OTEL_TRACES_ENABLED", "otlp_traces_endpoint"),
            "enable_metrics": ("SALVO_ENABLE_METRICS", "OTEL_METRICS_ENABLED", "otlp_metrics_endpoint"),
            "enable_logging": ("SALVO_ENABLE_LOGGING", "OTEL_LOGS_ENABLED", "otlp_logs_endpoint"),
        }
        for flag, (own_var, otel_var, endpoint_key) in signals.items():
            enabled = env_flag(own_var, otel_var)
            if enabled is None:
                enabled = data[endpoint_key] is not None
            data[flag] = enabled
        data["trace_to_console"] = bool(env_flag("SALVO_TRACE_TO_CONSOLE"))

        if service_name := os.getenv("OTEL_SERVICE_NAME"):
            data["service_name"] = service_name
        if service_namespace := os.getenv("OTEL_SERVICE_NAMESPACE"):
            data["service_namespace"] = service_namespace
        if resource_env := os.getenv("OTEL_RESOURCE_ATTRIBUTES"):
            data["resource_attributes"] = _parse_resource_attributes(resource_env)

        data.update(overrides)
        return cls(**data)

    def resource_dict(self) -> dict[str, str]:
        """Attributes for the OpenTelemetry ``Resource`` shared by every signal."""
        attributes = {
            "service.name": self.service_name,
            "service.namespace": self.service_namespace,
        }
        attributes.update(self.resource_attributes)
        return attributes


@lru_cache(maxsize=1)
def load_telemetry_config() -> TelemetryConfig:
    """Load and cache telemetry config from the environment."""

    return TelemetryConfig.from_env()


def init_telemetry(config: TelemetryConfig | None = None) -> TelemetryConfig:
    """Initialise the enabled telemetry signals."""

    resolved = config or load_telemetry_config()

    if resolved.enable_tracing:
        init_tracing(resolved)
    if resolved.enable_metrics:
        init_metrics(resolved)
    if resolved.enable_logging:
        init_logging(resolved)
    return resolved

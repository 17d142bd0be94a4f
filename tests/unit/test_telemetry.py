"""Telemetry configuration: exporter selection and disabled mode."""

from opentelemetry.sdk.trace.export import ConsoleSpanExporter

from app.shared.telemetry.telemetry import TelemetryConfig, build_exporter


def test_none_exporter() -> None:
    assert build_exporter("none") is None


def test_console_exporter() -> None:
    assert isinstance(build_exporter("console"), ConsoleSpanExporter)


def test_otlp_without_endpoint_falls_back_to_console() -> None:
    assert isinstance(build_exporter("otlp"), ConsoleSpanExporter)


def test_unknown_exporter_falls_back_to_console() -> None:
    assert isinstance(build_exporter("zipkin"), ConsoleSpanExporter)


def test_disabled_telemetry_installs_nothing() -> None:
    telemetry = TelemetryConfig("lp-api-gateway", "1.0.0", enabled=False)

    assert telemetry.setup_telemetry() is None
    assert telemetry.active is False
    telemetry.shutdown()

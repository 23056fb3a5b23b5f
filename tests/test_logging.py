"""Tests for structured logging configuration."""

from decimal import Decimal

import orjson
import structlog

from takehome.calculators.models import SalaryInput
from takehome.calculators.salary import calculate_salary
from takehome.core.config import settings
from takehome.core.logging import (
    _add_context_vars,
    _orjson_serializer,
    calculation_ctx,
    configure_logging,
    get_logger,
    tax_year_ctx,
)


def _reset_structlog() -> None:
    """Reset structlog defaults to avoid test cross-talk."""
    structlog.reset_defaults()


def test_configure_logging_uses_json_when_log_format_json() -> None:
    """Use JSON logging when log_format=json, even in development."""
    original_env = settings.environment
    original_format = getattr(settings, "log_format", None)

    try:
        settings.environment = "development"
        settings.log_format = "json"
        configure_logging()

        processors = structlog.get_config()["processors"]
        assert any(
            isinstance(processor, structlog.processors.JSONRenderer)
            for processor in processors
        )
        assert any(
            isinstance(processor, structlog.processors.EventRenamer)
            for processor in processors
        )
    finally:
        settings.environment = original_env
        settings.log_format = original_format
        _reset_structlog()


def test_configure_logging_uses_console_when_log_format_console() -> None:
    """Use console logging when log_format=console in development."""
    original_env = settings.environment
    original_format = getattr(settings, "log_format", None)

    try:
        settings.environment = "development"
        settings.log_format = "console"
        configure_logging()

        processors = structlog.get_config()["processors"]
        assert any(
            isinstance(processor, structlog.dev.ConsoleRenderer)
            for processor in processors
        )
        assert not any(
            isinstance(processor, structlog.processors.JSONRenderer)
            for processor in processors
        )
    finally:
        settings.environment = original_env
        settings.log_format = original_format
        _reset_structlog()


def test_configure_logging_defaults_to_json_outside_development() -> None:
    """Without an override, non-development environments log JSON."""
    original_env = settings.environment
    original_format = getattr(settings, "log_format", None)

    try:
        settings.environment = "production"
        settings.log_format = None
        configure_logging()

        processors = structlog.get_config()["processors"]
        assert any(
            isinstance(processor, structlog.processors.JSONRenderer)
            for processor in processors
        )
    finally:
        settings.environment = original_env
        settings.log_format = original_format
        _reset_structlog()


def test_context_vars_added_to_events() -> None:
    """Calculation name and tax year are attached when set."""
    calculation_token = calculation_ctx.set("net_to_gross")
    year_token = tax_year_ctx.set(2025)
    try:
        event = _add_context_vars(None, "info", {"event": "solved"})
    finally:
        calculation_ctx.reset(calculation_token)
        tax_year_ctx.reset(year_token)

    assert event == {"event": "solved", "calculation": "net_to_gross", "tax_year": 2025}


def test_context_vars_omitted_when_unset() -> None:
    """Nothing is added outside a calculation."""
    assert _add_context_vars(None, "info", {"event": "idle"}) == {"event": "idle"}


def test_orjson_serializer_writes_decimals_as_strings() -> None:
    """Decimal amounts survive JSON rendering exactly."""
    rendered = _orjson_serializer({"message": "tax", "amount": Decimal("1234.50")})
    assert orjson.loads(rendered) == {"message": "tax", "amount": "1234.50"}


def test_get_logger_returns_usable_logger() -> None:
    """get_logger yields a logger that emits structured events."""
    with structlog.testing.capture_logs() as logs:
        get_logger("takehome.test").info("calculation_done", total="10")

    assert logs == [{"event": "calculation_done", "total": "10", "log_level": "info"}]


def test_calculations_leave_logging_configuration_to_the_application() -> None:
    """Running a calculation never configures structlog."""
    _reset_structlog()
    calculate_salary(SalaryInput(gross_salary=Decimal("50000"), state="TX"))
    assert not structlog.is_configured()

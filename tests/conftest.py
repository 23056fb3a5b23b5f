"""Pytest configuration and shared fixtures for tests."""

from decimal import Decimal

import pytest
import structlog

from takehome.calculators.models import SalaryInput
from takehome.calculators.salary import SalaryResult, calculate_salary
from takehome.tax.year_config import (
    TAX_YEAR_2024,
    TAX_YEAR_2025,
    FilingStatus,
    TaxYearConfig,
)


@pytest.fixture
def config_2025() -> TaxYearConfig:
    """2025 tax year configuration.

    Returns:
        The bundled 2025 TaxYearConfig.
    """
    return TAX_YEAR_2025


@pytest.fixture
def config_2024() -> TaxYearConfig:
    """2024 tax year configuration.

    Returns:
        The bundled 2024 TaxYearConfig.
    """
    return TAX_YEAR_2024


@pytest.fixture
def salary_of(config_2025):
    """Factory that runs the forward engine against the 2025 config.

    Returns:
        Callable taking a gross salary and optional SalaryInput fields.
    """

    def _run(gross: str | Decimal, **kwargs) -> SalaryResult:
        kwargs.setdefault("state", "TX")
        kwargs.setdefault("filing_status", FilingStatus.SINGLE)
        return calculate_salary(SalaryInput(gross_salary=Decimal(gross), **kwargs), config_2025)

    return _run


@pytest.fixture
def captured_logs():
    """Capture structlog events emitted during a test.

    Returns:
        List that receives one dict per log event.
    """
    with structlog.testing.capture_logs() as logs:
        yield logs

"""Pydantic input models for the calculators.

Every calculator takes one of these validated, immutable models. Validation
happens here, at the engine boundary: negative amounts, NaN/Infinity,
unknown states and inconsistent combinations are rejected before any tax
arithmetic runs.

All monetary fields use Decimal.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from takehome.core.config import settings
from takehome.tax.states import is_known_state
from takehome.tax.year_config import FilingStatus

ZERO = Decimal("0")

ModelT = TypeVar("ModelT", bound=BaseModel)


class InvalidInputError(ValueError):
    """Raised when calculator input fails validation."""

    def __init__(self, message: str, errors: list[str] | None = None):
        """Initialize InvalidInputError.

        Args:
            message: Human-readable error message
            errors: List of specific field errors
        """
        self.errors = errors or []
        super().__init__(message)


def _format_errors(exc: ValidationError) -> list[str]:
    """Format pydantic validation errors as ``field: message`` strings."""
    errors = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"]) or "input"
        errors.append(f"{loc}: {error['msg']}")
    return errors


def build_input(model: type[ModelT], **data: Any) -> ModelT:
    """Validate raw values into a calculator input model.

    Args:
        model: The input model class.
        **data: Raw field values.

    Returns:
        The validated model.

    Raises:
        InvalidInputError: If any field is invalid.

    Example:
        >>> build_input(SalaryInput, gross_salary="75000", filing_status="single", state="TX")
        SalaryInput(gross_salary=Decimal('75000'), ...)
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = _format_errors(e)
        raise InvalidInputError(
            f"Invalid {model.__name__}: {'; '.join(errors)}", errors=errors
        ) from e


class CalculatorInput(BaseModel):
    """Shared configuration for calculator inputs."""

    model_config = ConfigDict(frozen=True)

    tax_year: int | None = Field(
        default=None, description="Tax year; None uses the engine default"
    )


def _validate_state(value: str) -> str:
    code = value.strip().upper()
    if not is_known_state(code):
        raise ValueError(f"Unknown state code: {value!r}")
    return code


class StateInput(CalculatorInput):
    """Input that is evaluated against a state's income tax rule."""

    state: str = Field(
        default_factory=lambda: settings.default_state,
        description="Two-letter state code",
    )

    @field_validator("state", mode="before")
    @classmethod
    def validate_state(cls, v: object) -> str:
        """Normalize and check the state code."""
        if not isinstance(v, str):
            raise ValueError("State code must be a string")
        return _validate_state(v)


class SalaryInput(StateInput):
    """Input for the forward salary calculation."""

    gross_salary: Decimal = Field(ge=0, description="Annual gross salary")
    bonus: Decimal = Field(default=ZERO, ge=0, description="Bonus, taxed as ordinary income")
    filing_status: FilingStatus = Field(default=FilingStatus.SINGLE)
    retirement_401k: Decimal = Field(
        default=ZERO, ge=0, description="Annual pre-tax 401(k) contribution"
    )
    hsa_contribution: Decimal = Field(
        default=ZERO, ge=0, description="Annual pre-tax HSA contribution"
    )
    age_50_or_over: bool = Field(
        default=False, description="Eligible for the 401(k) catch-up contribution"
    )
    hsa_coverage: Literal["self", "family"] = Field(
        default="self", description="HSA coverage type, selects the contribution limit"
    )
    include_local_tax: bool = Field(
        default=False, description="Add typical local income tax (NYC, MD counties)"
    )

    @model_validator(mode="after")
    def check_pre_tax_reductions(self) -> SalaryInput:
        """Pre-tax contributions cannot exceed what was earned."""
        if self.retirement_401k + self.hsa_contribution > self.gross_salary + self.bonus:
            raise ValueError(
                "Pre-tax contributions "
                f"({self.retirement_401k + self.hsa_contribution}) exceed gross income "
                f"({self.gross_salary + self.bonus})"
            )
        return self


class EmployerCostInput(StateInput):
    """Input for total cost of employment."""

    gross_salary: Decimal = Field(ge=0, description="Annual gross salary")
    employer_401k_match: Decimal = Field(
        default=ZERO, ge=0, le=100, description="Employer 401(k) match, percent of salary"
    )
    suta_rate: Decimal | None = Field(
        default=None, ge=0, le=1, description="State unemployment rate; None uses the default"
    )


class SelfEmploymentInput(CalculatorInput):
    """Input for self-employment tax."""

    net_earnings: Decimal = Field(ge=0, description="Net self-employment earnings")
    filing_status: FilingStatus = Field(default=FilingStatus.SINGLE)


class SelfEmployedIncomeInput(CalculatorInput):
    """Input for a sole proprietor's full federal picture."""

    annual_revenue: Decimal = Field(ge=0)
    expenses: Decimal = Field(default=ZERO, ge=0)
    home_office_deduction: Decimal = Field(default=ZERO, ge=0)
    sep_ira_contribution: Decimal = Field(default=ZERO, ge=0)
    health_insurance: Decimal = Field(default=ZERO, ge=0, description="Self-employed health premiums")
    filing_status: FilingStatus = Field(default=FilingStatus.SINGLE)


class CapitalGainsInput(CalculatorInput):
    """Input for tax on the sale of an asset."""

    sale_price: Decimal = Field(ge=0)
    purchase_price: Decimal = Field(ge=0)
    costs: Decimal = Field(default=ZERO, ge=0, description="Fees, closing costs, improvements")
    annual_income: Decimal = Field(default=ZERO, ge=0, description="Other income for the year")
    filing_status: FilingStatus = Field(default=FilingStatus.SINGLE)
    holding_period: Literal["short", "long"] = "long"
    asset_type: Literal["property", "stocks", "other"] = "stocks"
    is_primary_residence: bool = False

    @model_validator(mode="after")
    def check_primary_residence(self) -> CapitalGainsInput:
        """Only property can be a primary residence."""
        if self.is_primary_residence and self.asset_type != "property":
            raise ValueError("is_primary_residence requires asset_type='property'")
        return self


class DividendInput(StateInput):
    """Input for dividend tax."""

    other_income: Decimal = Field(default=ZERO, ge=0)
    qualified_dividends: Decimal = Field(default=ZERO, ge=0)
    ordinary_dividends: Decimal = Field(default=ZERO, ge=0)
    filing_status: FilingStatus = Field(default=FilingStatus.SINGLE)


class BonusInput(StateInput):
    """Input for bonus withholding versus actual liability."""

    base_salary: Decimal = Field(ge=0)
    bonus: Decimal = Field(ge=0)
    filing_status: FilingStatus = Field(default=FilingStatus.SINGLE)
    retirement_401k: Decimal = Field(default=ZERO, ge=0)

    @model_validator(mode="after")
    def check_retirement(self) -> BonusInput:
        """401(k) is deferred from base salary."""
        if self.retirement_401k > self.base_salary:
            raise ValueError(
                f"retirement_401k ({self.retirement_401k}) exceeds base salary ({self.base_salary})"
            )
        return self


class JobInput(BaseModel):
    """One employer's salary."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Label for the job")
    salary: Decimal = Field(ge=0, description="Annual salary from this employer")


class MultipleJobsInput(StateInput):
    """Input for reconciling withholding across several concurrent jobs."""

    jobs: tuple[JobInput, ...] = Field(min_length=1, description="Jobs held in the same year")
    filing_status: FilingStatus = Field(default=FilingStatus.SINGLE)


class NetToGrossInput(StateInput):
    """Input for solving gross salary from a target take-home."""

    target_net_yearly: Decimal = Field(ge=0, description="Target annual take-home pay")
    filing_status: FilingStatus = Field(default=FilingStatus.SINGLE)

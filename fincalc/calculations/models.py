"""
Calculation Inputs and Results

Each calculation target has its own result model carrying only the fields
that target produces. A failed calculation keeps the model of its target,
with the error message set and every numeric field left at zero.
"""

import enum
from datetime import date
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict


class CalculationTarget(str, enum.Enum):
    """The unknown being solved for."""

    FUTURE_VALUE = "FUTURE_VALUE"
    PRINCIPAL = "PRINCIPAL"
    ANNUAL_INTEREST_RATE = "ANNUAL_INTEREST_RATE"
    TIME_PERIOD = "TIME_PERIOD"
    LOAN_PAYMENT = "LOAN_PAYMENT"


class CompoundingFrequency(enum.IntEnum):
    """Compounding events per year for the investment targets."""

    ANNUALLY = 1
    SEMI_ANNUALLY = 2
    QUARTERLY = 4
    MONTHLY = 12
    DAILY = 365


class PaymentFrequency(enum.IntEnum):
    """Loan payments per year."""

    ANNUALLY = 1
    SEMI_ANNUALLY = 2
    QUARTERLY = 4
    MONTHLY = 12
    BI_WEEKLY = 26
    WEEKLY = 52


class CalculationInputs(BaseModel):
    """
    Inputs for a single calculation.

    Only the fields required by the selected target need to be supplied.
    Rates are annual percentages (5 means 5%), durations are in years.
    Frequencies are plain integers so that a non-positive value is reported
    by the solver rather than rejected as an unknown enum member.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    calculation_target: CalculationTarget

    # Investment
    principal: Optional[float] = None
    future_value: Optional[float] = None
    annual_interest_rate: Optional[float] = None
    time_period: Optional[float] = None
    compounding_frequency: int = CompoundingFrequency.ANNUALLY
    inflation_rate: Optional[float] = None

    # Loan
    loan_amount: Optional[float] = None
    loan_interest_rate: Optional[float] = None
    loan_term: Optional[float] = None
    payment_frequency: int = PaymentFrequency.MONTHLY
    first_payment_date: Optional[date] = None


class GrowthPoint(BaseModel):
    """Nominal value of an investment at the end of a whole year."""

    model_config = ConfigDict(frozen=True)

    year: int
    value: float


class AmortizationEntry(BaseModel):
    """One payment line of an amortization schedule."""

    model_config = ConfigDict(frozen=True)

    payment_number: int
    starting_balance: float
    payment: float
    interest_paid: float
    principal_paid: float
    ending_balance: float
    payment_date: Optional[date] = None


class CalculationResult(BaseModel):
    """Fields shared by every calculation result."""

    model_config = ConfigDict(frozen=True)

    calculation_target: CalculationTarget
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, message: str):
        """Build the zeroed result for a failed calculation."""
        return cls(error=message)


class FutureValueResult(CalculationResult):
    calculation_target: Literal[CalculationTarget.FUTURE_VALUE] = (
        CalculationTarget.FUTURE_VALUE
    )
    future_value: float = 0.0
    real_future_value: Optional[float] = None
    growth_data: List[GrowthPoint] = []


class PrincipalResult(CalculationResult):
    calculation_target: Literal[CalculationTarget.PRINCIPAL] = CalculationTarget.PRINCIPAL
    principal: float = 0.0


class InterestRateResult(CalculationResult):
    calculation_target: Literal[CalculationTarget.ANNUAL_INTEREST_RATE] = (
        CalculationTarget.ANNUAL_INTEREST_RATE
    )
    annual_interest_rate: float = 0.0


class TimePeriodResult(CalculationResult):
    calculation_target: Literal[CalculationTarget.TIME_PERIOD] = (
        CalculationTarget.TIME_PERIOD
    )
    time_period: float = 0.0


class LoanPaymentResult(CalculationResult):
    calculation_target: Literal[CalculationTarget.LOAN_PAYMENT] = (
        CalculationTarget.LOAN_PAYMENT
    )
    periodic_payment: float = 0.0
    total_interest_paid: float = 0.0
    total_amount_paid: float = 0.0
    number_of_payments: int = 0
    amortization_schedule: List[AmortizationEntry] = []


class InvalidTargetResult(CalculationResult):
    """Result for a target no solver handles."""

    calculation_target: Union[CalculationTarget, str]

    @classmethod
    def for_target(cls, target) -> "InvalidTargetResult":
        return cls(calculation_target=target, error="Invalid calculation target.")

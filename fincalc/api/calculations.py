"""
Financial calculation API endpoints.

These endpoints accept inputs and return calculated results.
"""

from datetime import date
from typing import Annotated, Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from fincalc.calculations import perform_financial_calculation
from fincalc.calculations.amortization import count_payments
from fincalc.calculations.models import (
    CalculationInputs,
    CalculationTarget,
    FutureValueResult,
    InterestRateResult,
    LoanPaymentResult,
    PaymentFrequency,
    PrincipalResult,
    TimePeriodResult,
)
from fincalc.config import get_settings

router = APIRouter()

CalculationResponse = Annotated[
    Union[
        FutureValueResult,
        PrincipalResult,
        InterestRateResult,
        TimePeriodResult,
        LoanPaymentResult,
    ],
    Field(discriminator="calculation_target"),
]

HORIZON_TARGETS = (
    CalculationTarget.FUTURE_VALUE,
    CalculationTarget.PRINCIPAL,
    CalculationTarget.ANNUAL_INTEREST_RATE,
)


def check_limits(inputs: CalculationInputs) -> None:
    """Reject horizons too long to serve, before any work is done."""
    settings = get_settings()

    if (
        inputs.calculation_target in HORIZON_TARGETS
        and inputs.time_period is not None
        and inputs.time_period > settings.max_time_period_years
    ):
        raise HTTPException(
            status_code=400,
            detail=f"Time period cannot exceed {settings.max_time_period_years:g} years",
        )

    if (
        inputs.calculation_target == CalculationTarget.LOAN_PAYMENT
        and inputs.loan_term is not None
        and inputs.loan_term > 0
        and inputs.payment_frequency > 0
        and count_payments(inputs.loan_term, inputs.payment_frequency)
        > settings.max_schedule_payments
    ):
        raise HTTPException(
            status_code=400,
            detail=f"Loan cannot have more than {settings.max_schedule_payments} payments",
        )


@router.post("", response_model=CalculationResponse)
async def calculate(inputs: CalculationInputs):
    """
    Solve for the selected calculation target.

    Invalid values come back in the result's error field with status 200.
    """
    check_limits(inputs)
    return perform_financial_calculation(inputs)


class AmortizationInput(BaseModel):
    """Input for amortization calculation."""

    model_config = ConfigDict(allow_inf_nan=False)

    loan_amount: float
    loan_interest_rate: float
    loan_term: float
    payment_frequency: int = PaymentFrequency.MONTHLY
    first_payment_date: Optional[date] = None


@router.post("/amortization", response_model=LoanPaymentResult)
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule."""
    calculation_inputs = CalculationInputs(
        calculation_target=CalculationTarget.LOAN_PAYMENT,
        **inputs.model_dump(),
    )
    check_limits(calculation_inputs)

    result = perform_financial_calculation(calculation_inputs)
    if result.error:
        raise HTTPException(status_code=400, detail=result.error)
    return result

"""
Calculation dispatcher.

Routes a set of inputs to the solver for its calculation target. Domain
failures come back as results with the error field set, never as exceptions.
"""

import logging
import math
from typing import Callable, Dict, List, Tuple, Type

from fincalc.calculations import amortization, growth
from fincalc.calculations.models import (
    CalculationInputs,
    CalculationResult,
    CalculationTarget,
    FutureValueResult,
    InterestRateResult,
    InvalidTargetResult,
    LoanPaymentResult,
    PrincipalResult,
    TimePeriodResult,
)

logger = logging.getLogger(__name__)

OUT_OF_RANGE_MESSAGE = "Calculation overflowed or underflowed; inputs are out of range."


def _future_value(inputs: CalculationInputs) -> CalculationResult:
    return growth.calculate_future_value(
        principal=inputs.principal,
        annual_rate=inputs.annual_interest_rate,
        years=inputs.time_period,
        compounding_frequency=inputs.compounding_frequency,
        inflation_rate=inputs.inflation_rate,
    )


def _principal(inputs: CalculationInputs) -> CalculationResult:
    return growth.calculate_present_value(
        future_value=inputs.future_value,
        annual_rate=inputs.annual_interest_rate,
        years=inputs.time_period,
        compounding_frequency=inputs.compounding_frequency,
    )


def _annual_rate(inputs: CalculationInputs) -> CalculationResult:
    return growth.calculate_annual_rate(
        principal=inputs.principal,
        future_value=inputs.future_value,
        years=inputs.time_period,
        compounding_frequency=inputs.compounding_frequency,
    )


def _time_period(inputs: CalculationInputs) -> CalculationResult:
    return growth.calculate_time_period(
        principal=inputs.principal,
        future_value=inputs.future_value,
        annual_rate=inputs.annual_interest_rate,
        compounding_frequency=inputs.compounding_frequency,
    )


def _loan_payment(inputs: CalculationInputs) -> CalculationResult:
    return amortization.calculate_loan_payment(
        loan_amount=inputs.loan_amount,
        annual_rate=inputs.loan_interest_rate,
        loan_term=inputs.loan_term,
        payment_frequency=inputs.payment_frequency,
        first_payment_date=inputs.first_payment_date,
    )


# target -> (solver, result model, required input fields)
SOLVERS: Dict[
    CalculationTarget,
    Tuple[Callable[[CalculationInputs], CalculationResult], Type[CalculationResult], List[str]],
] = {
    CalculationTarget.FUTURE_VALUE: (
        _future_value,
        FutureValueResult,
        ["principal", "annual_interest_rate", "time_period"],
    ),
    CalculationTarget.PRINCIPAL: (
        _principal,
        PrincipalResult,
        ["future_value", "annual_interest_rate", "time_period"],
    ),
    CalculationTarget.ANNUAL_INTEREST_RATE: (
        _annual_rate,
        InterestRateResult,
        ["principal", "future_value", "time_period"],
    ),
    CalculationTarget.TIME_PERIOD: (
        _time_period,
        TimePeriodResult,
        ["principal", "future_value", "annual_interest_rate"],
    ),
    CalculationTarget.LOAN_PAYMENT: (
        _loan_payment,
        LoanPaymentResult,
        ["loan_amount", "loan_interest_rate", "loan_term"],
    ),
}


def _is_finite(result: CalculationResult) -> bool:
    """True if no top-level numeric field of the result is NaN or infinite."""
    return all(
        math.isfinite(value)
        for value in result.model_dump().values()
        if isinstance(value, float)
    )


def missing_inputs(inputs: CalculationInputs) -> List[str]:
    """Names of the inputs the selected target needs but were not supplied."""
    entry = SOLVERS.get(inputs.calculation_target)
    if entry is None:
        return []
    return [field for field in entry[2] if getattr(inputs, field, None) is None]


def perform_financial_calculation(inputs: CalculationInputs) -> CalculationResult:
    """
    Perform a financial calculation based on the specified target.

    Args:
        inputs: Calculation inputs including the calculation target

    Returns:
        The result model for the target, with calculation_target always set
        and error set if the calculation could not be performed
    """
    target = inputs.calculation_target
    entry = SOLVERS.get(target)
    if entry is None:
        logger.debug(f"Rejected unknown calculation target {target!r}")
        return InvalidTargetResult.for_target(target)

    target = CalculationTarget(target)
    solver, result_model, _ = entry

    missing = missing_inputs(inputs)
    if missing:
        result = result_model.failed(f"Missing required input(s): {', '.join(missing)}.")
    else:
        try:
            result = solver(inputs)
        except ArithmeticError:
            result = None
        if result is None or not _is_finite(result):
            logger.warning(f"Out of range while calculating {target.value}")
            result = result_model.failed(OUT_OF_RANGE_MESSAGE)

    if result.error:
        logger.debug(f"{target.value} calculation failed: {result.error}")
    else:
        logger.debug(f"{target.value} calculation succeeded")

    return result.model_copy(update={"calculation_target": target})

"""
Compound Interest Calculations

Solves FV = P * (1 + r/n)^(n*t) for each of its unknowns.
Rates are passed as annual percentages and converted to decimals here.
"""

import math
from typing import List, Optional

from fincalc.calculations.models import (
    FutureValueResult,
    GrowthPoint,
    InterestRateResult,
    PrincipalResult,
    TimePeriodResult,
)


def growth_factor(annual_rate: float, years: float, compounding_frequency: int) -> float:
    """
    Calculate the compound growth factor (1 + r/n)^(n*t).

    Args:
        annual_rate: Annual interest rate as percent (e.g., 5 for 5%)
        years: Investment horizon in years
        compounding_frequency: Compounding events per year

    Returns:
        Multiplier applied to the principal
    """
    r = annual_rate / 100
    n = compounding_frequency
    return (1 + r / n) ** (n * years)


def generate_growth_series(
    principal: float, annual_rate: float, years: float, compounding_frequency: int
) -> List[GrowthPoint]:
    """
    Nominal value at the end of each whole year, from year 1 to floor(years).

    Each point is computed directly from the principal, so no rounding error
    carries from one year to the next. A fractional final year is not included.
    """
    return [
        GrowthPoint(
            year=year,
            value=principal * growth_factor(annual_rate, year, compounding_frequency),
        )
        for year in range(1, math.floor(years) + 1)
    ]


def calculate_future_value(
    principal: float,
    annual_rate: float,
    years: float,
    compounding_frequency: int,
    inflation_rate: Optional[float] = None,
) -> FutureValueResult:
    """
    Calculate the future value of a lump sum.

    Args:
        principal: Amount invested today
        annual_rate: Annual interest rate as percent
        years: Investment horizon in years
        compounding_frequency: Compounding events per year
        inflation_rate: Optional annual inflation rate as percent

    Returns:
        Future value, its inflation-adjusted value when an inflation rate
        is given, and the year-by-year growth series
    """
    if principal <= 0:
        return FutureValueResult.failed("Principal amount must be positive.")
    if annual_rate < 0:
        return FutureValueResult.failed("Annual interest rate cannot be negative.")
    if years <= 0:
        return FutureValueResult.failed("Time period must be positive.")
    if compounding_frequency <= 0:
        return FutureValueResult.failed("Compounding frequency must be positive.")
    if inflation_rate is not None and inflation_rate < 0:
        return FutureValueResult.failed("Inflation rate cannot be negative.")

    future_value = principal * growth_factor(annual_rate, years, compounding_frequency)

    real_future_value = None
    if inflation_rate is not None:
        # Inflation compounds annually whatever the investment's frequency.
        # Deflating in log space lets a huge deflator underflow to 0 instead of overflowing.
        real_future_value = future_value * math.exp(
            -years * math.log1p(inflation_rate / 100)
        )

    return FutureValueResult(
        future_value=future_value,
        real_future_value=real_future_value,
        growth_data=generate_growth_series(
            principal, annual_rate, years, compounding_frequency
        ),
    )


def calculate_present_value(
    future_value: float, annual_rate: float, years: float, compounding_frequency: int
) -> PrincipalResult:
    """Calculate the principal needed today to reach a future value."""
    if future_value <= 0:
        return PrincipalResult.failed("Future value must be positive.")
    if annual_rate < 0:
        return PrincipalResult.failed("Annual interest rate cannot be negative.")
    if years <= 0:
        return PrincipalResult.failed("Time period must be positive.")
    if compounding_frequency <= 0:
        return PrincipalResult.failed("Compounding frequency must be positive.")

    principal = future_value / growth_factor(annual_rate, years, compounding_frequency)
    return PrincipalResult(principal=principal)


def calculate_annual_rate(
    principal: float, future_value: float, years: float, compounding_frequency: int
) -> InterestRateResult:
    """
    Calculate the annual rate that grows principal into future value.

    r = n * ((FV/P)^(1/(n*t)) - 1), returned as percent.
    """
    if principal <= 0:
        return InterestRateResult.failed("Principal amount must be positive.")
    if future_value <= 0:
        return InterestRateResult.failed("Future value must be positive.")
    if years <= 0:
        return InterestRateResult.failed("Time period must be positive.")
    if compounding_frequency <= 0:
        return InterestRateResult.failed("Compounding frequency must be positive.")
    if future_value < principal:
        return InterestRateResult.failed(
            "Future value must be greater than or equal to principal "
            "for a positive interest rate."
        )

    n = compounding_frequency
    rate = n * ((future_value / principal) ** (1 / (n * years)) - 1) * 100
    return InterestRateResult(annual_interest_rate=rate)


def calculate_time_period(
    principal: float, future_value: float, annual_rate: float, compounding_frequency: int
) -> TimePeriodResult:
    """
    Calculate the years needed for principal to grow into future value.

    t = ln(FV/P) / (n * ln(1 + r/n))
    """
    if principal <= 0:
        return TimePeriodResult.failed("Principal amount must be positive.")
    if future_value <= 0:
        return TimePeriodResult.failed("Future value must be positive.")
    if annual_rate <= 0:
        return TimePeriodResult.failed(
            "Annual interest rate must be positive for time calculation."
        )
    if compounding_frequency <= 0:
        return TimePeriodResult.failed("Compounding frequency must be positive.")
    if future_value < principal:
        return TimePeriodResult.failed(
            "Future value must be greater than or equal to principal "
            "for a positive time period."
        )

    r = annual_rate / 100
    n = compounding_frequency
    years = math.log(future_value / principal) / (n * math.log(1 + r / n))
    return TimePeriodResult(time_period=years)

"""
Loan Amortization Calculations

Implements loan payment and amortization schedule calculations for any
payment frequency, matching Excel's PMT, IPMT, and PPMT functions.
"""

import math
from typing import List, Optional
from datetime import date
from dateutil.relativedelta import relativedelta

from fincalc.calculations.models import AmortizationEntry, LoanPaymentResult


def count_payments(loan_term: float, payment_frequency: int) -> int:
    """
    Number of payments over the loan term.

    A partial final period still needs a payment, so the count rounds up.
    """
    return max(1, math.ceil(round(loan_term * payment_frequency, 9)))


def calculate_payment(
    principal: float, periodic_rate: float, number_of_payments: int
) -> float:
    """
    Calculate the regular loan payment.

    Matches Excel's PMT() function.

    Args:
        principal: Loan principal amount
        periodic_rate: Interest rate per payment period as decimal
        number_of_payments: Total number of payments

    Returns:
        Payment amount per period (positive number)
    """
    if principal <= 0:
        return 0.0
    if number_of_payments <= 0:
        return 0.0

    if periodic_rate == 0:
        return principal / number_of_payments

    growth = (1 + periodic_rate) ** number_of_payments
    if growth == 1:
        # rate too small to register in (1 + i)^N
        return principal / number_of_payments
    return principal * periodic_rate * growth / (growth - 1)


def calculate_remaining_balance(
    principal: float,
    periodic_rate: float,
    number_of_payments: int,
    payments_completed: int,
) -> float:
    """Calculate remaining loan balance after N payments."""
    payment = calculate_payment(principal, periodic_rate, number_of_payments)

    if periodic_rate == 0:
        return max(0.0, principal - payment * payments_completed)

    balance = principal * ((1 + periodic_rate) ** payments_completed) - payment * (
        ((1 + periodic_rate) ** payments_completed - 1) / periodic_rate
    )

    return max(0.0, balance)


def payment_date(first_payment_date: date, payment_number: int, payment_frequency: int) -> date:
    """Due date of a payment, counting from the first payment date."""
    periods = payment_number - 1
    if 12 % payment_frequency == 0:
        return first_payment_date + relativedelta(months=periods * (12 // payment_frequency))
    if 52 % payment_frequency == 0:
        return first_payment_date + relativedelta(weeks=periods * (52 // payment_frequency))
    return first_payment_date + relativedelta(days=round(periods * 365 / payment_frequency))


def generate_amortization_schedule(
    principal: float,
    periodic_rate: float,
    number_of_payments: int,
    payment: float,
    payment_frequency: int = 12,
    first_payment_date: Optional[date] = None,
) -> List[AmortizationEntry]:
    """
    Generate a full amortization schedule.

    The last payment pays off whatever balance remains, so the schedule
    always ends at exactly zero.

    Args:
        principal: Loan principal amount
        periodic_rate: Interest rate per payment period as decimal
        number_of_payments: Total number of payments
        payment: Regular payment amount
        payment_frequency: Payments per year, used for payment dates
        first_payment_date: Date of first payment; rows are undated if None

    Returns:
        List of amortization rows
    """
    schedule = []
    balance = principal

    for number in range(1, number_of_payments + 1):
        interest = balance * periodic_rate

        if number == number_of_payments:
            principal_pmt = balance
            row_payment = balance + interest
        else:
            principal_pmt = payment - interest
            row_payment = payment

        starting_balance = balance
        balance -= principal_pmt

        schedule.append(
            AmortizationEntry(
                payment_number=number,
                starting_balance=starting_balance,
                payment=row_payment,
                interest_paid=interest,
                principal_paid=principal_pmt,
                ending_balance=max(0.0, balance),
                payment_date=(
                    payment_date(first_payment_date, number, payment_frequency)
                    if first_payment_date
                    else None
                ),
            )
        )

    return schedule


def calculate_total_interest(schedule: List[AmortizationEntry]) -> float:
    """Calculate total interest paid over loan term."""
    return sum(row.interest_paid for row in schedule)


def calculate_loan_payment(
    loan_amount: float,
    annual_rate: float,
    loan_term: float,
    payment_frequency: int,
    first_payment_date: Optional[date] = None,
) -> LoanPaymentResult:
    """
    Calculate the periodic payment, totals, and amortization schedule of a loan.

    Args:
        loan_amount: Amount borrowed
        annual_rate: Annual interest rate as percent (e.g., 4.5 for 4.5%)
        loan_term: Loan term in years
        payment_frequency: Payments per year
        first_payment_date: Optional date of the first payment

    Returns:
        Loan result with totals derived from the schedule
    """
    if loan_amount <= 0:
        return LoanPaymentResult.failed("Loan amount must be positive.")
    if annual_rate < 0:
        return LoanPaymentResult.failed("Loan interest rate cannot be negative.")
    if loan_term <= 0:
        return LoanPaymentResult.failed("Loan term must be positive.")
    if payment_frequency <= 0:
        return LoanPaymentResult.failed("Payment frequency must be positive.")

    periodic_rate = (annual_rate / 100) / payment_frequency
    number_of_payments = count_payments(loan_term, payment_frequency)
    payment = calculate_payment(loan_amount, periodic_rate, number_of_payments)

    schedule = generate_amortization_schedule(
        principal=loan_amount,
        periodic_rate=periodic_rate,
        number_of_payments=number_of_payments,
        payment=payment,
        payment_frequency=payment_frequency,
        first_payment_date=first_payment_date,
    )

    # payment * N would repeat the drift the final row corrects
    total_amount_paid = sum(row.interest_paid + row.principal_paid for row in schedule)

    return LoanPaymentResult(
        periodic_payment=payment,
        total_interest_paid=total_amount_paid - loan_amount,
        total_amount_paid=total_amount_paid,
        number_of_payments=number_of_payments,
        amortization_schedule=schedule,
    )

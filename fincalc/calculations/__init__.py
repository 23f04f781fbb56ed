"""
Financial Calculation Engine

Closed-form compound interest solvers and loan amortization.
All calculations are designed to match Excel formula behavior.
"""

from fincalc.calculations import amortization, engine, growth
from fincalc.calculations.engine import perform_financial_calculation

__all__ = ["amortization", "engine", "growth", "perform_financial_calculation"]

"""
Financial calculator: compound interest solvers, loan amortization, and saved
loan scenario comparison behind a FastAPI service.
"""

__version__ = "0.1.0"

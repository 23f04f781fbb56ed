"""
In-memory store of saved loan scenarios.

Scenarios live for the lifetime of the process, like the saved-scenario panel
of the calculator UI they back.
"""

import logging
import threading
import uuid
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from fincalc.calculations.models import LoanPaymentResult
from fincalc.config import get_settings

logger = logging.getLogger(__name__)


class ScenarioNotFoundError(KeyError):
    """Raised when a scenario id is not in the store."""


class ScenarioLimitError(Exception):
    """Raised when the store already holds the configured maximum."""


class LoanTerms(BaseModel):
    """Loan inputs a scenario was calculated from."""

    model_config = ConfigDict(frozen=True)

    loan_amount: float
    loan_interest_rate: float
    loan_term: float
    payment_frequency: int


class LoanScenario(BaseModel):
    """A named snapshot of a loan calculation."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    inputs: LoanTerms
    periodic_payment: float
    total_interest_paid: float
    total_amount_paid: float
    number_of_payments: int
    created_at: datetime


def generate_uuid():
    return str(uuid.uuid4())


class ScenarioStore:
    """Thread-safe, insertion-ordered scenario registry."""

    def __init__(self, max_scenarios: Optional[int] = None):
        if max_scenarios is None:
            max_scenarios = get_settings().max_saved_scenarios
        self.max_scenarios = max_scenarios
        self._scenarios: Dict[str, LoanScenario] = {}
        self._lock = threading.Lock()

    def save(self, name: str, inputs: LoanTerms, result: LoanPaymentResult) -> LoanScenario:
        """
        Snapshot a successful loan result under a name.

        Args:
            name: Display name chosen by the user
            inputs: Loan inputs the result was calculated from
            result: Successful loan calculation result

        Returns:
            The stored scenario

        Raises:
            ValueError: If the result carries an error
            ScenarioLimitError: If the store is full
        """
        if result.error:
            raise ValueError(result.error)

        scenario = LoanScenario(
            id=generate_uuid(),
            name=name,
            inputs=inputs,
            periodic_payment=result.periodic_payment,
            total_interest_paid=result.total_interest_paid,
            total_amount_paid=result.total_amount_paid,
            number_of_payments=result.number_of_payments,
            created_at=datetime.utcnow(),
        )

        with self._lock:
            if len(self._scenarios) >= self.max_scenarios:
                raise ScenarioLimitError(
                    f"Cannot save more than {self.max_scenarios} scenarios"
                )
            self._scenarios[scenario.id] = scenario

        logger.info(f"Saved loan scenario {scenario.id} ({name})")
        return scenario

    def get(self, scenario_id: str) -> LoanScenario:
        with self._lock:
            try:
                return self._scenarios[scenario_id]
            except KeyError:
                raise ScenarioNotFoundError(scenario_id) from None

    def list_scenarios(self) -> List[LoanScenario]:
        with self._lock:
            return list(self._scenarios.values())

    def delete(self, scenario_id: str) -> None:
        with self._lock:
            if self._scenarios.pop(scenario_id, None) is None:
                raise ScenarioNotFoundError(scenario_id)
        logger.info(f"Deleted loan scenario {scenario_id}")

    def clear(self) -> None:
        with self._lock:
            self._scenarios.clear()


# Singleton instance
_scenario_store: Optional[ScenarioStore] = None


def get_scenario_store() -> ScenarioStore:
    """Get the scenario store singleton."""
    global _scenario_store
    if _scenario_store is None:
        _scenario_store = ScenarioStore()
    return _scenario_store

"""
Saved loan scenario API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from typing import List

from fincalc.calculations import perform_financial_calculation
from fincalc.calculations.models import CalculationInputs, CalculationTarget, PaymentFrequency
from fincalc.api.calculations import check_limits
from fincalc.services.scenario_store import (
    LoanScenario,
    LoanTerms,
    ScenarioLimitError,
    ScenarioNotFoundError,
    ScenarioStore,
    get_scenario_store,
)

router = APIRouter()


class ScenarioCreate(BaseModel):
    """Schema for saving a loan scenario."""

    model_config = ConfigDict(allow_inf_nan=False)

    name: str = Field(min_length=1, max_length=100)
    loan_amount: float
    loan_interest_rate: float
    loan_term: float
    payment_frequency: int = PaymentFrequency.MONTHLY


class ScenarioListResponse(BaseModel):
    scenarios: List[LoanScenario]
    total: int


class CompareRequest(BaseModel):
    """Scenario ids to compare, in display order."""

    scenario_ids: List[str] = Field(min_length=2)


class CompareResponse(BaseModel):
    scenarios: List[LoanScenario]
    lowest_payment_id: str
    lowest_total_cost_id: str


def _get_or_404(store: ScenarioStore, scenario_id: str) -> LoanScenario:
    try:
        return store.get(scenario_id)
    except ScenarioNotFoundError:
        raise HTTPException(status_code=404, detail="Scenario not found")


@router.get("/", response_model=ScenarioListResponse)
async def list_scenarios(store: ScenarioStore = Depends(get_scenario_store)):
    """List all saved scenarios, oldest first."""
    scenarios = store.list_scenarios()
    return {"scenarios": scenarios, "total": len(scenarios)}


@router.post("/", response_model=LoanScenario, status_code=201)
async def create_scenario(
    scenario_data: ScenarioCreate,
    store: ScenarioStore = Depends(get_scenario_store),
):
    """Calculate a loan and save it as a named scenario."""
    terms = LoanTerms(
        loan_amount=scenario_data.loan_amount,
        loan_interest_rate=scenario_data.loan_interest_rate,
        loan_term=scenario_data.loan_term,
        payment_frequency=scenario_data.payment_frequency,
    )
    inputs = CalculationInputs(
        calculation_target=CalculationTarget.LOAN_PAYMENT,
        **terms.model_dump(),
    )
    check_limits(inputs)

    result = perform_financial_calculation(inputs)
    try:
        return store.save(scenario_data.name, terms, result)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ScenarioLimitError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/compare", response_model=CompareResponse)
async def compare_scenarios(
    request: CompareRequest,
    store: ScenarioStore = Depends(get_scenario_store),
):
    """Compare saved scenarios side by side."""
    scenarios = [_get_or_404(store, scenario_id) for scenario_id in request.scenario_ids]

    lowest_payment = min(scenarios, key=lambda s: s.periodic_payment)
    lowest_total_cost = min(scenarios, key=lambda s: s.total_amount_paid)

    return CompareResponse(
        scenarios=scenarios,
        lowest_payment_id=lowest_payment.id,
        lowest_total_cost_id=lowest_total_cost.id,
    )


@router.get("/{scenario_id}", response_model=LoanScenario)
async def get_scenario(
    scenario_id: str, store: ScenarioStore = Depends(get_scenario_store)
):
    """Get a saved scenario by ID."""
    return _get_or_404(store, scenario_id)


@router.delete("/{scenario_id}")
async def delete_scenario(
    scenario_id: str, store: ScenarioStore = Depends(get_scenario_store)
):
    """Delete a saved scenario."""
    try:
        store.delete(scenario_id)
    except ScenarioNotFoundError:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return {"deleted": True}

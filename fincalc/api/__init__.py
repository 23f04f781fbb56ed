"""
API routes for the financial calculator.
"""

from fastapi import APIRouter

from fincalc.api import calculations, scenarios

router = APIRouter()

# Include sub-routers
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
router.include_router(scenarios.router, prefix="/scenarios", tags=["scenarios"])

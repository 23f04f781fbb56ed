"""
Application services module.
"""

from fincalc.services.scenario_store import ScenarioStore, get_scenario_store

__all__ = ["ScenarioStore", "get_scenario_store"]

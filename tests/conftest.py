"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from fincalc.main import app
from fincalc.services.scenario_store import get_scenario_store


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")


@pytest.fixture(autouse=True)
def empty_scenario_store():
    """Start and finish every test with no saved scenarios."""
    store = get_scenario_store()
    store.clear()
    yield store
    store.clear()


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)

import pytest
from fastapi.testclient import TestClient

from config import DEFAULT_INPUTS, get_settings
from main import app
from schemas.projection import ProjectionInputs


@pytest.fixture
def default_inputs() -> ProjectionInputs:
    return ProjectionInputs(**DEFAULT_INPUTS)


@pytest.fixture
def make_inputs():
    """Build inputs from the defaults with selected fields overridden."""
    def _make(**overrides) -> ProjectionInputs:
        return ProjectionInputs(**{**DEFAULT_INPUTS, **overrides})
    return _make


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

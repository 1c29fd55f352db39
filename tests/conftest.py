from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("SLATEPLANNER_RATE_LIMIT_REQUESTS", "1000")

from slateplanner.api.main import create_app
from slateplanner.core.plans import DEFAULT_CATALOG, get_catalog
from slateplanner.core.rate_limiter import reset_limiter
from slateplanner.core.settings import get_settings


@pytest.fixture(scope="session")
def app():
    get_settings.cache_clear()
    get_catalog.cache_clear()
    reset_limiter()
    return create_app()


@pytest.fixture(scope="session")
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def catalog():
    return DEFAULT_CATALOG

# conftest.py
"""
Pytest configuration and fixtures for Shelfcast tests
Provides oracle doubles (httpx.MockTransport), estimators and an API client
"""

import asyncio
from datetime import date

import httpx
import pytest
from fastapi.testclient import TestClient

from shelfcast.api.estimation import get_estimator
from shelfcast.main import app
from shelfcast.models.estimation import EstimationInput
from shelfcast.services.date_estimator import DateEstimator
from shelfcast.services.oracle_client import OracleClient

ORACLE_URL = "https://oracle.test/functions/v1/estimate-dates"


# ===== ORACLE FIXTURES =====

@pytest.fixture
def oracle_factory():
    """
    Build an OracleClient whose HTTP traffic goes to `handler`

    Usage:
        oracle = oracle_factory(lambda request: httpx.Response(200, json={...}))
    """
    http_clients = []

    def _make(handler, url=ORACLE_URL, **kwargs):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        http_clients.append(http_client)
        return OracleClient(url=url, http_client=http_client, **kwargs)

    yield _make

    # Own loop: sync API tests have none, and async tests have finished theirs
    loop = asyncio.new_event_loop()
    try:
        for http_client in http_clients:
            loop.run_until_complete(http_client.aclose())
    finally:
        loop.close()


@pytest.fixture
def oracle_payload_factory(oracle_factory):
    """Oracle that always answers 200 with the given JSON payload"""
    def _make(payload):
        return oracle_factory(lambda request: httpx.Response(200, json=payload))

    return _make


@pytest.fixture
def unconfigured_oracle():
    """No URL, regardless of environment settings"""
    return OracleClient(url="")


@pytest.fixture
def failing_oracle(oracle_factory):
    return oracle_factory(lambda request: httpx.Response(503, text="unavailable"))


# ===== ESTIMATOR FIXTURES =====

@pytest.fixture
def heuristic_estimator(failing_oracle):
    return DateEstimator(oracle=failing_oracle)


@pytest.fixture
def purchase_date():
    return date(2024, 1, 1)


@pytest.fixture
def milk_item(purchase_date):
    return EstimationInput(name="Whole Milk", category="Dairy", purchased_at=purchase_date)


# ===== API FIXTURES =====

@pytest.fixture
def api_client_factory():
    """TestClient with the estimator dependency replaced"""
    clients = []

    def _make(estimator):
        app.dependency_overrides[get_estimator] = lambda: estimator
        client = TestClient(app)
        clients.append(client)
        return client

    yield _make

    app.dependency_overrides.clear()
    for client in clients:
        client.close()


@pytest.fixture
def api_client(api_client_factory, unconfigured_oracle):
    return api_client_factory(DateEstimator(oracle=unconfigured_oracle))


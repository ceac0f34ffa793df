# Test type: Configuration
# Validation to be executed: Shared fixtures for all test modules
# Command: pytest test/ -v (this file is auto-loaded by pytest)

"""Shared pytest fixtures for the Investment Projection API test suite."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from projection_engine.main import app
from projection_engine.services.calculator_service import ProductType


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def client():
    """Async HTTP client bound to the FastAPI app (no real server needed)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


# ── Sample data fixtures ─────────────────────────────────────────────────

@pytest.fixture
def compare_body():
    """One calendar year, every product selected."""
    return {
        "principal": 100_000,
        "startDate": "2024-01-01",
        "endDate": "2025-01-01",
        "products": [p.value for p in ProductType],
    }

#!/usr/bin/env python3
"""
Basic health endpoint tests for CI/CD pipeline.
"""

import pytest


@pytest.mark.smoke
async def test_health_endpoint(client):
    """Liveness never touches the database"""
    response = await client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


@pytest.mark.smoke
async def test_ready_endpoint(client):
    """Readiness runs a trivial query"""
    response = await client.get("/readyz")

    assert response.status_code == 200
    assert response.json() == {"db": "ok"}


@pytest.mark.smoke
async def test_unknown_route_is_404(client):
    response = await client.get("/api/does-not-exist")
    assert response.status_code == 404

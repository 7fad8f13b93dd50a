"""Shared fixtures for web tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from trackpath.web.app import app


@pytest.fixture
def client():
    """FastAPI test client."""
    with TestClient(app) as c:
        yield c


def make_square_payload(size: float = 10.0, **extra) -> dict:
    """Square corners in shuffled order."""
    payload = {
        "points": [
            {"x": size, "y": 0.0, "z": size},
            {"x": 0.0, "y": 0.0, "z": 0.0},
            {"x": size, "y": 0.0, "z": 0.0},
            {"x": 0.0, "y": 0.0, "z": size},
        ],
        "closed": True,
    }
    payload.update(extra)
    return payload


def make_line_payload(**extra) -> dict:
    """Three collinear points 10 units apart along +z."""
    payload = {
        "points": [
            {"x": 0.0, "y": 0.0, "z": 20.0},
            {"x": 0.0, "y": 0.0, "z": 0.0},
            {"x": 0.0, "y": 0.0, "z": 10.0},
        ],
        "closed": False,
    }
    payload.update(extra)
    return payload

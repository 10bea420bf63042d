# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests (FastAPI TestClient with overridden dependencies)
"""

import os
from typing import Any

import pytest

# Rate limiting would need Redis; it is switched off before the limiter is built.
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

API_USER_ID = "7c9e6679-7425-40de-944b-e07fc1f90ae7"


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def sample_pinfl() -> str:
    """Provide a sample 14-digit PINFL."""
    return "31234567890123"


@pytest.fixture
def sample_student_id() -> str:
    """Provide a sample student ID for testing."""
    return "550e8400-e29b-41d4-a716-446655440001"


@pytest.fixture
def sample_university_code() -> str:
    return "00001"


@pytest.fixture
def sample_student_map(sample_pinfl: str, sample_university_code: str) -> dict[str, Any]:
    """Provide a CUBA map for a new student."""
    return {
        "_entityName": "hemishe_EStudent",
        "code": "S-0001",
        "firstname": "Vali",
        "lastname": "Aliyev",
        "fathername": "Karimovich",
        "pinfl": sample_pinfl,
        "_university": sample_university_code,
        "birthday": "2003-05-17",
    }


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def app():
    """Create the application without running its lifespan.

    Dependencies are overridden per test through ``app.dependency_overrides``.
    """
    from hemis.api.app import create_app

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)


@pytest.fixture
def api_jwt_manager():
    """JWT manager signing with the application settings."""
    from hemis.core.config import get_settings
    from hemis.domains.auth.jwt import JWTManager

    settings = get_settings()
    return JWTManager(settings.jwt, settings.legacy_oauth)


@pytest.fixture
def auth_headers(api_jwt_manager) -> dict[str, str]:
    """Bearer header for the ``otm001`` account of university 00001."""
    tokens = api_jwt_manager.create_token_pair(
        user_id=API_USER_ID,
        username="otm001",
        university="00001",
        roles=["university_admin"],
    )
    return {"Authorization": f"Bearer {tokens.access_token}"}


@pytest.fixture
def api_user_id() -> str:
    return API_USER_ID

"""
Pytest fixtures for GenieCMS tests.

Provides common fixtures for:
- In-memory Supabase backend
- FastAPI test client (anonymous, logged in, admin)
- Sample users, pages and redirects
"""

import os
from typing import Any, Dict, Generator

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

# Set test environment before imports
os.environ["SUPABASE_URL"] = "http://supabase.test"
os.environ["SUPABASE_ANON_KEY"] = "test-anon-key"
os.environ["SUPABASE_SERVICE_KEY"] = "test-service-key"
os.environ["AUTH_COOKIE_SECRET"] = "test-cookie-secret"
os.environ["ENVIRONMENT"] = "test"

from cms.services import cms_service, supabase_service, user_service
from tests.helpers import TEST_PASSWORD, FakeSupabase


# ============================================================================
# Backend Fixtures
# ============================================================================

@pytest.fixture
def fake_db(monkeypatch) -> FakeSupabase:
    """
    Replace the Supabase client with an in-memory fake.

    Every service call builds a client through supabase_service.get_client(),
    so patching create_client covers them all.
    """
    db = FakeSupabase()
    monkeypatch.setattr(supabase_service, "create_client", lambda url, key: db)
    return db


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def user(fake_db) -> Dict[str, Any]:
    """A regular registered user."""
    return user_service.create_user("Sam Reader", "reader@example.com", TEST_PASSWORD)


@pytest.fixture
def admin_user(fake_db) -> Dict[str, Any]:
    """A registered user with admin rights."""
    return user_service.create_user("Alex Admin", "admin@example.com", TEST_PASSWORD, is_admin=True)


@pytest.fixture
def sample_page(fake_db) -> Dict[str, Any]:
    return cms_service.create_page(
        "about/team",
        "Our Team",
        "# The team\n\nWe build **things**.",
        is_published=True,
    )


@pytest.fixture
def sample_redirect(fake_db) -> Dict[str, Any]:
    return cms_service.create_redirect("docs", "https://docs.example.com/start", "Docs")


# ============================================================================
# FastAPI Test Client Fixtures
# ============================================================================

@pytest.fixture
def api_client(fake_db) -> Generator[TestClient, None, None]:
    """
    Provide FastAPI test client backed by the fake Supabase.

    Usage:
        def test_health(api_client):
            response = api_client.get("/health")
            assert response.status_code == 200
    """
    from cms.app import app

    with TestClient(app) as client:
        yield client


def _login(client: TestClient, email: str) -> TestClient:
    response = client.post(
        "/account/login",
        data={"email": email, "password": TEST_PASSWORD},
        follow_redirects=False,
    )
    assert response.status_code == 302, response.text
    return client


@pytest.fixture
def user_client(api_client, user) -> TestClient:
    """Test client logged in as a regular user."""
    return _login(api_client, user["email"])


@pytest.fixture
def admin_client(api_client, admin_user) -> TestClient:
    """Test client logged in as an admin."""
    return _login(api_client, admin_user["email"])


# ============================================================================
# Request Fixtures
# ============================================================================

@pytest.fixture
def make_request():
    """
    Build a bare Starlette request for view-model and request-dict tests.

    Usage:
        request = make_request(query_string=b"a=1", cookies={"name": "value"})
    """
    def _make(path: str = "/", query_string: bytes = b"", headers=None, cookies=None, path_params=None) -> Request:
        raw_headers = [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()]
        if cookies:
            cookie_header = "; ".join(f"{k}={v}" for k, v in cookies.items())
            raw_headers.append((b"cookie", cookie_header.encode("latin-1")))
        scope = {
            "type": "http",
            "method": "GET",
            "path": path,
            "query_string": query_string,
            "headers": raw_headers,
            "path_params": path_params or {},
        }
        return Request(scope)

    return _make

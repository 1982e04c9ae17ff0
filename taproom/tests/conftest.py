"""Shared pytest fixtures for unit and integration tests."""
import os

import httpx
import pytest

# Load .env from repo root when running tests locally (e.g. from taproom/ or repo root)
_repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
_env = os.path.join(_repo_root, ".env")
if os.path.isfile(_env):
    with open(_env) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                k, v = line.split("=", 1)
                os.environ.setdefault(k.strip(), v.strip().strip('"').strip("'"))


@pytest.fixture
def api_base_url():
    """Base URL for the running API (integration tests). Default: http://localhost:8000."""
    return os.environ.get("TEST_API_BASE_URL", "http://localhost:8000")


# --- Integration test fixtures (require stack + seed) ---


@pytest.fixture
async def http_client(api_base_url):
    """Async HTTP client for integration tests."""
    async with httpx.AsyncClient(base_url=api_base_url, timeout=30.0) as client:
        try:
            await client.get("/health")
        except httpx.ConnectError as exc:
            pytest.skip(f"API not reachable at {api_base_url}: {exc}")
        yield client


import httpx
import pytest
from httpx import ASGITransport

PRICE_API_BASE = "https://prices.test/api"


@pytest.fixture
def mock_env(monkeypatch):
    monkeypatch.setenv("PRICE_API_BASE_URL", PRICE_API_BASE)
    monkeypatch.setenv("PRICE_API_TOKEN", "")
    monkeypatch.setenv("LABEL_LOCALE", "en")


@pytest.fixture
async def client(mock_env):
    from app.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c

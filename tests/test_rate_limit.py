import pytest

from focusforest.main import app
from focusforest.middleware import rate_limit


@pytest.mark.asyncio
async def test_rate_limit_exceeded(client, monkeypatch):
    monkeypatch.setattr(rate_limit.settings, "RATE_LIMIT_PER_MINUTE", 2)

    assert (await client.get("/categories")).status_code == 200
    assert (await client.get("/categories")).status_code == 200
    response = await client.get("/categories")
    assert response.status_code == 429
    assert "Rate limit" in response.json()["detail"]


@pytest.mark.asyncio
async def test_health_skips_rate_limit(client, monkeypatch):
    monkeypatch.setattr(rate_limit.settings, "RATE_LIMIT_PER_MINUTE", 1)

    for _ in range(3):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_rate_limit_allows_requests_when_redis_fails(client, monkeypatch):
    class BrokenRedis:
        def pipeline(self):
            raise ConnectionError("redis down")

    monkeypatch.setattr(rate_limit.settings, "RATE_LIMIT_PER_MINUTE", 1)
    app.state.redis = BrokenRedis()

    for _ in range(3):
        assert (await client.get("/categories")).status_code == 200

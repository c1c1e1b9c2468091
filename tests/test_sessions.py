import uuid
from datetime import datetime, timedelta, timezone

import pytest


def _payload(days_ago: int = 0, minutes: float = 25, category: str = "coding", **extra) -> dict:
    when = datetime.now(timezone.utc) - timedelta(days=days_ago)
    return {
        "date": when.isoformat(),
        "duration_minutes": minutes,
        "category": category,
        "coins_earned": minutes,
        **extra,
    }


@pytest.mark.asyncio
async def test_create_session(client):
    response = await client.post("/sessions", json=_payload())
    assert response.status_code == 201
    data = response.json()
    assert data["duration_minutes"] == 25
    assert data["category"] == "coding"
    assert data["coins_earned"] == 25
    uuid.UUID(data["id"])


@pytest.mark.asyncio
async def test_create_session_keeps_client_id(client):
    session_id = str(uuid.uuid4())
    response = await client.post("/sessions", json=_payload(id=session_id))
    assert response.status_code == 201
    assert response.json()["id"] == session_id

    fetched = await client.get(f"/sessions/{session_id}")
    assert fetched.status_code == 200
    assert fetched.json()["id"] == session_id


@pytest.mark.asyncio
async def test_create_session_duplicate_id(client):
    session_id = str(uuid.uuid4())
    await client.post("/sessions", json=_payload(id=session_id))
    response = await client.post("/sessions", json=_payload(id=session_id))
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_create_session_defaults_to_untagged(client):
    payload = _payload()
    del payload["category"]
    response = await client.post("/sessions", json=payload)
    assert response.status_code == 201
    assert response.json()["category"] == "untagged"


@pytest.mark.asyncio
async def test_create_session_unknown_category(client):
    response = await client.post("/sessions", json=_payload(category="gardening"))
    assert response.status_code == 422
    assert "gardening" in response.json()["detail"]


@pytest.mark.asyncio
async def test_create_session_rejects_negative_values(client):
    response = await client.post("/sessions", json=_payload(minutes=-5))
    assert response.status_code == 422

    payload = _payload()
    payload["coins_earned"] = -1
    response = await client.post("/sessions", json=payload)
    assert response.status_code == 422


@pytest.mark.asyncio
@pytest.mark.parametrize("when", [
    "0001-01-01T00:00:00+00:00",
    "1969-12-31T23:59:59+00:00",
    "9999-12-31T12:00:00+00:00",
])
async def test_create_session_rejects_unsupported_dates(client, when):
    payload = _payload()
    payload["date"] = when
    response = await client.post("/sessions", json=payload)
    assert response.status_code == 422

    stats = await client.get("/stats/overview")
    assert stats.status_code == 200
    assert stats.json()["all_time"]["session_count"] == 0


@pytest.mark.asyncio
async def test_create_session_with_custom_category(client):
    created = await client.post(
        "/categories", json={"name": "Reading", "icon": "book.fill", "color": "teal"}
    )
    category_id = created.json()["id"]

    response = await client.post("/sessions", json=_payload(category=category_id))
    assert response.status_code == 201
    assert response.json()["category"] == category_id


@pytest.mark.asyncio
async def test_get_nonexistent_session(client):
    response = await client.get(f"/sessions/{uuid.uuid4()}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_sessions_newest_first(client):
    await client.post("/sessions", json=_payload(days_ago=3))
    await client.post("/sessions", json=_payload(days_ago=1))
    await client.post("/sessions", json=_payload(days_ago=2))

    response = await client.get("/sessions")
    assert response.status_code == 200
    dates = [datetime.fromisoformat(s["date"]) for s in response.json()]
    assert len(dates) == 3
    assert dates == sorted(dates, reverse=True)


@pytest.mark.asyncio
async def test_list_sessions_pagination(client):
    for i in range(5):
        await client.post("/sessions", json=_payload(days_ago=i))

    response = await client.get("/sessions?limit=2&offset=0")
    assert response.status_code == 200
    assert len(response.json()) == 2


@pytest.mark.asyncio
async def test_list_sessions_category_filter(client):
    await client.post("/sessions", json=_payload(category="coding"))
    await client.post("/sessions", json=_payload(category="physics"))

    response = await client.get("/sessions?category=physics")
    assert response.status_code == 200
    assert [s["category"] for s in response.json()] == ["physics"]


@pytest.mark.asyncio
async def test_import_sessions_skips_duplicates(client):
    existing_id = str(uuid.uuid4())
    await client.post("/sessions", json=_payload(id=existing_id))

    new_id = str(uuid.uuid4())
    response = await client.post("/sessions/import", json={
        "sessions": [
            _payload(id=existing_id),
            _payload(id=new_id, days_ago=1),
            _payload(days_ago=2, category="misc"),
        ]
    })
    assert response.status_code == 201
    created = response.json()
    assert len(created) == 2
    assert new_id in [s["id"] for s in created]

    listed = await client.get("/sessions")
    assert len(listed.json()) == 3


@pytest.mark.asyncio
async def test_import_sessions_requires_sessions(client):
    response = await client.post("/sessions/import", json={"sessions": []})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_import_sessions_rejects_unsupported_dates(client):
    bad = _payload()
    bad["date"] = "0001-01-01T00:00:00+00:00"
    response = await client.post("/sessions/import", json={"sessions": [_payload(), bad]})
    assert response.status_code == 422

    listed = await client.get("/sessions")
    assert listed.json() == []


@pytest.mark.asyncio
async def test_reset_sessions(client):
    await client.post("/sessions", json=_payload())
    await client.post("/sessions", json=_payload(days_ago=1))
    await client.put("/legacy", json={"minutes": 300})

    response = await client.delete("/sessions")
    assert response.status_code == 204

    listed = await client.get("/sessions")
    assert listed.json() == []
    legacy = await client.get("/legacy")
    assert legacy.json()["minutes"] == 0

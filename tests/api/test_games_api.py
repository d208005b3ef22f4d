"""Tests for game progression endpoints"""
import pytest

from stumblelele import config


@pytest.mark.asyncio
async def test_missing_api_key(api_client, test_user_id):
    response = await api_client.get(f"/api/v1/users/{test_user_id}/games/progressions")

    assert response.status_code in (401, 403)


@pytest.mark.asyncio
async def test_invalid_api_key(api_client, test_user_id):
    response = await api_client.get(
        f"/api/v1/users/{test_user_id}/games/progressions",
        headers={"Authorization": "Bearer wrong_key"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_no_api_keys_configured(api_client, api_headers, monkeypatch, test_user_id):
    monkeypatch.setattr(config, "API_KEYS", [])

    response = await api_client.get(f"/api/v1/users/{test_user_id}/achievements", headers=api_headers)

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_record_game(api_client, api_headers, test_user_id):
    response = await api_client.post(
        f"/api/v1/users/{test_user_id}/games/math/records",
        json={"level": 1, "score": 150},
        headers=api_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == test_user_id
    assert data["record"]["score"] == 150
    assert data["record"]["game_type"] == "math"
    assert data["progression"]["games_played"] == 1
    assert data["leveled_up"] is False
    assert "first_game" in [a["achievement_id"] for a in data["achievements_unlocked"]]
    assert len(data["achievement_messages"]) == len(data["achievements_unlocked"])
    assert data["achievement_messages"][0].startswith("🎉 CONQUISTA DESBLOQUEADA! 🎉")
    assert "Primeira Jogada" in data["achievement_messages"][0]
    assert len(data["progress"]) == 4
    assert data["message"]
    assert data["recommendation"]["suggested"] == 1


@pytest.mark.asyncio
async def test_record_game_unknown_game(api_client, api_headers, test_user_id):
    response = await api_client.post(
        f"/api/v1/users/{test_user_id}/games/chess/records",
        json={"level": 1, "score": 150},
        headers=api_headers
    )

    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "UnknownGameTypeError"
    assert data["user_message"] == "Esse jogo não existe."


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [
    {"level": 1, "score": -5},
    {"level": 9, "score": 100},
])
async def test_record_game_out_of_range(api_client, api_headers, test_user_id, body):
    response = await api_client.post(
        f"/api/v1/users/{test_user_id}/games/memory/records",
        json=body,
        headers=api_headers
    )

    assert response.status_code == 422
    assert response.json()["error"] == "ValidationError"


@pytest.mark.asyncio
async def test_record_game_malformed_body(api_client, api_headers, test_user_id):
    response = await api_client.post(
        f"/api/v1/users/{test_user_id}/games/memory/records",
        json={"level": "high"},
        headers=api_headers
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_progressions(api_client, api_headers, test_user_id):
    for score in [150, 160, 170, 180, 190]:
        await api_client.post(
            f"/api/v1/users/{test_user_id}/games/math/records",
            json={"level": 1, "score": score},
            headers=api_headers
        )

    response = await api_client.get(f"/api/v1/users/{test_user_id}/games/progressions", headers=api_headers)

    assert response.status_code == 200
    progressions = response.json()["progressions"]
    assert set(progressions) == {"memory", "words", "math", "emotions"}
    assert progressions["math"]["total_score"] == 850
    assert progressions["math"]["best_streak"] == 5
    assert progressions["words"]["games_played"] == 0


@pytest.mark.asyncio
async def test_get_progression_report(api_client, api_headers, test_user_id):
    response = await api_client.get(f"/api/v1/users/{test_user_id}/games/words/progression", headers=api_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["progression"]["current_level"] == 1
    assert data["progression"]["next_level_requirements"]["level"] == 2
    assert data["is_max_level"] is False
    assert data["message"].startswith("Cada jogo é uma oportunidade")


@pytest.mark.asyncio
async def test_get_progression_unknown_game(api_client, api_headers, test_user_id):
    response = await api_client.get(f"/api/v1/users/{test_user_id}/games/chess/progression", headers=api_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_get_achievements(api_client, api_headers, test_user_id):
    await api_client.post(
        f"/api/v1/users/{test_user_id}/games/memory/records",
        json={"level": 1, "score": 100},
        headers=api_headers
    )

    response = await api_client.get(f"/api/v1/users/{test_user_id}/achievements", headers=api_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total_unlocked"] == 1
    assert data["total_achievements"] == 10
    assert data["unlocked"][0]["achievement_id"] == "first_game"
    assert len(data["locked"]) == 9


@pytest.mark.asyncio
async def test_health_check(api_client):
    response = await api_client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["store"] == "memory"


@pytest.mark.asyncio
async def test_any_configured_key_is_accepted(api_client, monkeypatch, test_api_key, test_user_id):
    monkeypatch.setattr(config, "API_KEYS", [test_api_key, "tablet_key"])

    response = await api_client.get(
        f"/api/v1/users/{test_user_id}/achievements",
        headers={"Authorization": "Bearer tablet_key"}
    )

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_cors_preflight_for_configured_origin(api_client):
    origin = config.CORS_ORIGINS[0]

    response = await api_client.options(
        "/api/health",
        headers={"Origin": origin, "Access-Control-Request-Method": "GET"}
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == origin


@pytest.mark.asyncio
async def test_cors_preflight_rejects_unknown_origin(api_client):
    response = await api_client.options(
        "/api/health",
        headers={"Origin": "http://evil.example", "Access-Control-Request-Method": "GET"}
    )

    assert response.status_code == 400
    assert "access-control-allow-origin" not in response.headers

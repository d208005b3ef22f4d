"""Global test fixtures and utilities for stumblelele tests"""
import pytest
import pytest_asyncio
import httpx

from stumblelele.gamification.mock_store import InMemoryGameStore
from stumblelele.models.game import GameRecord
from stumblelele.services.game_progress_service import GameProgressService


# ============================================================================
# History Helpers
# ============================================================================

def make_history(game_type: str, scores, level: int = 1) -> list[GameRecord]:
    """Build a chronological history with one record per score"""
    return [
        GameRecord(id=i, user_id="test", game_type=game_type, level=level, score=score)
        for i, score in enumerate(scores, start=1)
    ]


@pytest.fixture
def history_factory():
    """Factory for game histories"""
    return make_history


# ============================================================================
# Store & Service Fixtures
# ============================================================================

@pytest.fixture
def test_user_id():
    """Standard test user ID"""
    return "helena"


@pytest.fixture
def game_store():
    """Fresh in-memory game store"""
    return InMemoryGameStore()


@pytest.fixture
def game_progress_service(game_store):
    """GameProgressService over the in-memory store"""
    return GameProgressService(game_store)


# ============================================================================
# API Fixtures
# ============================================================================

@pytest.fixture
def test_api_key():
    """Standard test API key"""
    return "test_api_key_12345"


@pytest.fixture
def api_headers(test_api_key):
    return {"Authorization": f"Bearer {test_api_key}"}


@pytest.fixture
def api_app(monkeypatch, test_api_key, game_store):
    """API application backed by the in-memory store, rate limiting off"""
    from stumblelele import config
    from stumblelele.api.middleware import limiter
    from stumblelele.api.server import create_api_application

    monkeypatch.setattr(config, "API_KEYS", [test_api_key])
    monkeypatch.setattr(limiter, "enabled", False)
    return create_api_application(store=game_store)


@pytest_asyncio.fixture
async def api_client(api_app):
    """HTTP client talking to the app in-process"""
    transport = httpx.ASGITransport(app=api_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client

import pytest
from fastapi.testclient import TestClient

import log_client
from app.config import Settings, get_settings
from app.main import app


@pytest.fixture
def make_client():
    def _make(**overrides):
        settings = Settings(**{"secret_word": "Banana", **overrides})
        app.dependency_overrides[get_settings] = lambda: settings
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def forwarded(monkeypatch):
    """Record relay calls instead of sending them."""
    calls = []

    async def _fake_forward(endpoint, payload, token=None, timeout=None):
        calls.append({"endpoint": endpoint, "payload": payload, "token": token, "timeout": timeout})
        return log_client.ForwardResult(ok=True, status_code=200)

    monkeypatch.setattr(log_client, "forward_notification", _fake_forward)
    return calls

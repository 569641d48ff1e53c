"""
Shared fixtures: settings without a .env file and a fake Gemini API.
"""
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from gemini_relay.api.endpoints.chat import get_chat_controller
from gemini_relay.config.settings import Settings, get_settings
from gemini_relay.controllers.chat_controller import ChatController
from gemini_relay.services.relay import RecordingObserver

from fakes import TEST_API_KEY, FakeGemini


@pytest.fixture
def fake_gemini() -> FakeGemini:
    return FakeGemini()


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    def _make(**overrides) -> Settings:
        values = {
            "gemini_api_key": TEST_API_KEY,
            "gemini_model": "gemini-2.0-flash",
            "enable_request_logging": False,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def make_client(make_settings, fake_gemini, observer) -> Callable[..., TestClient]:
    """TestClient whose chat controller talks to the fake Gemini."""
    from main import create_app

    def _make(**overrides) -> TestClient:
        settings = make_settings(**overrides)
        app = create_app(settings)
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_chat_controller] = lambda: ChatController(
            settings=settings, transport=fake_gemini.transport, observer=observer
        )
        return TestClient(app)

    return _make

"""
Pytest configuration for Event Relay tests.
"""
import os

import pytest
from fastapi.testclient import TestClient
from sse_starlette import sse

# Set test environment variables before the app is imported
os.environ["DEBUG"] = "true"
os.environ["EVENT_PAYLOAD"] = "percentage"
os.environ["TOPIC_CAPACITY"] = "800"

from event_relay.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def reset_sse_app_status():
    """sse-starlette keeps shutdown state on a class; reset it for every test loop."""
    app_status = getattr(sse, "AppStatus", None)
    if app_status is not None:
        app_status.should_exit = False
        if hasattr(app_status, "should_exit_event"):
            app_status.should_exit_event = None
    yield


@pytest.fixture
def client():
    """Test client with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def relay(client):
    """The EventRelay owned by the running test application."""
    return client.app.state.relay

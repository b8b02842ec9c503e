"""Pytest configuration and shared fixtures for api-sdk-creator tests."""

import pytest

from api_sdk_creator import HttpRequest, HttpRequestMethod


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents test pollution when testing configuration resolution.
    """
    import os

    test_prefixes = ("TEST_", "API_", "CLIENT_", "SDK_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def get_request():
    """A GET request with no headers and no body."""
    return HttpRequest(HttpRequestMethod.GET, "https://ifconfig.co/json")


@pytest.fixture
def ip_json():
    return '{"ip":"1.2.3.4","country":"AU"}'

"""
Unit Test Firewall - blocks real provider calls for unit tests.

This conftest.py applies to all tests in projectos/tests/unit/.
`requests.post` is patched at the source library level; tests that need a
specific provider answer override it with their own monkeypatch.
"""

from unittest.mock import MagicMock

import pytest


@pytest.fixture(autouse=True)
def mock_requests_firewall(monkeypatch):
    """Fail loudly if a unit test reaches the network without configuring a response."""
    def mock_requests_post(url, timeout=None, **kwargs):
        raise AssertionError(f"Unexpected network call to {url}")

    monkeypatch.setattr("requests.post", mock_requests_post)
    yield mock_requests_post


@pytest.fixture
def mock_llm_client(monkeypatch):
    """Patch llm_client.chat_completion at the source.

    Tests configure the reply with return_value or side_effect.
    """
    mock_chat = MagicMock(return_value="Mock assistant reply")
    monkeypatch.setattr("projectos.shared.llm_client.chat_completion", mock_chat)
    return mock_chat

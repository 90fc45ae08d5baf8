"""
Pytest configuration and shared fixtures for ProjectOS tests.
"""

import json
from pathlib import Path
from typing import Callable, List, Optional
from unittest.mock import MagicMock, Mock

import pytest

from projectos.orchestrator.gateway import AssistantGateway
from projectos.orchestrator.state import GatewayResult
from projectos.project.store import ProjectStore
from projectos.project.types import FailureKind
from projectos.shared.config import AssistantSettings

ROOF_DOCUMENT = "---\ntitle: Roof Project\nstatus: not_started\n---\n# Desc"

SOLAR_COMMAND = {
    "action": "create",
    "filename": "solar-project.md",
    "content": "---\ntitle: Solar Project\nstatus: not_started\nstartDate: 2026-02-01\nendDate: 2026-05-01\n---\n# Description\nTo be completed",
}

SOLAR_REPLY = "Sure, here is the project:\n```json\n" + json.dumps(SOLAR_COMMAND, indent=2) + "\n```"


@pytest.fixture(autouse=True)
def isolated_singletons(monkeypatch, tmp_path: Path):
    """Keep the process-wide store and assistant service away from the real project directory."""
    monkeypatch.setattr("projectos.project.store._project_store", None)
    monkeypatch.setattr("projectos.orchestrator.service._assistant_service", None)
    monkeypatch.setattr("projectos.project.store.get_projects_dir", lambda: tmp_path / "default-projects")


@pytest.fixture
def projects_dir(tmp_path: Path) -> Path:
    """Root directory for a test store; not created until the store first uses it."""
    return tmp_path / "projects"


@pytest.fixture
def store(projects_dir: Path) -> ProjectStore:
    return ProjectStore(projects_dir)


@pytest.fixture
def assistant_settings() -> AssistantSettings:
    return AssistantSettings(
        base_url="http://mock-llm:9000/v1",
        model="test-model",
        api_key="sk-test",
        timeout_seconds=5,
    )


@pytest.fixture
def completion_response() -> Callable[..., Mock]:
    """Factory for a requests response carrying an OpenAI-style completion."""
    def _make(content: Optional[str] = "ok", status_code: int = 200, json_data=None) -> Mock:
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = json_data if json_data is not None else {
            "choices": [{"message": {"role": "assistant", "content": content}}]
        }
        response.raise_for_status = Mock()
        return response
    return _make


class StubGateway(AssistantGateway):
    """Gateway returning canned results and recording the turns it was given."""

    def __init__(self, results: List[GatewayResult]) -> None:
        super().__init__(
            AssistantSettings(base_url="http://stub/v1", model="stub"),
            preamble="stub preamble {today}",
        )
        self.results = list(results)
        self.calls: List[list] = []

    def converse(self, turns, timeout=None, cancel_event=None) -> GatewayResult:
        self.calls.append(list(turns))
        return self.results.pop(0)


@pytest.fixture
def stub_gateway() -> Callable[..., StubGateway]:
    """Factory: stub_gateway("reply text") or stub_gateway(failure=FailureKind.TIMEOUT)."""
    def _make(content: Optional[str] = None, failure: Optional[FailureKind] = None, error: str = "boom") -> StubGateway:
        if failure is not None:
            return StubGateway([GatewayResult.failure(failure, error)])
        return StubGateway([GatewayResult(success=True, content=content)])
    return _make

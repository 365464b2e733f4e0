"""
Pytest configuration and fixtures.
"""

import json
import os
from typing import Any, Callable, Dict, List

import httpx
import pytest


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Run every test in a fresh project directory with a fresh home."""
    project = tmp_path / "project"
    home = tmp_path / "home"
    project.mkdir()
    home.mkdir()

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(project)
    # Registered first so keys promoted or loaded during the test are removed afterwards
    for name in ("GOOGLE_GENERATIVE_AI_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    for name in list(os.environ):
        if name.startswith("RECTOSPEC__"):
            monkeypatch.delenv(name, raising=False)

    return project


@pytest.fixture
def project_dir(isolated_environment):
    """The working directory of the current test."""
    return isolated_environment


@pytest.fixture
def store(tmp_path):
    """Provide a config store rooted in the test directories."""
    from rectospec.config import ConfigStore

    return ConfigStore(
        local_dir=tmp_path / "project" / ".rectospec",
        global_dir=tmp_path / "home" / ".rectospec",
    )


@pytest.fixture
def sample_recording() -> Dict[str, Any]:
    """A Chrome Recorder export covering the common step types."""
    return {
        "title": "Login flow",
        "steps": [
            {"type": "setViewport", "width": 1280, "height": 720, "deviceScaleFactor": 1,
             "isMobile": False, "hasTouch": False, "isLandscape": False},
            {"type": "navigate", "url": "https://example.com/login",
             "assertedEvents": [{"type": "navigation", "url": "https://example.com/login", "title": "Login"}]},
            {"type": "click", "selectors": [["aria/Email", "#email"], ["xpath///input[1]"]],
             "offsetX": 10, "offsetY": 5},
            {"type": "change", "value": "test@example.com", "selectors": [["#email"]]},
            {"type": "keyDown", "key": "Enter"},
            {"type": "keyUp", "key": "Enter"},
            {"type": "hover", "selectors": [["#menu"]]},
            {"type": "click", "selectors": [["#submit"]]},
        ],
    }


@pytest.fixture
def recording_file(project_dir, sample_recording):
    """The sample recording written to disk."""
    path = project_dir / "login.json"
    path.write_text(json.dumps(sample_recording), encoding="utf-8")
    return path


# =============================================================================
# HTTP helpers
# =============================================================================

def build_gemini_body(text: str) -> Dict[str, Any]:
    """A minimal generateContent response."""
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": text}]}, "finishReason": "STOP"}
        ],
        "usageMetadata": {"promptTokenCount": 12, "candidatesTokenCount": 34, "totalTokenCount": 46},
        "modelVersion": "gemini-2.0-flash-lite",
    }


def build_anthropic_body(content: List[Dict[str, Any]]) -> Dict[str, Any]:
    """A minimal Messages API response."""
    return {
        "id": "msg_test",
        "type": "message",
        "model": "claude-3-5-sonnet-latest",
        "content": content,
        "stop_reason": "end_turn",
        "usage": {"input_tokens": 20, "output_tokens": 10},
    }


class RecordingTransport:
    """
    Wraps an httpx.MockTransport and keeps every request it served.

    Usage:
        transport = RecordingTransport(lambda request: httpx.Response(200, json={...}))
        ... pass transport.mock to the gateway or provider ...
        assert transport.requests[0].url.path == "/v1/messages"
    """

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        self.mock = httpx.MockTransport(record)

    def json_bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Factory for recording mock transports."""
    return RecordingTransport


@pytest.fixture
def gemini_text_transport(make_transport):
    """Transport answering every Gemini call with a fenced Gherkin document."""
    def factory(text: str = "```gherkin\nFeature: Login\n  Scenario: Success\n```") -> RecordingTransport:
        return make_transport(lambda request: httpx.Response(200, json=build_gemini_body(text)))
    return factory


@pytest.fixture
def gemini_body() -> Callable[[str], Dict[str, Any]]:
    return build_gemini_body


@pytest.fixture
def anthropic_body() -> Callable[[List[Dict[str, Any]]], Dict[str, Any]]:
    return build_anthropic_body

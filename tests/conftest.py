"""Shared fixtures for Podpublisher tests."""

import json
import math
import struct
import wave
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from podpublisher.config.schema import PublisherConfig

CONTENT_URL = "https://example.com/posts/test"
HOSTING_ENDPOINT = "https://hosting.example.com/api/episodes"
MESSAGES_URL = "https://api.anthropic.com/v1/messages"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer credentials out of tests."""
    for var in (
        "CLAUDE_API_KEY",
        "ANTHROPIC_API_KEY",
        "HOSTING_API_ENDPOINT",
        "PODCAST_ID",
        "PODPUBLISHER_TIMEZONE",
        "PODPUBLISHER_MODEL",
        "PODPUBLISHER_OUTPUT_DIR",
        "PODPUBLISHER_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def config(tmp_path: Path) -> PublisherConfig:
    """Config pointing at fake services, writing into tmp_path."""
    return PublisherConfig(
        claude_api_key="sk-ant-test-" + "x" * 32,
        hosting_endpoint=HOSTING_ENDPOINT,
        podcast_id="pod-123",
        output_dir=tmp_path / "out",
    )


@pytest.fixture
def sample_html() -> str:
    """A small article page."""
    return """<!DOCTYPE html>
<html>
  <head><title>Ignored</title><script>var x = 1;</script></head>
  <body>
    <nav><a href="/">Home</a></nav>
    <h1>Test</h1>
    <p>This is the <strong>body</strong> text of the test page.</p>
    <ul><li>First point</li><li>Second point</li></ul>
    <footer>Copyright</footer>
  </body>
</html>"""


@pytest.fixture
def metadata_json() -> str:
    """A well-formed model answer."""
    return json.dumps(
        {
            "title": "Test",
            "description": "An episode about testing.",
            "keywords": ["testing", "podcasts"],
        }
    )


@pytest.fixture
def claude_message() -> Callable[[str], dict[str, Any]]:
    """Build a Messages API response body around some text."""

    def _build(text: str) -> dict[str, Any]:
        return {
            "id": "msg_test",
            "type": "message",
            "role": "assistant",
            "model": "claude-3-7-sonnet-20250219",
            "content": [{"type": "text", "text": text}],
            "stop_reason": "end_turn",
            "stop_sequence": None,
            "usage": {"input_tokens": 100, "output_tokens": 50},
        }

    return _build


@pytest.fixture
def make_wav(tmp_path: Path) -> Callable[..., Path]:
    """Write a mono 16-bit WAV of the given length."""

    def _make(name: str = "episode42.wav", seconds: float = 1.0, rate: int = 8000) -> Path:
        path = tmp_path / "recordings" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        frames = int(seconds * rate)
        with wave.open(str(path), "wb") as wav:
            wav.setnchannels(1)
            wav.setsampwidth(2)
            wav.setframerate(rate)
            tone = b"".join(
                struct.pack("<h", int(8000 * math.sin(2 * math.pi * 440 * i / rate)))
                for i in range(rate)
            )
            full, rest = divmod(frames, rate)
            wav.writeframes(tone * full + tone[: rest * 2])
        return path

    return _make

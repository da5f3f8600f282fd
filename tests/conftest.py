"""
Common fixtures for the image-to-prompt test suite.

Provides a tiny PNG, a complete scene mapping, fake Gemini responses and a
patched google.genai.Client so no test ever reaches the network.
"""

from __future__ import annotations

import base64
import json
from types import SimpleNamespace
from typing import Any, List, Optional

import pytest

import captioning_utils

PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)


# ---------------------------------------------------------------------------
# Image fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def png_bytes() -> bytes:
    """A valid 1x1 PNG."""
    return base64.b64decode(PNG_BASE64)


@pytest.fixture
def png_data_url() -> str:
    return f"data:image/png;base64,{PNG_BASE64}"


# ---------------------------------------------------------------------------
# Scene fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def full_scene() -> dict:
    """A scene mapping with every field filled, as the model would return it."""
    return {
        "subject": "A professional photographer with weathered hands and focused eyes",
        "setting": "in a sun-drenched studio filled with natural light",
        "action": "carefully adjusting camera settings",
        "style": "photorealistic with studio-quality lighting and sharp focus",
        "lighting": "soft, diffused natural light from large windows",
        "composition": "medium shot captured with an 85mm lens",
        "atmosphere": "professional and focused",
        "details": "fine texture details in skin and fabric",
    }


# ---------------------------------------------------------------------------
# Fake Gemini client
# ---------------------------------------------------------------------------


def text_response(text: Optional[str]) -> SimpleNamespace:
    return SimpleNamespace(text=text)


def image_response(*parts: Any) -> SimpleNamespace:
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))])


def inline_part(data: Any, mime_type: str = "image/png") -> SimpleNamespace:
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), text=None)


def text_part(text: str) -> SimpleNamespace:
    return SimpleNamespace(inline_data=None, text=text)


class FakeGenAI:
    """Stands in for google.genai.Client and records every call."""

    def __init__(self) -> None:
        self.response: Any = None
        self.error: Optional[BaseException] = None
        self.api_keys: List[str] = []
        self.calls: List[dict] = []

    def client(self, api_key: str = "", **kwargs: Any) -> SimpleNamespace:
        self.api_keys.append(api_key)
        return SimpleNamespace(models=SimpleNamespace(generate_content=self._generate_content))

    def _generate_content(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response

    def returns_scene(self, scene: dict) -> None:
        self.response = text_response(json.dumps(scene))

    def returns_text(self, text: Optional[str]) -> None:
        self.response = text_response(text)

    def returns_parts(self, *parts: Any) -> None:
        self.response = image_response(*parts)

    inline_part = staticmethod(inline_part)
    text_part = staticmethod(text_part)


@pytest.fixture
def fake_genai(monkeypatch: pytest.MonkeyPatch) -> FakeGenAI:
    fake = FakeGenAI()
    monkeypatch.setattr(captioning_utils.genai, "Client", fake.client)
    return fake

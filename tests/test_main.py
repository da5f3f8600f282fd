"""
Tests for main.py: the FastAPI page and JSON endpoints, end to end down to a
fake google.genai client.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import main
from prompts_lib import artistic_styles

MB = 1024 * 1024


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_AI_STUDIO_API", raising=False)
    return TestClient(main.app)


def _upload(png_bytes: bytes, *, filename: str = "photo.png", content_type: str = "image/png"):
    return {"image": (filename, png_bytes, content_type)}


class TestIndex:
    def test_renders_controls(self, client):
        response = client.get("/")
        assert response.status_code == 200
        for style in artistic_styles:
            assert style in response.text
        assert 'id="creativity"' in response.text
        assert "Negative Prompt" in response.text

    def test_serves_static_assets(self, client):
        assert client.get("/static/app.js").status_code == 200


class TestAnalyze:
    def test_returns_narrative_prompt(self, client, fake_genai, png_bytes, full_scene):
        fake_genai.returns_scene(dict(full_scene, atmosphere=" "))

        response = client.post(
            "/analyze",
            files=_upload(png_bytes),
            data={"style": "Watercolor", "creativity": "0.4", "negative_prompt": "text", "api_key": "key-1"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["prompt"].startswith("A professional photographer with weathered hands and focused eyes carefully adjusting")
        assert "soft and dreamy" in body["prompt"]
        assert body["warning"] is None
        assert fake_genai.api_keys == ["key-1"]
        assert fake_genai.calls[0]["config"].temperature == 0.4

    def test_missing_key(self, client, fake_genai, png_bytes):
        response = client.post("/analyze", files=_upload(png_bytes), data={"style": "Anime"})
        assert response.status_code == 400
        assert response.json()["detail"] == main.MISSING_KEY_MESSAGE
        assert fake_genai.calls == []

    def test_falls_back_to_server_key(self, client, fake_genai, png_bytes, full_scene, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", '"server-key"')
        fake_genai.returns_scene(full_scene)

        response = client.post("/analyze", files=_upload(png_bytes))

        assert response.status_code == 200
        assert fake_genai.api_keys == ["server-key"]

    def test_rejects_oversized_upload_before_any_call(self, client, fake_genai):
        payload = b"\0" * (11 * MB)
        response = client.post("/analyze", files=_upload(payload), data={"api_key": "key"})

        assert response.status_code == 413
        assert "11.0MB" in response.json()["detail"]
        assert fake_genai.api_keys == []

    def test_rejects_unsupported_type(self, client, fake_genai, png_bytes):
        response = client.post(
            "/analyze",
            files=_upload(png_bytes, filename="anim.gif", content_type="image/gif"),
            data={"api_key": "key"},
        )
        assert response.status_code == 400
        assert "PNG, JPG, or WEBP" in response.json()["detail"]

    def test_large_upload_warning(self, client, fake_genai, full_scene):
        fake_genai.returns_scene(full_scene)
        payload = b"\0" * (5 * MB)

        response = client.post("/analyze", files=_upload(payload, content_type="image/jpeg"), data={"api_key": "key"})

        assert response.status_code == 200
        assert "Large file detected (5.0MB)" in response.json()["warning"]

    @pytest.mark.parametrize("data", [{"style": "Pixel Art"}, {"creativity": "1.5"}, {"creativity": "-0.1"}])
    def test_rejects_bad_settings(self, client, fake_genai, png_bytes, data):
        response = client.post("/analyze", files=_upload(png_bytes), data={"api_key": "key", **data})
        assert response.status_code == 400
        assert fake_genai.calls == []

    def test_rate_limit_is_reported(self, client, fake_genai, png_bytes):
        fake_genai.error = RuntimeError("429 RESOURCE_EXHAUSTED")

        response = client.post("/analyze", files=_upload(png_bytes), data={"api_key": "key"})

        assert response.status_code == 429
        assert response.json()["detail"] == (
            "Failed to analyze image: API rate limit exceeded. Please wait a moment and try again."
        )

    def test_malformed_output_is_reported(self, client, fake_genai, png_bytes):
        fake_genai.returns_text("definitely not json")

        response = client.post("/analyze", files=_upload(png_bytes), data={"api_key": "key"})

        assert response.status_code == 502
        assert "invalid response format" in response.json()["detail"]


class TestGenerate:
    def test_returns_image_url(self, client, fake_genai):
        fake_genai.returns_parts(fake_genai.inline_part(b"png"))

        response = client.post("/generate", data={"prompt": "  a red fox  ", "api_key": "key"})

        assert response.status_code == 200
        assert response.json()["image_url"] == "data:image/png;base64,cG5n"
        assert fake_genai.calls[0]["contents"] == ["a red fox"]

    def test_empty_prompt(self, client, fake_genai):
        response = client.post("/generate", data={"prompt": "   ", "api_key": "key"})
        assert response.status_code == 400
        assert fake_genai.calls == []

    def test_missing_key(self, client, fake_genai):
        response = client.post("/generate", data={"prompt": "a red fox"})
        assert response.status_code == 400
        assert response.json()["detail"] == main.MISSING_KEY_MESSAGE
        assert fake_genai.api_keys == []

    def test_no_image_returned(self, client, fake_genai):
        fake_genai.returns_parts(fake_genai.text_part("no can do"))

        response = client.post("/generate", data={"prompt": "a red fox", "api_key": "key"})

        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to generate image: The model did not return any images."

    def test_content_policy(self, client, fake_genai):
        fake_genai.error = RuntimeError("Request blocked: SAFETY")

        response = client.post("/generate", data={"prompt": "a red fox", "api_key": "key"})

        assert response.status_code == 422
        assert "blocked by content policy" in response.json()["detail"]

from __future__ import annotations

import base64
import json
import logging
from typing import Any, Dict, Optional

from google import genai
from google.genai import types

from config import settings
from errors import (
    ANALYSIS,
    GENERATION,
    EmptyImagePayloadError,
    EmptyModelOutputError,
    EmptyPromptError,
    MalformedModelOutputError,
    MissingCredentialError,
    NoImageReturnedError,
    classify_error,
)
from image_intake import parse_data_url
from prompt_builder import build_narrative_prompt
from prompts_lib import *
from schemas import GenerationConfig, SceneDescriptor

logger = logging.getLogger(__name__)


def _require_api_key(api_key: Optional[str]) -> str:
    cleaned = (api_key or "").strip()
    if not cleaned:
        raise MissingCredentialError()
    return cleaned


def _build_analysis_text(config: GenerationConfig) -> str:
    text = analysis_task_template.format(style=config.style)
    if config.exclusions:
        text += negative_prompt_clause.format(negative_prompt=config.exclusions)
    return text


def parse_scene_response(text: Optional[str]) -> Dict[str, Any]:
    """Decode the model's JSON text into a raw scene mapping."""
    cleaned = (text or "").strip()
    if not cleaned:
        raise EmptyModelOutputError()

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.error(f"Scene analysis returned non-JSON output: {cleaned[:200]}")
        raise MalformedModelOutputError() from exc

    if not isinstance(data, dict):
        logger.error(f"Scene analysis returned a {type(data).__name__} instead of an object.")
        raise MalformedModelOutputError()
    return data


def analyze_scene(
    image_data: str,
    config: GenerationConfig,
    api_key: Optional[str],
) -> Dict[str, Any]:
    """Ask the multimodal model to describe an image as a scene descriptor.

    Args:
        image_data: Embedded image reference (``data:image/...;base64,...``).
        config: Style, creativity and optional negative prompt.
        api_key: Gemini API key supplied by the caller.

    Returns:
        The raw field mapping returned by the model. Fields may be blank;
        prompt_builder fills them in.
    """
    api_key = _require_api_key(api_key)
    mime_type, image_bytes = parse_data_url(image_data)

    try:
        client = genai.Client(api_key=api_key)
        response = client.models.generate_content(
            model=settings.PROMPT_OPTIMIZER_MODEL,
            contents=[
                types.Part.from_bytes(
                    data=image_bytes,
                    mime_type=mime_type,
                ),
                _build_analysis_text(config),
            ],
            config=types.GenerateContentConfig(
                system_instruction=optimizer_system_instruction,
                temperature=config.creativity,
                top_p=settings.TOP_P,
                response_mime_type="application/json",
                response_schema=SceneDescriptor,
            ),
        )
    except Exception as exc:
        logger.error(f"Error analyzing image: {exc}", exc_info=True)
        raise classify_error(exc, ANALYSIS) from exc

    return parse_scene_response(getattr(response, "text", None))


def generate_prompt_from_image(
    image_data: str,
    config: GenerationConfig,
    api_key: Optional[str],
) -> str:
    scene = analyze_scene(image_data, config, api_key)
    prompt = build_narrative_prompt(scene, config.style)
    logger.info(f"Built narrative prompt ({len(prompt)} chars) for style '{config.style}'.")
    return prompt


def _response_parts(response: Any) -> list:
    candidates = getattr(response, "candidates", None) or []
    if candidates:
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None)
        if parts:
            return list(parts)
    return list(getattr(response, "parts", None) or [])


def extract_image_data_url(response: Any) -> str:
    image_parts = [part for part in _response_parts(response) if getattr(part, "inline_data", None)]
    if not image_parts:
        raise NoImageReturnedError()

    data = image_parts[0].inline_data.data
    if not data:
        raise EmptyImagePayloadError()

    if isinstance(data, str):
        # Already base64 text
        encoded = data
    else:
        encoded = base64.b64encode(data).decode("utf-8")
    return f"data:image/png;base64,{encoded}"


def generate_image(prompt: str, api_key: Optional[str]) -> str:
    """Render a narrative prompt with the image model.

    Returns a ``data:image/png;base64,...`` reference ready for an <img> tag.
    """
    api_key = _require_api_key(api_key)
    if not prompt or not prompt.strip():
        raise EmptyPromptError()

    try:
        client = genai.Client(api_key=api_key)
        response = client.models.generate_content(
            model=settings.IMAGE_GENERATION_MODEL,
            contents=[prompt],
            config=types.GenerateContentConfig(
                response_modalities=["IMAGE", "TEXT"],
            ),
        )
    except Exception as exc:
        logger.error(f"Error generating image: {exc}", exc_info=True)
        raise classify_error(exc, GENERATION) from exc

    image_url = extract_image_data_url(response)
    logger.info("Image generation succeeded.")
    return image_url

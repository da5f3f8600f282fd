from __future__ import annotations

import logging
import os
from typing import Optional

import uvicorn
from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from captioning_utils import generate_image, generate_prompt_from_image
from config import BASE_DIR, clean_env_value, settings
from errors import ImageAssistantError
from image_intake import (
    ALLOWED_IMAGE_TYPES,
    MAX_IMAGE_BYTES,
    resolve_mime_type,
    to_data_url,
    validate_image,
)
from prompts_lib import artistic_styles
from schemas import GenerationConfig

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)

TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

MISSING_KEY_MESSAGE = "Please enter your API key in the Advanced Settings."


def _resolve_api_key(form_value: Optional[str]) -> str:
    """Use the key typed into the page, else the server's own key."""
    submitted = clean_env_value(form_value or "")
    if submitted:
        return submitted
    env_key = os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_AI_STUDIO_API") or ""
    return clean_env_value(env_key)


def _http_error(exc: ImageAssistantError, prefix: str) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=f"{prefix}{exc.user_message}")


app = FastAPI(title="Image to Prompt")
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@app.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "styles": artistic_styles,
            "selected_style": artistic_styles[0],
            "creativity": settings.DEFAULT_CREATIVITY,
            "allowed_types": ", ".join(ALLOWED_IMAGE_TYPES),
            "max_size_mb": MAX_IMAGE_BYTES // (1024 * 1024),
        },
    )


@app.post("/analyze")
async def analyze_image(
    image: UploadFile = File(...),
    style: str = Form(artistic_styles[0]),
    creativity: float = Form(settings.DEFAULT_CREATIVITY),
    negative_prompt: str = Form(""),
    api_key: str = Form(""),
) -> JSONResponse:
    if not image or not image.filename:
        raise HTTPException(status_code=400, detail="Image is required.")

    try:
        config = GenerationConfig(style=style, creativity=creativity, negative_prompt=negative_prompt)
    except ValidationError as exc:
        message = exc.errors()[0].get("msg", "Invalid generation settings.")
        raise HTTPException(status_code=400, detail=message) from exc

    payload = await image.read()
    mime_type = resolve_mime_type(image.content_type, image.filename)
    try:
        warning = validate_image(mime_type, len(payload))
    except ImageAssistantError as exc:
        logger.info(f"Rejected upload '{image.filename}': {exc}")
        raise HTTPException(status_code=exc.status_code, detail=exc.user_message) from exc

    resolved_key = _resolve_api_key(api_key)
    if not resolved_key:
        raise HTTPException(status_code=400, detail=MISSING_KEY_MESSAGE)

    try:
        prompt = generate_prompt_from_image(to_data_url(payload, mime_type), config, resolved_key)
    except ImageAssistantError as exc:
        raise _http_error(exc, "Failed to analyze image: ") from exc

    return JSONResponse({"prompt": prompt, "warning": warning})


@app.post("/generate")
async def generate_image_from_prompt(
    prompt: str = Form(""),
    api_key: str = Form(""),
) -> JSONResponse:
    cleaned_prompt = (prompt or "").strip()
    if not cleaned_prompt:
        raise HTTPException(status_code=400, detail="Prompt is required.")

    resolved_key = _resolve_api_key(api_key)
    if not resolved_key:
        raise HTTPException(status_code=400, detail=MISSING_KEY_MESSAGE)

    try:
        image_url = generate_image(cleaned_prompt, resolved_key)
    except ImageAssistantError as exc:
        raise _http_error(exc, "Failed to generate image: ") from exc

    return JSONResponse({"image_url": image_url})


if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting Uvicorn server on http://0.0.0.0:{port}")
    uvicorn.run("main:app", host="0.0.0.0", port=port)

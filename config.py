from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

BASE_DIR = Path(__file__).parent
ENV_PATH = BASE_DIR / ".env"

load_dotenv(ENV_PATH)


class AppConfig(BaseModel):
    PROMPT_OPTIMIZER_MODEL: str = "gemini-2.5-flash"
    IMAGE_GENERATION_MODEL: str = "gemini-2.5-flash-image"
    TOP_P: float = 0.95
    DEFAULT_CREATIVITY: float = Field(default=0.8, ge=0.0, le=1.0)
    LOG_LEVEL: str = "INFO"


def clean_env_value(value: str) -> str:
    cleaned = value.strip()
    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in {"'", '"'}:
        return cleaned[1:-1]
    return cleaned


def load_config() -> AppConfig:
    values = {}
    for name in AppConfig.model_fields:
        raw = os.environ.get(name)
        if raw is None:
            continue
        cleaned = clean_env_value(raw)
        if cleaned:
            values[name] = cleaned
    return AppConfig(**values)


settings = load_config()

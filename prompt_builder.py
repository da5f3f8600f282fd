from __future__ import annotations

from typing import Any, Mapping

from prompts_lib import (
    atmosphere_defaults,
    generic_atmosphere_default,
    generic_field_defaults,
    generic_lighting_default,
    lighting_defaults,
    narrative_template,
)
from schemas import SCENE_FIELDS, SceneDescriptor


def lighting_default(style: str) -> str:
    return lighting_defaults.get(style, generic_lighting_default)


def atmosphere_default(style: str) -> str:
    return atmosphere_defaults.get(style, generic_atmosphere_default)


def _field_defaults(style: str) -> dict[str, str]:
    return {
        **generic_field_defaults,
        "style": style,
        "lighting": lighting_default(style),
        "atmosphere": atmosphere_default(style),
    }


def _clean_field(value: Any) -> str:
    # Missing, null, non-string and blank values all count as absent.
    if not isinstance(value, str):
        return ""
    return value.strip()


def complete_descriptor(raw: Mapping[str, Any], style: str) -> SceneDescriptor:
    """Fill every blank field of a model-produced scene with its default."""
    defaults = _field_defaults(style)
    values = {}
    for field in SCENE_FIELDS:
        values[field] = _clean_field(raw.get(field)) or defaults[field]
    return SceneDescriptor(**values)


def render_narrative(descriptor: SceneDescriptor) -> str:
    return narrative_template.format(**descriptor.model_dump())


def build_narrative_prompt(raw: Mapping[str, Any], style: str) -> str:
    return render_narrative(complete_descriptor(raw, style))

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from config import settings
from prompts_lib import artistic_styles


class SceneDescriptor(BaseModel):
    subject: str = Field(
        description="The main subject described narratively with rich detail, e.g., 'a weathered elderly craftsman with calloused hands and gentle eyes', 'a sleek modern building with glass facades reflecting the sky'."
    )
    setting: str = Field(
        description="The environment described as a complete scene with atmospheric details, e.g., 'in a sun-drenched workshop filled with the scent of wood shavings and golden dust motes dancing in the air', 'against a backdrop of towering mountains shrouded in morning mist'."
    )
    action: str = Field(
        description="What's happening in the scene described with movement and emotion, e.g., 'carefully examining a delicate piece with focused concentration', 'standing confidently with arms crossed, surveying the landscape'."
    )
    style: str = Field(
        description="The artistic approach with specific technical details, e.g., 'photorealistic with studio-quality lighting and sharp focus', 'impressionistic watercolor with soft, flowing brushstrokes and vibrant color bleeding'."
    )
    lighting: str = Field(
        description="Detailed lighting setup using photography terminology, e.g., 'soft, diffused natural light from a large window creating gentle shadows', 'dramatic three-point studio lighting with rim lighting to separate the subject from background'."
    )
    composition: str = Field(
        description="Camera angle and framing described with technical precision, e.g., 'medium shot captured with an 85mm lens creating natural perspective and shallow depth of field', 'wide-angle establishing shot from a low angle to emphasize grandeur'."
    )
    atmosphere: str = Field(
        description="The mood and feeling of the scene, e.g., 'serene and contemplative with a sense of timeless craftsmanship', 'dynamic and energetic with vibrant colors and movement'."
    )
    details: str = Field(
        description="Specific visual elements that enhance realism and quality, e.g., 'fine texture details in fabric and skin, subtle color variations, professional color grading', 'intricate architectural details, realistic material properties, high-resolution clarity'."
    )


SCENE_FIELDS = tuple(SceneDescriptor.model_fields)


class GenerationConfig(BaseModel):
    style: str = artistic_styles[0]
    creativity: float = Field(default=settings.DEFAULT_CREATIVITY, ge=0.0, le=1.0)
    negative_prompt: Optional[str] = None

    @field_validator("style")
    @classmethod
    def _known_style(cls, value: str) -> str:
        if value not in artistic_styles:
            raise ValueError(f"Unknown style '{value}'. Choose one of: {', '.join(artistic_styles)}.")
        return value

    @property
    def exclusions(self) -> str:
        return (self.negative_prompt or "").strip()

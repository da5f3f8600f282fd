artistic_styles = (
    "Photorealistic",
    "Digital Painting",
    "Watercolor",
    "Anime",
    "Cinematic",
)


optimizer_system_instruction = """You are an expert visual analyst and prompt engineer specifically for Gemini 2.5 Flash Image (nano-banana). Your task is to analyze an uploaded image and create optimized prompts that leverage nano-banana's unique strengths:

1. NARRATIVE DESCRIPTIONS: Describe scenes, don't just list keywords. Use descriptive paragraphs that tell a story.
2. PHOTOREALISTIC EXCELLENCE: For realistic images, use photography terminology (camera angles, lens types, lighting setups, technical details).
3. HIGH-FIDELITY TEXT RENDERING: When text is involved, be explicit about font styles, placement, and integration.
4. DETAILED SCENE COMPOSITION: Include specific details about foreground, background, lighting conditions, and atmospheric elements.
5. STYLE CONSISTENCY: Ensure all elements work cohesively within the chosen artistic style.

Analyze the uploaded image thoroughly and populate the JSON schema with rich, descriptive content that will produce high-quality, coherent images when used with Gemini 2.5 Flash Image."""


analysis_task_template = """Analyze this image with the precision of a professional photographer and art director. Create a comprehensive scene description optimized for Gemini 2.5 Flash Image generation.

Focus on:
- NARRATIVE DESCRIPTION: Tell the story of what you see, don't just list elements
- PHOTOGRAPHIC DETAILS: Include camera angles, lighting setups, and technical specifications
- ATMOSPHERIC ELEMENTS: Describe the mood, feeling, and environmental conditions
- STYLE CONSISTENCY: Ensure all elements align with the "{style}" aesthetic
- COMPOSITIONAL ELEMENTS: Detail the framing, perspective, and visual hierarchy

Fill out all JSON schema fields with rich, descriptive content that will produce a high-quality, coherent image when used with Gemini 2.5 Flash Image. Each field should contain complete, descriptive sentences rather than keyword lists."""


negative_prompt_clause = """

IMPORTANT: Avoid including these concepts or elements in your description: "{negative_prompt}". Instead, focus on positive descriptions of what should be present."""


narrative_template = (
    "{subject} {action}, {setting}. {atmosphere}. "
    "The scene is rendered in {style} with {lighting}. {composition}. {details}."
)


lighting_defaults = {
    "Cinematic": "dramatic three-point lighting setup with strong key light, subtle fill light, and rim lighting for depth and separation",
    "Photorealistic": "natural, soft window light with gentle shadows, creating realistic skin tones and material textures",
    "Watercolor": "soft, diffused ambient lighting that enhances the translucent quality of watercolor pigments",
    "Anime": "vibrant, high-contrast cel-shaded lighting with clean shadow edges and bright highlights",
    "Digital Painting": "rich, painterly lighting with visible brush stroke textures and artistic color temperature variations",
}
generic_lighting_default = "balanced, professional lighting that enhances the subject and mood"


atmosphere_defaults = {
    "Cinematic": "dramatic and emotionally engaging with a sense of narrative tension and visual storytelling",
    "Photorealistic": "authentic and lifelike with natural, believable environmental conditions",
    "Watercolor": "soft and dreamy with an ethereal, flowing quality that evokes gentle emotions",
    "Anime": "vibrant and energetic with bold colors and dynamic visual impact",
    "Digital Painting": "artistic and expressive with rich textures and painterly aesthetic appeal",
}
generic_atmosphere_default = "harmonious and visually appealing with appropriate mood for the subject"


# Fields without a per-style default. "style" falls back to the chosen style name.
generic_field_defaults = {
    "subject": "A carefully composed scene with rich visual detail",
    "action": "captured in a moment of natural, engaging activity",
    "setting": "set in an atmospheric environment that complements the subject",
    "composition": "professionally framed with balanced composition and appropriate depth of field",
    "details": "rendered with high-fidelity detail, realistic textures, and professional color grading",
}

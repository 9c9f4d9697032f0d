"""
Shapes of the data flowing through the remix pipeline.

AnalysisResult and GenerationResult describe what the prompts ask the models
to return. They are advisory: the pipeline only checks that the model output
parses as JSON and passes whatever came back through untouched.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, TypedDict, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# Analysis stage (Gemini)
# ============================================================================

class ContentStructure(TypedDict, total=False):
    hook: str
    body_points: List[str]
    closing_cta: str


class AudienceInsights(TypedDict, total=False):
    pains: List[str]
    desires: List[str]
    false_beliefs: List[str]


class ContentIdea(TypedDict, total=False):
    id: str
    title: str
    short_description: str
    video_type: str  # review | story | tips | other


class AnalysisResult(TypedDict, total=False):
    summary: str
    structure: ContentStructure
    attraction_factors: List[str]
    tone_of_voice: str
    insights: AudienceInsights
    ideas: List[ContentIdea]


# ============================================================================
# Generation stage (OpenAI)
# ============================================================================

class ContentVariant(TypedDict, total=False):
    idea_id: str
    variant_index: int
    title: str
    script: str
    caption: str
    hashtags: List[str]


class PlatformContent(TypedDict, total=False):
    platform: str  # tiktok | youtube_shorts | facebook_reels
    items: List[ContentVariant]


class GenerationResult(TypedDict, total=False):
    platform_contents: List[PlatformContent]


# Parsed model output. Usually a dict shaped like the TypedDicts above, but any
# JSON value is accepted.
JSONValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]


# ============================================================================
# Rate limiting
# ============================================================================

@dataclass
class ClientWindow:
    """Request count for one client inside its current fixed window."""
    window_start: float
    count: int = 1


# ============================================================================
# Pipeline input
# ============================================================================

class PipelineRequest(BaseModel):
    """
    Caller input for one remix run (JSON body of POST /api/generate).

    Only rawText is checked (by the pipeline, before this model is built).
    niche and platforms are never rejected: a falsy niche means "general", any
    other non-string niche is rendered as text, and platforms is embedded in
    the generation prompt as whatever JSON the caller sent.
    """
    model_config = ConfigDict(populate_by_name=True)

    raw_text: str = Field(
        ...,
        alias="rawText",
        min_length=1,
        strict=True,
        description="Competitor content (video transcript, post copy, ...)"
    )
    niche: Optional[str] = Field(
        default=None,
        description="Topic/category; empty falls back to 'general'"
    )
    platforms: Any = Field(
        default=None,
        description="Target platforms, e.g. ['tiktok', 'youtube_shorts']",
        json_schema_extra={"type": "array", "items": {"type": "string"}}
    )

    @field_validator("niche", mode="before")
    @classmethod
    def coerce_niche(cls, value: Any) -> Optional[str]:
        if not value:
            return None
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true"
        return str(value)

"""
API Request and Response Models.

Pydantic models for FastAPI response documentation. The remix request body is
validated inside the pipeline (after rate limiting), so these models describe
the contract for OpenAPI rather than gate the route.
"""

from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from datetime import datetime

from ..core.models import PipelineRequest

__all__ = ["PipelineRequest", "RemixResponse", "ErrorResponse", "HealthResponse"]


# ============================================================================
# Remix Models
# ============================================================================

class RemixResponse(BaseModel):
    """
    Successful remix result.

    Both fields are passed through exactly as the models returned them.
    """
    analysis: Any = Field(..., description="Gemini analysis (summary, structure, insights, ideas)")
    generated: Any = Field(..., description="OpenAI platform contents (scripts, captions, hashtags)")

    model_config = {
        "json_schema_extra": {
            "example": {
                "analysis": {
                    "summary": "Before/after fitness transformation with a discount hook",
                    "structure": {
                        "hook": "I lost 10kg in 8 weeks without a gym",
                        "body_points": ["Home routine", "Meal prep"],
                        "closing_cta": "Link in bio"
                    },
                    "attraction_factors": ["social proof"],
                    "tone_of_voice": "casual",
                    "insights": {"pains": ["no time"], "desires": ["quick results"], "false_beliefs": []},
                    "ideas": [
                        {"id": "idea_1", "title": "15-minute routine", "short_description": "...", "video_type": "tips"}
                    ]
                },
                "generated": {
                    "platform_contents": [
                        {
                            "platform": "tiktok",
                            "items": [
                                {
                                    "idea_id": "idea_1",
                                    "variant_index": 1,
                                    "title": "15 minutes, zero equipment",
                                    "script": "...",
                                    "caption": "Try it tonight [LINK_AFFILIATE]",
                                    "hashtags": ["#fitness"]
                                }
                            ]
                        }
                    ]
                }
            }
        }
    }


# ============================================================================
# Health Check Models
# ============================================================================

class HealthResponse(BaseModel):
    """Response model for health check endpoint."""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(default_factory=datetime.now)
    services: Dict[str, str] = Field(
        default_factory=dict,
        description="Whether each upstream is configured"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "healthy",
                "version": "1.0.0",
                "timestamp": "2025-01-18T12:00:00Z",
                "services": {
                    "gemini": "configured",
                    "openai": "configured"
                }
            }
        }
    }


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response model. `detail` is omitted when empty."""
    error: str = Field(..., description="Error message")
    detail: Optional[Any] = Field(
        None,
        description="Diagnostic context (raw upstream text or envelope, validation errors, exception text)"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "Cannot parse OpenAI JSON",
                "detail": "Sure! Here is your JSON: ..."
            }
        }
    }

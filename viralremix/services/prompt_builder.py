"""
Prompt construction for the two remix stages.

Templates are static text; only the substituted values come from the caller.
Substitution is plain text replacement in a fixed order: single-use
placeholders are replaced once (first occurrence), {{NICHE}} everywhere.
Caller text is interpolated as-is, without escaping.
"""

import json
from typing import Any, Optional

DEFAULT_NICHE = "general"
AFFILIATE_LINK_PLACEHOLDER = "[LINK_AFFILIATE]"

ANALYSIS_PROMPT_TEMPLATE = """
Vai trò: Bạn là chuyên gia phân tích nội dung marketing (video & bài viết).
Trả về CHỈ JSON theo schema sau:

{
  "summary":"string",
  "structure": { "hook":"string", "body_points":["string"], "closing_cta":"string" },
  "attraction_factors": ["string"],
  "tone_of_voice": "string",
  "insights": { "pains":["string"], "desires":["string"], "false_beliefs":["string"] },
  "ideas": [
    { "id":"idea_1", "title":"string", "short_description":"string", "video_type":"review|story|tips|other" }
  ]
}

Nội dung đối thủ:
\"\"\"
{{RAW_TEXT}}
\"\"\"
Niche: {{NICHE}}
"""

GENERATION_PROMPT_TEMPLATE = """
Vai trò: Bạn là chuyên gia sáng tạo nội dung video ngắn và copywriter.

Dưới đây là phân tích (JSON) từ Gemini:
{{ANALYSIS_JSON}}

Niche: {{NICHE}}
Platforms: {{PLATFORMS}}

NHIỆM VỤ:
1) Chọn ít nhất 3 ý tưởng phù hợp từ "ideas".
2) Với mỗi platform, tạo ít nhất 2 variant nội dung cho mỗi ý tưởng.

Trả về CHỈ JSON theo cấu trúc:
{
 "platform_contents":[
   {
     "platform":"tiktok|youtube_shorts|facebook_reels",
     "items":[
       {
         "idea_id":"idea_1",
         "variant_index":1,
         "title":"string",
         "script":"string",
         "caption":"string",
         "hashtags":["string"]
       }
     ]
   }
 ]
}

Yêu cầu:
- Hook phải rõ trong 3 giây đầu.
- Không copy câu chữ từ nội dung gốc.
- CTA dùng placeholder """ + AFFILIATE_LINK_PLACEHOLDER + """.
"""


def to_compact_json(value: Any) -> str:
    """Serialize without whitespace or ASCII escaping (same bytes as JSON.stringify)."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def build_analysis_prompt(raw_text: str, niche: Optional[str] = None) -> str:
    """
    Build the Gemini analysis prompt.

    Args:
        raw_text: Competitor content to analyze
        niche: Topic/category; empty or None falls back to "general"

    Returns:
        Prompt asking for a JSON-only analysis object
    """
    return (
        ANALYSIS_PROMPT_TEMPLATE
        .replace("{{RAW_TEXT}}", raw_text, 1)
        .replace("{{NICHE}}", niche or DEFAULT_NICHE)
    )


def build_generation_prompt(
    analysis: Any,
    niche: Optional[str] = None,
    platforms: Any = None
) -> str:
    """
    Build the OpenAI generation prompt from the parsed analysis.

    Args:
        analysis: Parsed analysis payload, embedded as compact JSON
        niche: Topic/category; empty or None falls back to "general"
        platforms: Target platforms, embedded as compact JSON whatever its type

    Returns:
        Prompt asking for JSON-only platform contents
    """
    return (
        GENERATION_PROMPT_TEMPLATE
        .replace("{{ANALYSIS_JSON}}", to_compact_json(analysis), 1)
        .replace("{{NICHE}}", niche or DEFAULT_NICHE)
        .replace("{{PLATFORMS}}", to_compact_json(platforms or []), 1)
    )

"""
Unit tests for prompt_builder.

Covers:
- build_analysis_prompt(): raw text embedding, niche default, placeholder counts
- build_generation_prompt(): compact JSON embedding, platforms default,
  generation rules present in the template
- Substitution order quirks (placeholders inside caller text)
"""

import json

import pytest

from viralremix.services.prompt_builder import (
    AFFILIATE_LINK_PLACEHOLDER,
    ANALYSIS_PROMPT_TEMPLATE,
    GENERATION_PROMPT_TEMPLATE,
    build_analysis_prompt,
    build_generation_prompt,
    to_compact_json,
)


SAMPLE_ANALYSIS = {
    "summary": "Giày chạy bộ giảm 50%",
    "structure": {"hook": "Bạn đang chạy sai?", "body_points": ["a", "b"], "closing_cta": "Mua ngay"},
    "ideas": [{"id": "idea_1", "title": "Review", "short_description": "x", "video_type": "review"}],
}


# ---------------------------------------------------------------------------
# build_analysis_prompt
# ---------------------------------------------------------------------------

class TestBuildAnalysisPrompt:
    def test_contains_raw_text(self):
        prompt = build_analysis_prompt("X", "")
        assert "X" in prompt
        assert '"""\nX\n"""' in prompt

    @pytest.mark.parametrize("niche", ["", None])
    def test_empty_niche_defaults_to_general(self, niche):
        prompt = build_analysis_prompt("X", niche)
        assert "Niche: general" in prompt
        assert "{{NICHE}}" not in prompt

    def test_niche_substituted(self):
        prompt = build_analysis_prompt("X", "fitness")
        assert "Niche: fitness" in prompt

    def test_no_placeholders_left(self):
        prompt = build_analysis_prompt("competitor video transcript", "fitness")
        assert "{{" not in prompt

    def test_asks_for_json_schema(self):
        prompt = build_analysis_prompt("X", "fitness")
        for key in ("summary", "structure", "attraction_factors", "tone_of_voice", "insights", "ideas",
                    "short_description", "video_type"):
            assert f'"{key}"' in prompt

    def test_raw_text_with_special_characters_kept_verbatim(self):
        raw = 'Price: $100 & "quotes" \\ back\\slash $& $1'
        prompt = build_analysis_prompt(raw, "shoes")
        assert raw in prompt

    def test_raw_text_replaced_once_then_niche_everywhere(self):
        # Caller text is substituted first, so a {{NICHE}} inside it is filled too
        prompt = build_analysis_prompt("about {{NICHE}}", "pets")
        assert "about pets" in prompt

    def test_template_is_unchanged(self):
        build_analysis_prompt("X", "Y")
        assert "{{RAW_TEXT}}" in ANALYSIS_PROMPT_TEMPLATE


# ---------------------------------------------------------------------------
# build_generation_prompt
# ---------------------------------------------------------------------------

class TestBuildGenerationPrompt:
    def test_embeds_compact_analysis_json(self):
        prompt = build_generation_prompt(SAMPLE_ANALYSIS, "shoes", ["tiktok"])
        assert json.dumps(SAMPLE_ANALYSIS, ensure_ascii=False, separators=(",", ":")) in prompt

    def test_embeds_platforms_json(self):
        prompt = build_generation_prompt(SAMPLE_ANALYSIS, "shoes", ["tiktok"])
        assert 'Platforms: ["tiktok"]' in prompt

    def test_multiple_platforms(self):
        prompt = build_generation_prompt({}, "shoes", ["tiktok", "youtube_shorts"])
        assert 'Platforms: ["tiktok","youtube_shorts"]' in prompt

    @pytest.mark.parametrize("platforms", [None, []])
    def test_platforms_default_to_empty_list(self, platforms):
        prompt = build_generation_prompt({}, "shoes", platforms)
        assert "Platforms: []" in prompt

    def test_niche_default(self):
        prompt = build_generation_prompt({}, None, ["tiktok"])
        assert "Niche: general" in prompt

    def test_non_ascii_is_not_escaped(self):
        prompt = build_generation_prompt(SAMPLE_ANALYSIS, "shoes", [])
        assert "Giày chạy bộ giảm 50%" in prompt
        assert "\\u" not in prompt

    def test_generation_rules_present(self):
        prompt = build_generation_prompt({}, "shoes", ["tiktok"])
        assert "ít nhất 3 ý tưởng" in prompt      # select at least 3 ideas
        assert "ít nhất 2 variant" in prompt      # at least 2 variants per idea per platform
        assert "Không copy câu chữ" in prompt     # do not copy source wording
        assert AFFILIATE_LINK_PLACEHOLDER in prompt
        assert AFFILIATE_LINK_PLACEHOLDER == "[LINK_AFFILIATE]"

    def test_no_placeholders_left(self):
        prompt = build_generation_prompt(SAMPLE_ANALYSIS, "shoes", ["tiktok"])
        assert "{{" not in prompt
        assert "{{PLATFORMS}}" in GENERATION_PROMPT_TEMPLATE

    def test_analysis_can_be_any_json_value(self):
        prompt = build_generation_prompt(["not", "a", "dict"], "shoes", [])
        assert '["not","a","dict"]' in prompt


class TestToCompactJson:
    def test_matches_json_stringify_layout(self):
        assert to_compact_json({"a": [1, 2], "b": "c"}) == '{"a":[1,2],"b":"c"}'

    def test_keeps_unicode(self):
        assert to_compact_json(["phở"]) == '["phở"]'

"""
ViralRemix - Competitor content analysis and short-form video content generation

Turns competitor marketing text into structured analysis (Gemini) and
platform-specific scripts, captions and hashtags (OpenAI).
"""

__version__ = "1.0.0"
__author__ = "ViralRemix Team"

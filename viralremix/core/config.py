"""
Configuration management for ViralRemix
"""

import os
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration"""

    # Gemini (analysis stage)
    GEMINI_MODEL: str = os.getenv('GEMINI_MODEL', 'gemini-2.0-flash')
    GEMINI_BASE_URL: str = os.getenv('GEMINI_BASE_URL', 'https://generativelanguage.googleapis.com/v1beta')
    GEMINI_TIMEOUT_SECONDS: float = float(os.getenv('GEMINI_TIMEOUT_SECONDS', '45'))

    # OpenAI (generation stage)
    OPENAI_MODEL: str = os.getenv('OPENAI_MODEL', 'gpt-4.1')
    OPENAI_BASE_URL: str = os.getenv('OPENAI_BASE_URL', 'https://api.openai.com/v1')
    OPENAI_TIMEOUT_SECONDS: float = float(os.getenv('OPENAI_TIMEOUT_SECONDS', '60'))
    OPENAI_TEMPERATURE: float = float(os.getenv('OPENAI_TEMPERATURE', '0.7'))
    OPENAI_MAX_TOKENS: int = int(os.getenv('OPENAI_MAX_TOKENS', '3000'))
    OPENAI_SYSTEM_PROMPT: str = "You are an expert short-form video copywriter."

    # Rate limiting (fixed window, per client)
    RATE_LIMIT_WINDOW_SECONDS: float = float(os.getenv('RATE_LIMIT_WINDOW_SECONDS', '60'))
    RATE_LIMIT_MAX_REQUESTS: int = int(os.getenv('RATE_LIMIT_MAX_REQUESTS', '60'))
    RATE_LIMIT_MAX_CLIENTS: int = int(os.getenv('RATE_LIMIT_MAX_CLIENTS', '10000'))

    # API
    CORS_ORIGINS: List[str] = os.getenv('CORS_ORIGINS', '*').split(',')

    # Secrets are read on every call so a rotated key is picked up without a restart.

    @classmethod
    def gemini_api_key(cls) -> Optional[str]:
        """Get the Gemini API key from the environment (None if unset or empty)"""
        return os.getenv('GEMINI_API_KEY') or None

    @classmethod
    def openai_api_key(cls) -> Optional[str]:
        """Get the OpenAI API key from the environment (None if unset or empty)"""
        return os.getenv('OPENAI_API_KEY') or None

    @classmethod
    def gemini_generate_url(cls, api_key: str) -> str:
        """Build the generateContent URL (the key travels as a query parameter)"""
        return f"{cls.GEMINI_BASE_URL}/models/{cls.GEMINI_MODEL}:generateContent?key={api_key}"

    @classmethod
    def openai_chat_url(cls) -> str:
        """Build the chat-completions URL"""
        return f"{cls.OPENAI_BASE_URL}/chat/completions"

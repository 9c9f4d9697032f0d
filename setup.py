"""
Setup configuration for viralremix package.
"""

from setuptools import setup, find_packages

setup(
    name="viralremix",
    version="1.0.0",
    description="Competitor content analysis and short-form video content generation",
    packages=find_packages(include=["viralremix", "viralremix.*"]),
    python_requires=">=3.9",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "pydantic>=2.5",
        "httpx>=0.27",
        "python-dotenv>=1.0",
        "cachetools>=5.3",
        "logfire>=2.0",
        "click>=8.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "viralremix=viralremix.cli.main:cli",
        ],
    },
)

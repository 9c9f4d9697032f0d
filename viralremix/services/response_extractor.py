"""
Structured payload extraction from upstream reply envelopes.

Each upstream returns a JSON envelope whose interesting part is model output
embedded as a string. Extraction has three layers, each with its own error:

1. Parse the body as JSON           -> UpstreamEnvelopeParseError(raw text)
2. Walk to the generated text field -> UpstreamEmptyContentError(envelope)
3. Parse that text as JSON          -> UpstreamPayloadParseError(text)

Parsing is strict: markdown fences, prose around the JSON and
NaN/Infinity literals all fail layer 3. Nothing checks the payload against the
schema the prompt asked for.
"""

import json
import logging
from typing import Any, Sequence, Union

from ..core.exceptions import (
    UpstreamEmptyContentError,
    UpstreamEnvelopeParseError,
    UpstreamPayloadParseError,
)
from ..core.models import AnalysisResult, GenerationResult, JSONValue

logger = logging.getLogger(__name__)

GEMINI = "Gemini"
OPENAI = "OpenAI"

# candidates[0].content.parts[0].text
GEMINI_TEXT_PATH = ("candidates", 0, "content", "parts", 0, "text")
# choices[0].message.content
OPENAI_TEXT_PATH = ("choices", 0, "message", "content")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def strict_json_loads(text: str) -> JSONValue:
    """json.loads that also rejects NaN, Infinity and -Infinity."""
    return json.loads(text, parse_constant=_reject_constant)


def dig(value: Any, path: Sequence[Union[str, int]]) -> Any:
    """
    Follow a path of dict keys / list indexes, returning None on any miss.

    Example:
        >>> dig({"a": [{"b": 1}]}, ("a", 0, "b"))
        1
        >>> dig({"a": {}}, ("a", 0, "b")) is None
        True
    """
    for step in path:
        if isinstance(step, int):
            if not isinstance(value, list) or step >= len(value):
                return None
        elif not isinstance(value, dict) or step not in value:
            return None
        value = value[step]
    return value


def parse_envelope(upstream: str, raw_text: str) -> JSONValue:
    """Layer 1: parse the response body."""
    try:
        return strict_json_loads(raw_text)
    except ValueError as e:
        logger.error(f"{upstream} envelope parse failed: {e}")
        raise UpstreamEnvelopeParseError(upstream, raw_text) from e


def embedded_text(upstream: str, envelope: JSONValue, path: Sequence[Union[str, int]]) -> str:
    """Layer 2: find the generated text inside a parsed envelope."""
    text = dig(envelope, path)
    if not isinstance(text, str) or not text:
        logger.error(f"{upstream} envelope has no content: {envelope!r}")
        raise UpstreamEmptyContentError(upstream, envelope)
    return text


def parse_payload(upstream: str, text: str) -> JSONValue:
    """Layer 3: parse the generated text."""
    try:
        return strict_json_loads(text)
    except ValueError as e:
        logger.error(f"Cannot parse {upstream} JSON ({e}): {text}")
        raise UpstreamPayloadParseError(upstream, text) from e


def extract_payload(upstream: str, raw_text: str, path: Sequence[Union[str, int]]) -> JSONValue:
    """Run all three layers for one upstream reply."""
    envelope = parse_envelope(upstream, raw_text)
    text = embedded_text(upstream, envelope, path)
    return parse_payload(upstream, text)


def extract_gemini_payload(raw_text: str) -> AnalysisResult:
    """
    Extract the analysis object from a Gemini generateContent reply.

    Args:
        raw_text: Raw HTTP response body

    Returns:
        Parsed model output (expected to be an AnalysisResult-shaped dict)

    Raises:
        UpstreamEnvelopeParseError, UpstreamEmptyContentError, UpstreamPayloadParseError
    """
    return extract_payload(GEMINI, raw_text, GEMINI_TEXT_PATH)


def extract_openai_payload(raw_text: str) -> GenerationResult:
    """
    Extract the generation object from an OpenAI chat-completions reply.

    Args:
        raw_text: Raw HTTP response body

    Returns:
        Parsed model output (expected to be a GenerationResult-shaped dict)

    Raises:
        UpstreamEnvelopeParseError, UpstreamEmptyContentError, UpstreamPayloadParseError
    """
    return extract_payload(OPENAI, raw_text, OPENAI_TEXT_PATH)

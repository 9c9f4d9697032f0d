"""
RemixPipeline - competitor content -> analysis -> platform content.

Single entry point for a remix request. The request walks a fixed sequence of
steps and the first failure ends it:

    check method -> check rate limit -> validate input -> check credentials
    -> call Gemini -> extract analysis -> build generation prompt
    -> call OpenAI -> extract generated content -> respond

Each step fails in exactly one way, with its own status and error string.
There is no partial success: if generation fails the analysis is discarded.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Type

import logfire

from ..core.config import Config
from ..core.exceptions import (
    ConfigurationError,
    PipelineError,
    PipelineValidationError,
    RateLimitError,
    UnexpectedFailure,
    UpstreamEmptyContentError,
    UpstreamEnvelopeParseError,
    UpstreamPayloadParseError,
)
from ..core.models import AnalysisResult, GenerationResult, PipelineRequest
from .prompt_builder import DEFAULT_NICHE, build_analysis_prompt, build_generation_prompt
from .rate_limiter import FixedWindowRateLimiter
from .response_extractor import extract_gemini_payload, extract_openai_payload
from .upstream_client import UpstreamClient

logger = logging.getLogger(__name__)


@dataclass
class PipelineOutcome:
    """HTTP status plus JSON body for one handled request."""
    status_code: int
    content: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    @classmethod
    def from_error(cls, error: PipelineError) -> "PipelineOutcome":
        content: Dict[str, Any] = {"error": error.error}
        if error.detail is not None:
            content["detail"] = error.detail
        return cls(status_code=error.status_code, content=content)


class RemixPipeline:
    """
    Orchestrates the two-stage Gemini -> OpenAI remix.

    Example:
        >>> pipeline = RemixPipeline(FixedWindowRateLimiter())
        >>> outcome = await pipeline.handle(
        ...     "POST",
        ...     client_id="203.0.113.7",
        ...     body={"rawText": "competitor video transcript", "niche": "fitness"}
        ... )
        >>> outcome.status_code, sorted(outcome.content)
        (200, ['analysis', 'generated'])
    """

    def __init__(
        self,
        rate_limiter: FixedWindowRateLimiter,
        upstream: Optional[UpstreamClient] = None,
        config: Type[Config] = Config
    ):
        """
        Args:
            rate_limiter: Shared per-client limiter (one per process)
            upstream: HTTP call primitive (default: real network)
            config: Settings source
        """
        self.rate_limiter = rate_limiter
        self.upstream = upstream or UpstreamClient()
        self.config = config

    async def handle(self, method: str, client_id: str, body: Any) -> PipelineOutcome:
        """
        Handle one remix request end to end.

        Never raises for request-level failures: every error, expected or not,
        comes back as a PipelineOutcome with an error body.

        Args:
            method: HTTP method of the incoming request
            client_id: Rate-limit key (see rate_limiter.client_id_from)
            body: Decoded JSON body (None if absent or undecodable)

        Returns:
            PipelineOutcome with status 200 and {analysis, generated}, or an
            error status and {error, detail?}
        """
        start_time = time.time()

        try:
            content = await self._run(method, client_id, body)
        except PipelineError as e:
            elapsed = time.time() - start_time
            if e.status_code < 500:
                logger.warning(f"Remix rejected after {elapsed:.2f}s: {e.status_code} {e.error}")
            else:
                cause = type(e.__cause__).__name__ if e.__cause__ else type(e).__name__
                logger.error(f"Remix failed after {elapsed:.2f}s: {e.error} ({cause})")
            return PipelineOutcome.from_error(e)
        except Exception as e:
            logger.error(f"Server failure: {e}", exc_info=True)
            return PipelineOutcome.from_error(UnexpectedFailure(e))

        logger.info(f"Remix completed in {time.time() - start_time:.2f}s")
        return PipelineOutcome(status_code=200, content=content)

    async def _run(self, method: str, client_id: str, body: Any) -> Dict[str, Any]:
        if method.upper() != "POST":
            raise PipelineValidationError("Method not allowed", status_code=405)

        if self.rate_limiter.check_and_record(client_id):
            raise RateLimitError(client_id)

        request = self.validate(body)
        gemini_key, openai_key = self.require_credentials()

        with logfire.span(
            "remix_pipeline",
            niche=request.niche or DEFAULT_NICHE,
            platforms=request.platforms or []
        ):
            analysis = await self.analyze(request, gemini_key)
            generated = await self.generate(analysis, request, openai_key)

        return {"analysis": analysis, "generated": generated}

    # ========================================================================
    # Steps
    # ========================================================================

    @staticmethod
    def validate(body: Any) -> PipelineRequest:
        """
        Validate the decoded request body.

        rawText is the only required input. niche and platforms are coerced,
        never rejected (see PipelineRequest).
        """
        raw_text = body.get("rawText") if isinstance(body, dict) else None
        if not raw_text or not isinstance(raw_text, str):
            raise PipelineValidationError("Missing rawText input")

        return PipelineRequest.model_validate(body)

    def require_credentials(self) -> Tuple[str, str]:
        """Read both API keys from the environment, Gemini first."""
        gemini_key = self.config.gemini_api_key()
        if not gemini_key:
            raise ConfigurationError("Missing GEMINI_API_KEY in environment")

        openai_key = self.config.openai_api_key()
        if not openai_key:
            raise ConfigurationError("Missing OPENAI_API_KEY in environment")

        return gemini_key, openai_key

    async def analyze(self, request: PipelineRequest, api_key: str) -> AnalysisResult:
        """Stage 1: Gemini analysis of the competitor content."""
        prompt = build_analysis_prompt(request.raw_text, request.niche)

        with logfire.span("gemini_analysis", model=self.config.GEMINI_MODEL, prompt_length=len(prompt)):
            raw = await self.upstream.call(
                self.config.gemini_generate_url(api_key),
                method="POST",
                headers={"Content-Type": "application/json"},
                body={"contents": [{"parts": [{"text": prompt}]}]},
                timeout=self.config.GEMINI_TIMEOUT_SECONDS
            )

        try:
            return extract_gemini_payload(raw)
        except (UpstreamEnvelopeParseError, UpstreamEmptyContentError) as e:
            logger.error(f"Gemini response (raw): {raw}")
            raise PipelineError("Gemini API error", detail=raw) from e
        except UpstreamPayloadParseError as e:
            raise PipelineError("Cannot parse Gemini JSON", detail=e.raw) from e

    async def generate(
        self,
        analysis: AnalysisResult,
        request: PipelineRequest,
        api_key: str
    ) -> GenerationResult:
        """Stage 2: OpenAI platform content generated from the analysis."""
        prompt = build_generation_prompt(analysis, request.niche, request.platforms)

        with logfire.span("openai_generation", model=self.config.OPENAI_MODEL, prompt_length=len(prompt)):
            raw = await self.upstream.call(
                self.config.openai_chat_url(),
                method="POST",
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {api_key}",
                },
                body={
                    "model": self.config.OPENAI_MODEL,
                    "messages": [
                        {"role": "system", "content": self.config.OPENAI_SYSTEM_PROMPT},
                        {"role": "user", "content": prompt},
                    ],
                    "temperature": self.config.OPENAI_TEMPERATURE,
                    "max_tokens": self.config.OPENAI_MAX_TOKENS,
                },
                timeout=self.config.OPENAI_TIMEOUT_SECONDS
            )

        try:
            return extract_openai_payload(raw)
        except UpstreamEnvelopeParseError as e:
            raise PipelineError("OpenAI response not JSON", detail=raw) from e
        except UpstreamEmptyContentError as e:
            raise PipelineError("OpenAI API error", detail=e.raw) from e
        except UpstreamPayloadParseError as e:
            raise PipelineError("Cannot parse OpenAI JSON", detail=e.raw) from e

"""
Pipeline error taxonomy.

Every failure the remix pipeline can hit is a PipelineError subclass carrying
the HTTP status, the client-facing error string and optional diagnostic detail.
The orchestrator turns the first one raised into the response; nothing is
aggregated.
"""

from typing import Any, Optional


class PipelineError(Exception):
    """Base class for failures that end a pipeline request."""

    status_code: int = 500

    def __init__(
        self,
        error: str,
        detail: Any = None,
        status_code: Optional[int] = None,
        message: Optional[str] = None
    ):
        self.error = error
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message or error)


class PipelineValidationError(PipelineError):
    """Bad method or bad input. The caller can fix it."""
    status_code = 400


class RateLimitError(PipelineError):
    """Client exceeded its request window."""
    status_code = 429

    def __init__(self, client_id: str):
        self.client_id = client_id
        super().__init__("Rate limit exceeded. Try again later.")


class ConfigurationError(PipelineError):
    """Missing credentials. Only the operator can fix it."""
    status_code = 500


# ============================================================================
# Upstream failures
# ============================================================================

class UpstreamTransportError(PipelineError):
    """
    The upstream request never produced a response.

    Reported to the client as a server failure with the transport message as
    detail.
    """
    status_code = 500

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__("Server failure", detail=message, message=message)


class UpstreamTimeoutError(UpstreamTransportError):
    """No response within the call's deadline."""

    def __init__(self, url: str, timeout: float):
        self.timeout = timeout
        super().__init__(url, f"Upstream request timed out after {timeout:g}s")


class UpstreamNetworkError(UpstreamTransportError):
    """Connection-level failure (DNS, refused, reset, protocol error)."""


class UpstreamResponseError(PipelineError):
    """
    Base for malformed upstream replies.

    `raw` holds whatever was being parsed when it failed, for diagnostics.
    """
    status_code = 500

    def __init__(self, upstream: str, raw: Any, message: str):
        self.upstream = upstream
        self.raw = raw
        super().__init__(message, detail=raw)


class UpstreamEnvelopeParseError(UpstreamResponseError):
    """Response body is not JSON."""

    def __init__(self, upstream: str, raw: str):
        super().__init__(upstream, raw, f"{upstream} envelope is not valid JSON")


class UpstreamEmptyContentError(UpstreamResponseError):
    """Envelope parsed but the generated text field is missing or empty."""

    def __init__(self, upstream: str, envelope: Any):
        super().__init__(upstream, envelope, f"{upstream} envelope has no generated content")


class UpstreamPayloadParseError(UpstreamResponseError):
    """Generated text is not strict JSON."""

    def __init__(self, upstream: str, text: str):
        super().__init__(upstream, text, f"{upstream} generated text is not valid JSON")


class UnexpectedFailure(PipelineError):
    """Catch-all for anything the pipeline did not anticipate."""
    status_code = 500

    def __init__(self, exc: BaseException):
        self.original = exc
        super().__init__("Server failure", detail=str(exc))

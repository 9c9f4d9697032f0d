"""
Services layer for the ViralRemix pipeline.

Provides clean separation between rate limiting, prompt construction,
upstream HTTP calls, reply parsing and the orchestration that ties them
together (RemixPipeline).
"""

from .rate_limiter import FixedWindowRateLimiter, client_id_from
from .remix_pipeline import PipelineOutcome, RemixPipeline
from .upstream_client import UpstreamClient

__all__ = [
    'FixedWindowRateLimiter',
    'client_id_from',
    'PipelineOutcome',
    'RemixPipeline',
    'UpstreamClient',
]

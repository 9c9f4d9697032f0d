"""
Core module - Configuration, error taxonomy, data shapes and observability
"""

from .config import Config
from .exceptions import PipelineError

__all__ = ['Config', 'PipelineError']

"""
ViralRemix API - FastAPI application for competitor content remixing.

Exposes the remix pipeline over HTTP for the web front end and any other
caller that can POST JSON.
"""

__version__ = "1.0.0"

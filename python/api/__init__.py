"""
FastAPI Backend for the SMS Parser

Exposes validation, parsing, capture and merchant resolution over HTTP.
"""

from .main import app

__all__ = ["app"]

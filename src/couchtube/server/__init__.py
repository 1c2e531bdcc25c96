"""HTTP server module for Couchtube.

This module provides the FastAPI-based HTTP server that exposes the stored
channels and clips.
"""

from .app import create_app
from .server import create_server

__all__ = ["create_app", "create_server"]

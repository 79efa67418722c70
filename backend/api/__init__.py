"""
Cookbook API package.

Provides the FastAPI application for the multi-user recipe manager.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]

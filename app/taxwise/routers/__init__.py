"""
Routers package for FastAPI endpoints.

Organized by concern:
- tax: Document merge + regime comparison, tax calculation
- views: Server-rendered HTML pages
"""

from . import tax, views

__all__ = ["tax", "views"]

"""
Services package for the tax document application.

Contains:
- storage: Request-scoped temporary files and upload persistence
- pdf_service: PDF merging with pypdf
- ai: OpenAI integration and model output parsing
"""

from .ai import AIService
from .pdf_service import PDFMergerService
from .storage import TempStorage

__all__ = ["AIService", "PDFMergerService", "TempStorage"]

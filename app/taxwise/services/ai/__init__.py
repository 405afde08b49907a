"""
AI service package for tax document analysis.

This package provides:
- prompts: Fixed prompt templates for regime comparison and tax calculation
- response_parser: Extraction of the fenced JSON block from model output
- exceptions: Errors raised by the AI client adapter

The AIService class wraps the OpenAI client and exposes the two call shapes
used by the HTTP routes.
"""

import logging
from typing import Any

from openai import AsyncOpenAI

from ...config import get_settings
from ...models import InlineAttachment
from .exceptions import AIConfigurationError, AIServiceError
from .prompts import TAX_COMPARISON_PROMPT, build_tax_calculation_prompt
from .response_parser import extract_json_block

logger = logging.getLogger(__name__)

__all__ = [
    "AIService",
    "AIServiceError",
    "AIConfigurationError",
    "extract_json_block",
    "get_ai_service",
]


class AIService:
    """
    Adapter around a single OpenAI chat model.

    Supports:
    - Document analysis: merged PDF sent inline with the regime comparison prompt
    - Text-only calls: user data interpolated into the tax calculation prompt

    The adapter holds no request state; each call is independent. There is no
    retry and no timeout override, provider errors surface as AIServiceError.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: Any = None,
    ):
        """
        Initialize the AI service.

        Args:
            api_key: OpenAI API key. If None, reads from settings.
            model: Model identifier. If None, reads from settings.
            client: Pre-built async client (used by tests).
        """
        if api_key is None or model is None:
            settings = get_settings()
            if api_key is None:
                api_key = settings.openai_api_key
            if model is None:
                model = settings.openai_model

        self.api_key = api_key
        self.model = model
        self._client = client

        if self._client is None and not self.api_key:
            logger.warning(
                "OPENAI_API_KEY is not set. AI requests will fail until it is configured."
            )

    @property
    def client(self) -> Any:
        """Lazy-load the OpenAI client."""
        if self._client is None:
            if not self.api_key:
                raise AIConfigurationError(
                    "OpenAI API key not provided. Set OPENAI_API_KEY environment variable."
                )
            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def analyze_document(
        self, pdf_base64: str, filename: str = "merged.pdf"
    ) -> str:
        """
        Ask the model for an old vs new regime comparison of a PDF.

        Args:
            pdf_base64: Base64-encoded PDF content.
            filename: Name reported to the provider for the attachment.

        Returns:
            Raw model text.
        """
        attachment = InlineAttachment(data=pdf_base64, filename=filename)
        content = [
            {
                "type": "file",
                "file": {
                    "filename": attachment.filename,
                    "file_data": f"data:{attachment.mime_type};base64,{attachment.data}",
                },
            },
            {"type": "text", "text": TAX_COMPARISON_PROMPT},
        ]
        return await self._generate(content)

    async def calculate_tax(self, user_data: Any) -> str:
        """
        Ask the model for tax liability and effective rate from raw user data.

        Args:
            user_data: Caller-supplied data, any JSON-compatible shape.

        Returns:
            Raw model text.
        """
        return await self._generate(build_tax_calculation_prompt(user_data))

    async def _generate(self, content: str | list[dict[str, Any]]) -> str:
        client = self.client

        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": content}],
            )
            text = response.choices[0].message.content or ""
        except Exception as e:
            logger.error("AI request to %s failed: %s", self.model, e)
            raise AIServiceError(f"AI request failed: {e}") from e

        logger.info("Received %d characters from %s", len(text), self.model)
        return text


# =============================================================================
# Singleton Factory
# =============================================================================

_ai_service: AIService | None = None


def get_ai_service() -> AIService:
    """Get or create the AI service singleton."""
    global _ai_service
    if _ai_service is None:
        _ai_service = AIService()
    return _ai_service

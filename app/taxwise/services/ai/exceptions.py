"""
Exceptions raised by the AI client adapter.
"""


class AIServiceError(Exception):
    """Raised when a call to the AI provider fails."""

    pass


class AIConfigurationError(AIServiceError):
    """Raised when the AI client cannot be built from the current settings."""

    pass

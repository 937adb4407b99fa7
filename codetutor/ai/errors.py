"""Error taxonomy for completion-provider failures."""

from __future__ import annotations

import asyncio
from enum import Enum

import litellm


class AIRuntimeErrorCategory(str, Enum):
    """Stable categories used across the LLM runtime path."""

    CONFIGURATION = "configuration"
    RATE_LIMIT_OR_QUOTA = "rate_limit_or_quota"
    TIMEOUT = "timeout"
    SCHEMA_VALIDATION = "schema_validation"
    PROVIDER_FAILURE = "provider_failure"


class AIRuntimeError(RuntimeError):
    """Base exception for all runtime failures produced by the LLM client."""

    def __init__(self, message: str, *, category: AIRuntimeErrorCategory) -> None:
        super().__init__(message)
        self.category = category


class AIConfigurationError(AIRuntimeError):
    """Raised when no completion model is configured."""

    def __init__(self, message: str) -> None:
        super().__init__(message, category=AIRuntimeErrorCategory.CONFIGURATION)


class AIRateLimitOrQuotaError(AIRuntimeError):
    """Raised when the provider reports quota exhaustion or rate limiting."""

    def __init__(self, message: str) -> None:
        super().__init__(message, category=AIRuntimeErrorCategory.RATE_LIMIT_OR_QUOTA)


class AITimeoutError(AIRuntimeError):
    """Raised when a completion exceeds the configured timeout."""

    def __init__(self, message: str) -> None:
        super().__init__(message, category=AIRuntimeErrorCategory.TIMEOUT)


class AISchemaValidationError(AIRuntimeError):
    """Raised when structured output fails schema validation."""

    def __init__(self, message: str) -> None:
        super().__init__(message, category=AIRuntimeErrorCategory.SCHEMA_VALIDATION)


class AIProviderError(AIRuntimeError):
    """Raised for generic provider-side failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message, category=AIRuntimeErrorCategory.PROVIDER_FAILURE)


def classify_provider_error(error: Exception) -> AIRuntimeError:
    """Map a LiteLLM / asyncio exception onto the taxonomy."""
    if isinstance(error, AIRuntimeError):
        return error
    if isinstance(error, (litellm.RateLimitError, litellm.BudgetExceededError)):
        return AIRateLimitOrQuotaError(f"Model provider rate limit or quota exceeded: {error}")
    if isinstance(error, (litellm.Timeout, asyncio.TimeoutError, TimeoutError)):
        return AITimeoutError(f"Model completion timed out: {error}")
    return AIProviderError(f"Model completion failed: {error}")

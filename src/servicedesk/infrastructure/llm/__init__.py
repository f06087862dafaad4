"""
LLM Client Infrastructure
==========================

Wrapper for the OpenAI chat completion API providing a clean interface for
the assistant module.

The domain layer depends on the ``ILLMClient`` abstraction, not on the
concrete SDK client.
"""

import json
import time
from typing import List, Optional
from abc import ABC, abstractmethod

from openai import AsyncOpenAI

from servicedesk.config import settings
from servicedesk.core import LLMException, ConfigurationException


class ChatCompletionResult:
    """Result of a chat completion."""

    def __init__(
        self,
        content: str,
        model: str,
        prompt_tokens: int,
        completion_tokens: int,
        latency_ms: int
    ):
        self.content = content
        self.model = model
        self.prompt_tokens = prompt_tokens
        self.completion_tokens = completion_tokens
        self.total_tokens = prompt_tokens + completion_tokens
        self.latency_ms = latency_ms


class ILLMClient(ABC):
    """Interface for LLM client operations."""

    @abstractmethod
    async def chat_completion(
        self,
        messages: List[dict],
        temperature: float = 0.3,
        max_tokens: int = 1000,
        operation: str = "chat_completion"
    ) -> ChatCompletionResult:
        """Generate chat completion."""


class OpenAILLMClient(ILLMClient):
    """
    OpenAI client implementation for GPT models.

    Provides async wrapper around OpenAI SDK operations.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self._api_key = api_key or settings.openai_api_key
        if not self._api_key:
            raise ConfigurationException("OpenAI API key not configured")

        self._client = AsyncOpenAI(api_key=self._api_key)
        self._model = model or settings.llm_model

    async def chat_completion(
        self,
        messages: List[dict],
        temperature: float = 0.3,
        max_tokens: int = 1000,
        operation: str = "chat_completion"
    ) -> ChatCompletionResult:
        """
        Generate chat completion using OpenAI GPT.

        Args:
            messages: List of message dicts with 'role' and 'content'
            temperature: Sampling temperature (0-1)
            max_tokens: Maximum tokens to generate
            operation: Operation name for logging (categorize, suggestions)

        Returns:
            ChatCompletionResult with generated text

        Raises:
            LLMException: If completion fails
        """
        start_time = time.perf_counter()

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens
            )
        except Exception as e:
            raise LLMException(f"Chat completion failed: {str(e)}", {"operation": operation})

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        usage = response.usage

        return ChatCompletionResult(
            content=response.choices[0].message.content or "",
            model=self._model,
            prompt_tokens=usage.prompt_tokens if usage else 0,
            completion_tokens=usage.completion_tokens if usage else 0,
            latency_ms=latency_ms
        )


class MockLLMClient(ILLMClient):
    """
    Mock LLM client for testing.

    Returns predictable responses without calling external APIs.
    """

    async def chat_completion(
        self,
        messages: List[dict],
        temperature: float = 0.3,
        max_tokens: int = 1000,
        operation: str = "chat_completion"
    ) -> ChatCompletionResult:
        """Return mock response based on operation type."""
        if operation == "categorize":
            content = json.dumps({
                "category": "Network",
                "priority": "high",
                "confidence": 0.9
            })
        elif operation == "suggestions":
            content = "```json\n" + json.dumps([
                {
                    "title": "Check VPN Client",
                    "description": "Confirm the VPN client is connected and reinstall it if the tunnel fails.",
                    "confidence": 0.8
                }
            ]) + "\n```"
        else:
            content = "This is a mock LLM response for testing purposes."

        return ChatCompletionResult(
            content=content,
            model="mock-model",
            prompt_tokens=100,
            completion_tokens=len(content.split()),
            latency_ms=1
        )


def build_llm_client() -> Optional[ILLMClient]:
    """Pick the configured client; None when the assistant runs on keywords only."""
    if settings.mock_llm:
        return MockLLMClient()
    if settings.openai_api_key:
        return OpenAILLMClient(settings.openai_api_key)
    return None

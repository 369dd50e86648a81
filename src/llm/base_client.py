# src/llm/base_client.py — v1
"""Abstract LLM client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from corpusqa.llm.models import LLMResponse, Message


class BaseLLMClient(ABC):
    """Unified interface for all LLM providers."""

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1000,
        temperature: float = 0.3,
    ) -> LLMResponse:
        """Text completion."""

    @abstractmethod
    async def complete_with_web_search(
        self,
        question: str,
        instructions: str | None = None,
    ) -> LLMResponse:
        """Completion where the provider retrieves live web context itself."""

    async def close(self) -> None:
        """Release HTTP resources. Default: nothing to release."""

    @property
    @abstractmethod
    def supports_web_search(self) -> bool:
        """Whether complete_with_web_search is available."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (openai, ...)."""

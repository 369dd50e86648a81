# src/llm/adapters/openai_adapter.py — v1
"""OpenAI adapter implementing BaseLLMClient.

Chat completions for prompted generation, the Responses API with the
``web_search_preview`` tool for the web-retrieval mode.
"""

from __future__ import annotations

import time
from typing import Any

from corpusqa.core.errors import GenerationError
from corpusqa.llm.base_client import BaseLLMClient
from corpusqa.llm.models import LLMResponse, Message


class OpenAIAdapter(BaseLLMClient):
    """OpenAI GPT adapter."""

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str = "",
        web_model: str | None = None,
        **kwargs: Any,
    ):
        self._model = model
        self._web_model = web_model or model
        self._api_key = api_key
        self.__client = None

    @property
    def _client(self):
        if self.__client is None:
            try:
                import openai
            except ImportError as e:
                raise ImportError(
                    "openai package required: pip install openai"
                ) from e
            self.__client = openai.AsyncOpenAI(api_key=self._api_key or None)
        return self.__client

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1000,
        temperature: float = 0.3,
    ) -> LLMResponse:
        oai_messages: list[dict[str, Any]] = []
        if system:
            oai_messages.append({"role": "system", "content": system})
        for m in messages:
            oai_messages.append({"role": m.role, "content": m.content})

        t0 = time.monotonic()
        try:
            resp = await self._client.chat.completions.create(
                model=self._model,
                messages=oai_messages,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except Exception as e:
            raise GenerationError(f"OpenAI completion failed: {e}") from e
        latency = int((time.monotonic() - t0) * 1000)

        if not resp.choices:
            raise GenerationError("OpenAI completion returned no choices")
        usage = resp.usage
        return LLMResponse(
            content=resp.choices[0].message.content or "",
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            model=self._model,
            provider="openai",
            latency_ms=latency,
            raw_response=resp,
        )

    async def complete_with_web_search(
        self,
        question: str,
        instructions: str | None = None,
    ) -> LLMResponse:
        t0 = time.monotonic()
        try:
            resp = await self._client.responses.create(
                model=self._web_model,
                tools=[{"type": "web_search_preview"}],
                input=question,
                instructions=instructions,
            )
        except Exception as e:
            raise GenerationError(f"OpenAI web search failed: {e}") from e
        latency = int((time.monotonic() - t0) * 1000)

        usage = getattr(resp, "usage", None)
        return LLMResponse(
            content=resp.output_text or "",
            input_tokens=getattr(usage, "input_tokens", 0) if usage else 0,
            output_tokens=getattr(usage, "output_tokens", 0) if usage else 0,
            model=self._web_model,
            provider="openai",
            latency_ms=latency,
            raw_response=resp,
        )

    async def close(self) -> None:
        if self.__client is not None:
            await self.__client.close()
            self.__client = None

    @property
    def supports_web_search(self) -> bool:
        return True

    @property
    def provider_name(self) -> str:
        return "openai"

# src/ingestion/describer.py — v1
"""Short page descriptions generated by the LLM.

The description is what gets embedded for a page, so a failed or blank
generation falls back to a placeholder instead of failing the page.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from corpusqa.llm.models import Message
from corpusqa.llm.prompts import DESCRIPTION_SYSTEM_PROMPT, build_description_prompt

if TYPE_CHECKING:
    from corpusqa.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)


def fallback_description(url: str) -> str:
    return f"Content from {url}"


class Describer:
    """Generate a bounded-length description of page content."""

    def __init__(
        self,
        llm: BaseLLMClient,
        max_tokens: int = 100,
        temperature: float = 0.3,
    ) -> None:
        self._llm = llm
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def describe(self, content: str, url: str) -> str:
        try:
            response = await self._llm.complete(
                [Message(role="user", content=build_description_prompt(content, url))],
                system=DESCRIPTION_SYSTEM_PROMPT,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except Exception as e:
            logger.warning("Error generating description for %s: %s", url, e)
            return fallback_description(url)

        description = (response.content or "").strip()
        if not description:
            logger.warning("Empty description generated for %s", url)
            return fallback_description(url)
        return description

# src/llm/models.py — v1
"""LLM-specific types: Message, LLMResponse, WebAnswer."""

from __future__ import annotations

import json
import re
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError


class Message(BaseModel):
    """Single message in a conversation."""

    role: Literal["user", "assistant", "system"]
    content: str


class LLMResponse(BaseModel):
    """Normalized response from any LLM provider."""

    content: str
    input_tokens: int = 0
    output_tokens: int = 0
    model: str
    provider: str
    latency_ms: int = 0
    raw_response: Any = None


class WebAnswer(BaseModel):
    """Structured answer returned by the web-retrieval mode."""

    content: str
    title: str = ""
    keywords: list[str] = Field(default_factory=list)
    links: list[str] = Field(default_factory=list)


_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def parse_web_answer(text: str) -> WebAnswer | None:
    """Parse the model's JSON answer, tolerating a ```json fence.

    Returns None when the text is not a JSON object with a ``content`` field;
    callers then keep the raw text.
    """
    stripped = text.strip()
    fenced = _FENCE_RE.match(stripped)
    if fenced:
        stripped = fenced.group(1)
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None
    try:
        return WebAnswer.model_validate(data)
    except ValidationError:
        return None

# src/llm/prompts.py — v1
"""Prompt templates for answering, page description and web answering."""

from __future__ import annotations

DESCRIPTION_MAX_CHARS = 150
DESCRIPTION_CONTENT_LIMIT = 4000

ANSWER_SYSTEM_PROMPT = (
    "You are a helpful assistant that answers questions about Polish taxes "
    "based on the information provided. Your answers should be concise, "
    "accurate, and based only on the information provided."
)

DESCRIPTION_SYSTEM_PROMPT = (
    "You are a helpful assistant that generates concise and accurate "
    "descriptions of web pages. Create a short description "
    f"(max {DESCRIPTION_MAX_CHARS} characters) that summarizes what this page is about."
)

WEB_ANSWER_INSTRUCTIONS = (
    "You are a helpful assistant who answers questions about Polish taxes "
    "based on the podatki.gov.pl website or government websites. Your answers "
    "should be concise, accurate and based solely on the podatki.gov.pl website "
    "or government websites. Return data in json format with the following "
    "structure {\"content\": \"answer\", \"links\": [\"link to source\"], "
    "\"title\": \"title based on content\", \"keywords\": [\"keyword\"]}"
)


def build_answer_prompt(question: str, context: str) -> str:
    return (
        f'Based on the following information, please answer this question: "{question}"'
        f"\n\nInformation: {context}"
    )


def build_description_prompt(content: str, url: str) -> str:
    return (
        "Generate a concise description of what this page is about. "
        f"The page URL is: {url}\n\n"
        f"Page content: {content[:DESCRIPTION_CONTENT_LIMIT]}"
    )

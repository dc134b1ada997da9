"""OpenAI-compatible Chat Completions helper for the Gemini API."""

from __future__ import annotations

from typing import Dict, List

from openai import OpenAI

from pickcopilot.config import get_llm_api_key, get_settings

_openai_client: OpenAI | None = None


def _client() -> OpenAI:
    global _openai_client
    if _openai_client is None:
        settings = get_settings()
        _openai_client = OpenAI(
            api_key=get_llm_api_key(),
            base_url=settings.llm_base_url,
            timeout=settings.upstream_timeout_seconds,
            max_retries=0,
        )
    return _openai_client


def generate_json(messages: List[Dict[str, str]]) -> str:
    """Run one completion asking for a JSON object and return the generated text.

    SDK errors (status, timeout, connection) propagate to the caller untouched.
    """

    response = _client().chat.completions.create(
        model=get_settings().llm_model,
        messages=messages,
        response_format={"type": "json_object"},
    )
    if not response.choices:
        return ""
    return response.choices[0].message.content or ""

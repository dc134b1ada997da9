"""Stateless pick analysis gateway."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Dict, List

import openai
from pydantic import ValidationError

from pickcopilot.agents import llm_client
from pickcopilot.agents.prompts import build_messages
from pickcopilot.api.schemas import Analysis
from pickcopilot.gateway.errors import (
    EmptyResponse,
    MalformedResponse,
    RateLimited,
    TransportError,
    UpstreamFailure,
)
from pickcopilot.picks.types import Pick

logger = logging.getLogger(__name__)

Generator = Callable[[List[Dict[str, str]]], str]


class AnalysisGateway:
    """Turns one pick into one upstream call and one validated analysis."""

    def __init__(self, generate: Generator | None = None) -> None:
        self._generate = generate or llm_client.generate_json

    def handle(self, pick: Pick) -> Analysis:
        content = self._call_upstream(build_messages(pick))
        if not content.strip():
            raise EmptyResponse()
        return self._parse(content)

    def _call_upstream(self, messages: List[Dict[str, str]]) -> str:
        try:
            return self._generate(messages)
        except openai.RateLimitError as exc:
            logger.error("LLM API rate limited: %s %s", exc.status_code, exc.response.text)
            raise RateLimited() from exc
        except openai.APIStatusError as exc:
            logger.error("LLM API error: %s %s", exc.status_code, exc.response.text)
            raise UpstreamFailure() from exc
        except openai.APITimeoutError as exc:
            logger.error("LLM API call timed out: %s", exc)
            raise UpstreamFailure() from exc
        except openai.APIConnectionError as exc:
            logger.error("LLM API unreachable: %s", exc)
            raise TransportError() from exc

    @staticmethod
    def _parse(content: str) -> Analysis:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            logger.error("LLM output is not JSON: %s", exc)
            raise MalformedResponse() from exc
        try:
            return Analysis.model_validate(data)
        except ValidationError as exc:
            logger.error("LLM output does not match the analysis schema: %s", exc)
            raise MalformedResponse() from exc

"""Thin client the composer uses to reach the analysis gateway."""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from pickcopilot.api.schemas import Analysis
from pickcopilot.config import get_settings


class AnalysisRequestError(RuntimeError):
    """Analysis could not be obtained; the message is meant for the user."""


class AnalysisClient:
    """Posts pick payloads to the gateway, one request per call."""

    def __init__(self, url: Optional[str] = None, client: Optional[httpx.Client] = None) -> None:
        settings = get_settings()
        self.url = url or settings.gateway_url
        self._client = client or httpx.Client(timeout=settings.client_timeout_seconds)

    def __enter__(self) -> "AnalysisClient":  # pragma: no cover - context sugar
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def analyze(self, payload: Dict[str, Any]) -> Analysis:
        try:
            response = self._client.post(self.url, json=payload)
        except httpx.HTTPError as exc:
            raise AnalysisRequestError("Could not reach the analysis service. Please try again.") from exc
        try:
            data = response.json()
        except ValueError as exc:
            raise AnalysisRequestError(
                f"The analysis service returned an unreadable response (HTTP {response.status_code})."
            ) from exc
        if isinstance(data, dict) and data.get("error"):
            raise AnalysisRequestError(str(data["error"]))
        if response.is_error:
            raise AnalysisRequestError(f"The analysis failed (HTTP {response.status_code}).")
        try:
            return Analysis.model_validate(data)
        except ValidationError as exc:
            raise AnalysisRequestError("The analysis service returned an incomplete analysis.") from exc

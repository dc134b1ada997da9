"""Failure classes surfaced by the analysis gateway."""

from __future__ import annotations


class GatewayError(Exception):
    """Base gateway failure; ``message`` is safe to show to the caller."""

    status_code = 500
    default_message = "The AI analysis failed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class RateLimited(GatewayError):
    status_code = 429
    default_message = "Request limit exceeded. Please try again later."


class UpstreamFailure(GatewayError):
    default_message = "The AI analysis failed."


class EmptyResponse(GatewayError):
    default_message = "No response was received from the AI model."


class MalformedResponse(GatewayError):
    default_message = "The AI model returned an analysis in an unexpected format."


class TransportError(GatewayError):
    default_message = "Could not reach the AI analysis service."

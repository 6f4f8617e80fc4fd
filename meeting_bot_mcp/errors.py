"""Failures raised by the gateway, validators and formatters.

Only the dispatcher catches these; it turns them into an error envelope.
"""

from typing import Optional


class MeetingBotError(Exception):
    """Base class for every failure the dispatcher knows how to render."""


class ValidationError(MeetingBotError):
    """Caller input is missing or malformed. Raised before any network call."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ApiError(MeetingBotError):
    """The upstream API answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"API error {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class NetworkError(MeetingBotError):
    """The request never got an HTTP answer (DNS, refused, timeout...)."""

    def __init__(self, detail: str):
        super().__init__(f"Network error: {detail}")
        self.detail = detail


class RoutingError(MeetingBotError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class UnexpectedResponseError(MeetingBotError):
    """Upstream JSON has a shape no formatter accepts."""

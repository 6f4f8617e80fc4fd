"""Route tool calls to the bot API and wrap every outcome in one envelope.

A call goes validate → request → format. Whatever fails along the way is
captured as a ``Failure`` and only turned into text by ``dispatch``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Protocol, Type, Union
from urllib.parse import quote

from pydantic import BaseModel

from meeting_bot_mcp import formatting
from meeting_bot_mcp.errors import ApiError, MeetingBotError, RoutingError
from meeting_bot_mcp.models import (
    BotIdInput,
    CreateBotInput,
    ListBotsInput,
    SendChatInput,
    SendImageInput,
    SendVideoInput,
    SpeakInput,
    ToolInput,
    validate_arguments,
)

logger = logging.getLogger(__name__)

ERROR_MARKER = "❌ Error:"

_STATUS_HINTS = {
    401: "Authentication failed. Check MEETING_BOT_API_KEY.",
    403: "Permission denied for this bot or API key.",
    404: "Resource not found. Check the bot ID is correct.",
}


class Gateway(Protocol):
    async def request(
        self, path: str, method: str = "GET", body: Optional[Dict[str, Any]] = None
    ) -> Any:
        ...


# ─── Envelope ────────────────────────────────────────────────────────────────


class TextBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """The response envelope every tool call produces."""

    content: List[TextBlock]

    @classmethod
    def from_text(cls, text: str) -> "ToolResult":
        return cls(content=[TextBlock(text=text)])

    @property
    def text(self) -> str:
        return self.content[0].text


@dataclass(frozen=True)
class Success:
    text: str


@dataclass(frozen=True)
class Failure:
    error: Exception


Outcome = Union[Success, Failure]


def render_failure(error: Exception) -> str:
    if isinstance(error, MeetingBotError):
        text = f"{ERROR_MARKER} {error}"
    else:
        text = f"{ERROR_MARKER} {type(error).__name__}: {error}"
    if isinstance(error, ApiError) and error.status_code in _STATUS_HINTS:
        text = f"{text}\n{_STATUS_HINTS[error.status_code]}"
    return text


def to_envelope(outcome: Outcome) -> ToolResult:
    if isinstance(outcome, Success):
        return ToolResult.from_text(outcome.text)
    return ToolResult.from_text(render_failure(outcome.error))


# ─── Routes ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class UpstreamRequest:
    method: str
    path: str
    body: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class Route:
    input_model: Type[ToolInput]
    build_request: Callable[[Any], UpstreamRequest]
    format: Callable[[Any, Any], str]


def _bot_path(bot_id: str, suffix: str = "") -> str:
    return f"/bots/{quote(bot_id, safe='')}{suffix}"


def _speech_body(params: SpeakInput) -> Dict[str, Any]:
    return {
        "text": params.text,
        "text_to_speech_settings": {
            "google": {
                "voice_language_code": params.voice_language_code,
                "voice_name": params.voice_name,
            }
        },
    }


ROUTES: Dict[str, Route] = {
    "create_meeting_bot": Route(
        CreateBotInput,
        lambda p: UpstreamRequest("POST", "/bots", {"meeting_url": p.meeting_url, "bot_name": p.bot_name}),
        lambda data, p: formatting.format_bot_created(data),
    ),
    "get_bot_status": Route(
        BotIdInput,
        lambda p: UpstreamRequest("GET", _bot_path(p.bot_id)),
        lambda data, p: formatting.format_bot_status(data),
    ),
    "get_meeting_transcript": Route(
        BotIdInput,
        lambda p: UpstreamRequest("GET", _bot_path(p.bot_id, "/transcript")),
        lambda data, p: formatting.format_transcript(data, p.bot_id),
    ),
    "list_meeting_bots": Route(
        ListBotsInput,
        lambda p: UpstreamRequest("GET", "/bots"),
        lambda data, p: formatting.format_bot_list(data),
    ),
    "remove_meeting_bot": Route(
        BotIdInput,
        lambda p: UpstreamRequest("POST", _bot_path(p.bot_id, "/leave"), {}),
        lambda data, p: formatting.format_bot_removed(data, p.bot_id),
    ),
    "make_bot_speak": Route(
        SpeakInput,
        lambda p: UpstreamRequest("POST", _bot_path(p.bot_id, "/speech"), _speech_body(p)),
        lambda data, p: formatting.format_speech_sent(p.bot_id, p.text, p.voice_language_code, p.voice_name),
    ),
    "send_chat_message": Route(
        SendChatInput,
        lambda p: UpstreamRequest("POST", _bot_path(p.bot_id, "/send_chat_message"), {"message": p.message}),
        lambda data, p: formatting.format_chat_sent(p.bot_id, p.message),
    ),
    "get_chat_messages": Route(
        BotIdInput,
        lambda p: UpstreamRequest("GET", _bot_path(p.bot_id, "/chat_messages")),
        lambda data, p: formatting.format_chat_messages(data, p.bot_id),
    ),
    "get_recording": Route(
        BotIdInput,
        lambda p: UpstreamRequest("GET", _bot_path(p.bot_id, "/recording")),
        lambda data, p: formatting.format_recording(data, p.bot_id),
    ),
    "send_image_to_meeting": Route(
        SendImageInput,
        lambda p: UpstreamRequest("POST", _bot_path(p.bot_id, "/output_image"), {"url": p.image_url}),
        lambda data, p: formatting.format_image_sent(p.bot_id, p.image_url),
    ),
    "send_video_to_meeting": Route(
        SendVideoInput,
        lambda p: UpstreamRequest("POST", _bot_path(p.bot_id, "/output_video"), {"url": p.video_url}),
        lambda data, p: formatting.format_video_sent(p.bot_id, p.video_url),
    ),
    "delete_bot_data": Route(
        BotIdInput,
        lambda p: UpstreamRequest("POST", _bot_path(p.bot_id, "/delete_data")),
        lambda data, p: formatting.format_data_deleted(p.bot_id),
    ),
}


# ─── Dispatcher ──────────────────────────────────────────────────────────────


class Dispatcher:
    """Turns ``(tool name, raw arguments)`` into exactly one ``ToolResult``.

    Holds no per-call state, so concurrent calls on one instance are safe.
    """

    def __init__(self, gateway: Gateway, routes: Optional[Mapping[str, Route]] = None) -> None:
        self._gateway = gateway
        self._routes = ROUTES if routes is None else routes

    async def execute(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Outcome:
        """Run one tool call, returning a typed outcome instead of raising."""
        keys = sorted(str(k) for k in arguments) if isinstance(arguments, Mapping) else []
        logger.info("%s called with: %s", name, ", ".join(keys) or "no arguments")
        try:
            route = self._routes.get(name)
            if route is None:
                raise RoutingError(name)
            params = validate_arguments(route.input_model, arguments)
            upstream = route.build_request(params)
            data = await self._gateway.request(upstream.path, upstream.method, upstream.body)
            return Success(route.format(data, params))
        except MeetingBotError as e:
            logger.warning("%s failed: %s", name, e)
            return Failure(e)
        except Exception as e:
            logger.exception("%s failed unexpectedly", name)
            return Failure(e)

    async def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        return to_envelope(await self.execute(name, arguments))

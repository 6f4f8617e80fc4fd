"""Tool input models and the upstream payload shapes they are rendered from."""

from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from meeting_bot_mcp.errors import ValidationError

DEFAULT_BOT_NAME = "Go Bot"
DEFAULT_VOICE_LANGUAGE_CODE = "en-US"
DEFAULT_VOICE_NAME = "en-US-Casual-K"

# ─── Input Models ────────────────────────────────────────────────────────────


class ToolInput(BaseModel):
    """Base for tool inputs. Keys a tool does not declare are ignored."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


class BotIdInput(ToolInput):
    """Input for tools that act on a single bot."""

    bot_id: str = Field(..., description="ID of the meeting bot", min_length=1)


class ListBotsInput(ToolInput):
    """Listing takes no parameters."""


class CreateBotInput(ToolInput):
    """Input for sending a new bot into a meeting."""

    meeting_url: str = Field(
        ...,
        description="URL of the meeting (Zoom, Google Meet, or Teams)",
        min_length=1,
    )
    bot_name: str = Field(
        default=DEFAULT_BOT_NAME,
        description=f"Name for the bot (optional, defaults to '{DEFAULT_BOT_NAME}')",
        min_length=1,
        max_length=100,
    )


class SpeakInput(ToolInput):
    """Input for text-to-speech through a bot."""

    bot_id: str = Field(..., description="ID of the bot that should speak", min_length=1)
    text: str = Field(..., description="Text for the bot to say in the meeting", min_length=1)
    voice_language_code: str = Field(
        default=DEFAULT_VOICE_LANGUAGE_CODE,
        description=f"Google TTS language code (optional, defaults to '{DEFAULT_VOICE_LANGUAGE_CODE}')",
        min_length=1,
    )
    voice_name: str = Field(
        default=DEFAULT_VOICE_NAME,
        description=f"Google TTS voice name (optional, defaults to '{DEFAULT_VOICE_NAME}')",
        min_length=1,
    )


class SendChatInput(ToolInput):
    """Input for posting a chat message as the bot."""

    bot_id: str = Field(..., description="ID of the bot that sends the message", min_length=1)
    message: str = Field(..., description="Chat message text", min_length=1)


class SendImageInput(ToolInput):
    """Input for showing an image in the meeting (Google Meet only)."""

    bot_id: str = Field(..., description="ID of the bot that shows the image", min_length=1)
    image_url: str = Field(..., description="HTTPS URL of the image to display", min_length=1)

    @field_validator("image_url")
    @classmethod
    def _require_https(cls, value: str) -> str:
        if not value.startswith("https://"):
            raise ValueError("image_url must start with https://")
        return value


class SendVideoInput(ToolInput):
    """Input for playing an MP4 video in the meeting (Google Meet only)."""

    bot_id: str = Field(..., description="ID of the bot that plays the video", min_length=1)
    video_url: str = Field(..., description="HTTPS URL of an .mp4 video", min_length=1)

    @field_validator("video_url")
    @classmethod
    def _require_https_mp4(cls, value: str) -> str:
        if not value.startswith("https://"):
            raise ValueError("video_url must start with https://")
        if not value.endswith(".mp4"):
            raise ValueError("video_url must point to an .mp4 file")
        return value


InputT = TypeVar("InputT", bound=ToolInput)


def validate_arguments(model: Type[InputT], arguments: Optional[Mapping[str, Any]]) -> InputT:
    """Validate a raw argument bag against a tool's input model.

    ``None`` values count as absent, so optional parameters fall back to their
    defaults and required ones are reported missing.

    Raises:
        ValidationError: naming the first offending parameter.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ValidationError("Tool arguments must be an object")

    present = {k: v for k, v in arguments.items() if v is not None}
    try:
        return model.model_validate(present)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else None
        ctx_error = error.get("ctx", {}).get("error")
        if isinstance(ctx_error, ValueError):
            raise ValidationError(str(ctx_error), field=field) from None
        info = model.model_fields.get(field) if field else None
        if info is not None and info.is_required():
            raise ValidationError(f"Missing or invalid required parameter: {field}", field=field) from None
        raise ValidationError(f"Invalid parameter: {field}", field=field) from None


# ─── Upstream Shapes ─────────────────────────────────────────────────────────


class UpstreamModel(BaseModel):
    """Payloads from the bot API: extra fields allowed, nothing required."""
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)


class Bot(UpstreamModel):
    id: Optional[str] = Field(default=None, validation_alias=AliasChoices("id", "bot_id"))
    meeting_url: Optional[str] = None
    state: Optional[str] = None
    transcription_state: Optional[str] = None


class TranscriptEntry(UpstreamModel):
    timestamp_ms: Optional[float] = None
    speaker_name: Optional[str] = None
    transcription: Optional[str] = None

    @field_validator("transcription", mode="before")
    @classmethod
    def _unwrap_transcription(cls, value: Any) -> Any:
        # Newer API versions nest the text as {"transcript": "...", "words": [...]}.
        if isinstance(value, dict):
            return value.get("transcript")
        return value


class LegacyTranscript(UpstreamModel):
    ready: bool = False
    transcript: Optional[str] = None
    transcription_state: Optional[str] = None


class ChatMessage(UpstreamModel):
    id: Optional[str] = None
    message: Optional[str] = None
    sender_name: Optional[str] = None
    created_at: Union[float, str, None] = Field(
        default=None, validation_alias=AliasChoices("created_at", "timestamp")
    )


class Recording(UpstreamModel):
    url: Optional[str] = None
    file_size: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("file_size", "file_size_bytes")
    )
    duration_ms: Optional[float] = None

"""Render upstream API payloads as readable text for the assistant.

Every function here is pure: same payload in, same string out. Payloads are
first normalized into the models in ``meeting_bot_mcp.models``; shapes that
fit none of them raise ``UnexpectedResponseError``.
"""

from datetime import datetime
from typing import Any, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from meeting_bot_mcp.errors import UnexpectedResponseError
from meeting_bot_mcp.models import (
    Bot,
    ChatMessage,
    LegacyTranscript,
    Recording,
    TranscriptEntry,
)

ACTIVE_STATES = frozenset({"joining", "joined", "joined_recording"})
DIVIDER = "─" * 50
MEETING_URL_PREVIEW = 50
SIZE_UNITS = ("B", "KB", "MB", "GB")

ModelT = TypeVar("ModelT", bound=BaseModel)

# ─── Normalization ───────────────────────────────────────────────────────────


def _parse(model: Type[ModelT], data: Any) -> ModelT:
    if not isinstance(data, dict):
        raise UnexpectedResponseError(
            f"Expected a JSON object for {model.__name__}, got {type(data).__name__}"
        )
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        error = e.errors()[0]
        where = ".".join(str(part) for part in error["loc"]) or "payload"
        raise UnexpectedResponseError(
            f"Malformed {model.__name__} in API response: {where}: {error['msg']}"
        ) from None


def _parse_list(model: Type[ModelT], items: Any) -> List[ModelT]:
    if not isinstance(items, list):
        raise UnexpectedResponseError(
            f"Expected a JSON array of {model.__name__}, got {type(items).__name__}"
        )
    return [_parse(model, item) for item in items]


def normalize_bots(data: Any) -> List[Bot]:
    """Accept a bare list of bots or an object wrapping one under ``bots``
    (or ``results`` for paginated responses)."""
    if isinstance(data, list):
        return _parse_list(Bot, data)
    if isinstance(data, dict):
        for key in ("bots", "results"):
            if key in data:
                return _parse_list(Bot, data[key] or [])
        return []
    raise UnexpectedResponseError(f"Expected a list of bots, got {type(data).__name__}")


def normalize_transcript(data: Any) -> Union[List[TranscriptEntry], LegacyTranscript]:
    """Current API: a list of utterances. Legacy API: one object with
    ``ready``, ``transcript`` and ``transcription_state``."""
    if isinstance(data, list):
        return _parse_list(TranscriptEntry, data)
    if isinstance(data, dict):
        return _parse(LegacyTranscript, data)
    raise UnexpectedResponseError(f"Expected a transcript, got {type(data).__name__}")


def normalize_chat_messages(data: Any) -> List[ChatMessage]:
    if isinstance(data, dict) and "results" in data:
        data = data["results"] or []
    return _parse_list(ChatMessage, data)


# ─── Value Helpers ───────────────────────────────────────────────────────────


def is_active(state: Optional[str]) -> bool:
    """Unknown states count as inactive."""
    return state in ACTIVE_STATES


def _state_icon(state: Optional[str]) -> str:
    return "✅" if is_active(state) else "❌"


def _transcript_icon(transcription_state: Optional[str]) -> str:
    return "✅" if transcription_state == "complete" else "⏳"


def _show(value: Any) -> str:
    return "?" if value is None else str(value)


def format_timestamp(timestamp_ms: Optional[float]) -> str:
    """Milliseconds from meeting start as ``MM:SS``. A missing value is 00:00."""
    seconds = (timestamp_ms or 0) / 1000
    return f"{int(seconds // 60):02d}:{int(seconds % 60):02d}"


def format_file_size(size: Optional[float]) -> str:
    if size is None:
        return "Unknown size"
    if size <= 0:
        return "0 B"
    exponent = 0
    while size >= 1024 ** (exponent + 1) and exponent < len(SIZE_UNITS) - 1:
        exponent += 1
    value = round(size / 1024 ** exponent, 2)
    number = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{number} {SIZE_UNITS[exponent]}"


def format_duration(duration_ms: Optional[float]) -> str:
    if duration_ms is None:
        return "Unknown duration"
    total = int(duration_ms // 1000)
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def format_message_time(created_at: Union[float, str, None]) -> str:
    """Local wall-clock time of a chat message.

    Accepts unix seconds or an ISO-8601 string; anything unparseable is shown
    as received.
    """
    if created_at is None:
        return "??:??:??"
    if isinstance(created_at, (int, float)):
        moment = datetime.fromtimestamp(created_at).astimezone()
    else:
        try:
            moment = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
        except ValueError:
            return created_at
        if moment.tzinfo is not None:
            moment = moment.astimezone()
    return moment.strftime("%H:%M:%S")


# ─── Bot Formatters ──────────────────────────────────────────────────────────


def format_bot_status(data: Any) -> str:
    """Status of a single bot; also used for the bot returned after leaving."""
    bot = _parse(Bot, data)
    active = is_active(bot.state)
    ready = bot.transcription_state == "complete"
    state_icon = _state_icon(bot.state)
    transcript_icon = _transcript_icon(bot.transcription_state)

    return "\n".join([
        f"🤖 Bot Status for {_show(bot.id)}:",
        "",
        f"📊 State: {_show(bot.state)} {state_icon}",
        f"📝 Transcription State: {_show(bot.transcription_state)} {transcript_icon}",
        f"🔗 Meeting URL: {_show(bot.meeting_url)}",
        "",
        f"{state_icon} Bot is {'active and recording' if active else 'not active'}",
        f"{transcript_icon} Transcript is {'ready' if ready else 'not ready yet'}",
    ])


def format_bot_removed(data: Any, bot_id: str) -> str:
    return f"👋 Bot {bot_id} is leaving the meeting.\n\n{format_bot_status(data)}"


def format_bot_created(data: Any) -> str:
    bot = _parse(Bot, data)
    return "\n".join([
        "✅ Successfully created meeting bot!",
        "",
        f"🤖 Bot ID: {_show(bot.id)}",
        f"🔗 Meeting URL: {_show(bot.meeting_url)}",
        f"📊 State: {_show(bot.state)}",
        f"📝 Transcription State: {_show(bot.transcription_state)}",
        "",
        f"💡 You can check the bot status using bot ID: {_show(bot.id)}",
    ])


def _format_bot_line(index: int, bot: Bot) -> str:
    url = bot.meeting_url or ""
    if len(url) > MEETING_URL_PREVIEW:
        url = f"{url[:MEETING_URL_PREVIEW]}..."
    return (
        f"{index}. Bot ID: {_show(bot.id)}\n"
        f"   📊 State: {_show(bot.state)} {_state_icon(bot.state)}\n"
        f"   📝 Transcription: {_show(bot.transcription_state)} {_transcript_icon(bot.transcription_state)}\n"
        f"   🔗 Meeting: {url}"
    )


def format_bot_list(data: Any) -> str:
    bots = normalize_bots(data)
    if not bots:
        return "📋 No active meeting bots found."
    lines = "\n\n".join(_format_bot_line(i, bot) for i, bot in enumerate(bots, start=1))
    return f"📋 Active Meeting Bots ({len(bots)}):\n\n{lines}"


# ─── Transcript & Chat ───────────────────────────────────────────────────────


def format_transcript(data: Any, bot_id: str) -> str:
    transcript = normalize_transcript(data)
    if isinstance(transcript, LegacyTranscript):
        return _format_legacy_transcript(transcript, bot_id)

    if not transcript:
        return f"❌ No transcript available for bot {bot_id}"

    parts = [f"📝 Meeting Transcript for bot {bot_id}:\n", DIVIDER]
    for entry in transcript:
        speaker = entry.speaker_name or "Unknown speaker"
        parts.append(
            f"[{format_timestamp(entry.timestamp_ms)}] {speaker}:\n{entry.transcription or ''}\n"
        )
    parts.append(DIVIDER)
    parts.append(f"📊 Total entries: {len(transcript)}")
    return "\n".join(parts)


def _format_legacy_transcript(transcript: LegacyTranscript, bot_id: str) -> str:
    if transcript.ready and transcript.transcript:
        return "\n".join([
            f"📝 Meeting Transcript for bot {bot_id}:",
            "",
            DIVIDER,
            transcript.transcript,
            DIVIDER,
        ])

    state_icon = "🔄" if transcript.transcription_state == "in_progress" else "⏳"
    return "\n".join([
        f"{state_icon} Transcript not ready for bot {bot_id}",
        f"Current transcription state: {_show(transcript.transcription_state)}",
        "",
        "💡 The transcript will be available after the meeting ends and processing completes.",
    ])


def format_chat_messages(data: Any, bot_id: str) -> str:
    messages = normalize_chat_messages(data)
    if not messages:
        return f"💬 No chat messages found for bot {bot_id}"

    parts = [f"💬 Chat Messages for bot {bot_id}:\n", DIVIDER]
    for msg in messages:
        sender = msg.sender_name or "Unknown sender"
        parts.append(f"[{format_message_time(msg.created_at)}] {sender}:\n{msg.message or ''}\n")
    parts.append(DIVIDER)
    parts.append(f"📊 Total messages: {len(messages)}")
    return "\n".join(parts)


# ─── Recording & Data ────────────────────────────────────────────────────────


def format_recording(data: Any, bot_id: str) -> str:
    recording = _parse(Recording, data)
    if not recording.url:
        return f"❌ No recording available for bot {bot_id}"
    return "\n".join([
        f"🎥 Recording for bot {bot_id}:",
        "",
        f"🔗 URL: {recording.url}",
        f"📦 Size: {format_file_size(recording.file_size)}",
        f"⏱️ Duration: {format_duration(recording.duration_ms)}",
    ])


def format_data_deleted(bot_id: str) -> str:
    return "\n".join([
        f"🗑️ Successfully deleted data for bot {bot_id}",
        "",
        "Deleted:",
        "  • Recordings",
        "  • Transcripts",
        "  • Chat messages",
        "  • Participant information",
        "",
        "💡 The bot record itself is kept, so its status can still be checked.",
    ])


# ─── Action Confirmations ────────────────────────────────────────────────────


def format_speech_sent(bot_id: str, text: str, voice_language_code: str, voice_name: str) -> str:
    return "\n".join([
        f"🔊 Bot {bot_id} is speaking:",
        f"\"{text}\"",
        "",
        f"🗣️ Voice: {voice_name} ({voice_language_code})",
    ])


def format_chat_sent(bot_id: str, message: str) -> str:
    return f"💬 Chat message sent by bot {bot_id}:\n\"{message}\""


def format_image_sent(bot_id: str, image_url: str) -> str:
    return "\n".join([
        f"🖼️ Image sent to the meeting by bot {bot_id}",
        f"🔗 Image URL: {image_url}",
        "",
        "💡 Image output is supported for Google Meet only.",
    ])


def format_video_sent(bot_id: str, video_url: str) -> str:
    return "\n".join([
        f"🎬 Video playing in the meeting via bot {bot_id}",
        f"🔗 Video URL: {video_url}",
        "",
        "💡 Video output is supported for Google Meet only.",
    ])

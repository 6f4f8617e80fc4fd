"""Shared fixtures: a recording fake gateway and sample API payloads."""

import pytest

from meeting_bot_mcp.dispatcher import Dispatcher

BOT = {
    "id": "bot_abc123",
    "meeting_url": "https://meet.google.com/abc-defg-hij",
    "state": "joined_recording",
    "transcription_state": "in_progress",
}

VALID_ARGS = {
    "create_meeting_bot": {"meeting_url": "https://meet.google.com/abc-defg-hij"},
    "get_bot_status": {"bot_id": "bot_abc123"},
    "get_meeting_transcript": {"bot_id": "bot_abc123"},
    "list_meeting_bots": {},
    "remove_meeting_bot": {"bot_id": "bot_abc123"},
    "make_bot_speak": {"bot_id": "bot_abc123", "text": "Hello everyone"},
    "send_chat_message": {"bot_id": "bot_abc123", "message": "Notes are ready"},
    "get_chat_messages": {"bot_id": "bot_abc123"},
    "get_recording": {"bot_id": "bot_abc123"},
    "send_image_to_meeting": {"bot_id": "bot_abc123", "image_url": "https://example.com/chart.png"},
    "send_video_to_meeting": {"bot_id": "bot_abc123", "video_url": "https://example.com/demo.mp4"},
    "delete_bot_data": {"bot_id": "bot_abc123"},
}

RESPONSES = {
    "create_meeting_bot": BOT,
    "get_bot_status": BOT,
    "get_meeting_transcript": [
        {"timestamp_ms": 65000, "speaker_name": "Alice", "transcription": "hi"},
    ],
    "list_meeting_bots": [BOT],
    "remove_meeting_bot": dict(BOT, state="leaving"),
    "make_bot_speak": {},
    "send_chat_message": {},
    "get_chat_messages": [
        {"id": "msg_1", "message": "hello", "sender_name": "Bob", "created_at": "2025-01-15T10:30:00Z"},
    ],
    "get_recording": {"url": "https://storage.example.com/rec.mp4", "file_size": 1536, "duration_ms": 61000},
    "send_image_to_meeting": {},
    "send_video_to_meeting": {},
    "delete_bot_data": BOT,
}


class FakeGateway:
    """Stands in for MeetingBotClient and records every request."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def request(self, path, method="GET", body=None):
        self.calls.append((method, path, body))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def dispatcher(gateway):
    return Dispatcher(gateway)

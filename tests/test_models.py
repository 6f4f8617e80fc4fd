"""Tests for tool input validation."""

import pytest

from meeting_bot_mcp.errors import ValidationError
from meeting_bot_mcp.models import (
    BotIdInput,
    CreateBotInput,
    ListBotsInput,
    SendImageInput,
    SendVideoInput,
    SpeakInput,
    validate_arguments,
)


class TestValidateArguments:
    def test_defaults_fill_optional_params(self):
        params = validate_arguments(SpeakInput, {"bot_id": "bot_1", "text": "Hello"})

        assert params.voice_language_code == "en-US"
        assert params.voice_name == "en-US-Casual-K"

    def test_strips_whitespace(self):
        params = validate_arguments(BotIdInput, {"bot_id": "  bot_1  "})

        assert params.bot_id == "bot_1"

    def test_none_arguments_for_parameterless_tool(self):
        assert isinstance(validate_arguments(ListBotsInput, None), ListBotsInput)

    def test_non_mapping_arguments(self):
        with pytest.raises(ValidationError, match="must be an object"):
            validate_arguments(BotIdInput, ["bot_1"])

    @pytest.mark.parametrize("args", [{}, {"meeting_url": None}, {"meeting_url": 7}, {"meeting_url": ""}])
    def test_required_param_message(self, args):
        with pytest.raises(ValidationError) as exc_info:
            validate_arguments(CreateBotInput, args)

        assert str(exc_info.value) == "Missing or invalid required parameter: meeting_url"
        assert exc_info.value.field == "meeting_url"

    def test_invalid_optional_param_message(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_arguments(CreateBotInput, {"meeting_url": "https://zoom.us/j/1", "bot_name": 5})

        assert str(exc_info.value) == "Invalid parameter: bot_name"


class TestMediaUrls:
    @pytest.mark.parametrize("url", ["http://a.com/x.png", "ftp://a.com/x.png", "a.com/x.png"])
    def test_image_requires_https(self, url):
        with pytest.raises(ValidationError, match="must start with https://"):
            validate_arguments(SendImageInput, {"bot_id": "b", "image_url": url})

    def test_image_any_https_url(self):
        params = validate_arguments(SendImageInput, {"bot_id": "b", "image_url": "https://a.com/x"})

        assert params.image_url == "https://a.com/x"

    def test_video_https_and_mp4(self):
        params = validate_arguments(SendVideoInput, {"bot_id": "b", "video_url": "https://x.com/a.mp4"})

        assert params.video_url == "https://x.com/a.mp4"

    def test_video_wrong_scheme(self):
        with pytest.raises(ValidationError, match="must start with https://"):
            validate_arguments(SendVideoInput, {"bot_id": "b", "video_url": "http://x.com/a.mp4"})

    def test_video_wrong_extension(self):
        with pytest.raises(ValidationError, match=r"\.mp4"):
            validate_arguments(SendVideoInput, {"bot_id": "b", "video_url": "https://x.com/a.webm"})

"""Declarative catalog of the tools this server exposes.

Parameter schemas are derived from the same input models the dispatcher
validates with, so what the assistant is told and what is enforced match.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Type

from meeting_bot_mcp.models import (
    BotIdInput,
    CreateBotInput,
    ListBotsInput,
    SendChatInput,
    SendImageInput,
    SendVideoInput,
    SpeakInput,
    ToolInput,
)

_JSON_TYPES = {str: "string", int: "integer", float: "number", bool: "boolean"}

READ_ONLY = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "idempotentHint": True,
    "openWorldHint": True,
}
WRITE = {
    "readOnlyHint": False,
    "destructiveHint": False,
    "idempotentHint": False,
    "openWorldHint": True,
}
DESTRUCTIVE = {
    "readOnlyHint": False,
    "destructiveHint": True,
    "idempotentHint": True,
    "openWorldHint": True,
}


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    type: str
    required: bool
    description: Optional[str] = None
    default: Any = None


@dataclass(frozen=True)
class ToolDefinition:
    """One tool as advertised to MCP clients."""

    name: str
    title: str
    description: str
    input_model: Type[ToolInput]
    annotations: Dict[str, bool] = field(default_factory=dict)

    def parameters(self) -> List[ParameterSpec]:
        """Declared parameters in model field order."""
        specs = []
        for name, info in self.input_model.model_fields.items():
            required = info.is_required()
            specs.append(
                ParameterSpec(
                    name=name,
                    type=_JSON_TYPES.get(info.annotation, "string"),
                    required=required,
                    description=info.description,
                    default=None if required else info.default,
                )
            )
        return specs

    def input_schema(self) -> Dict[str, Any]:
        """JSON schema for the tool's arguments."""
        properties: Dict[str, Any] = {}
        required: List[str] = []
        for spec in self.parameters():
            prop: Dict[str, Any] = {"type": spec.type}
            if spec.description:
                prop["description"] = spec.description
            if spec.required:
                required.append(spec.name)
            else:
                prop["default"] = spec.default
            properties[spec.name] = prop
        return {"type": "object", "properties": properties, "required": required}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "inputSchema": self.input_schema(),
            "annotations": dict(self.annotations, title=self.title),
        }


TOOLS: Tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name="create_meeting_bot",
        title="Create Meeting Bot",
        description="Create a bot to join a meeting and record/transcribe it",
        input_model=CreateBotInput,
        annotations=WRITE,
    ),
    ToolDefinition(
        name="get_bot_status",
        title="Get Bot Status",
        description="Get the current status of a meeting bot",
        input_model=BotIdInput,
        annotations=READ_ONLY,
    ),
    ToolDefinition(
        name="get_meeting_transcript",
        title="Get Meeting Transcript",
        description="Get the transcript from a meeting bot",
        input_model=BotIdInput,
        annotations=READ_ONLY,
    ),
    ToolDefinition(
        name="list_meeting_bots",
        title="List Meeting Bots",
        description="List all active meeting bots",
        input_model=ListBotsInput,
        annotations=READ_ONLY,
    ),
    ToolDefinition(
        name="remove_meeting_bot",
        title="Remove Meeting Bot",
        description="Remove a bot from a meeting",
        input_model=BotIdInput,
        annotations=DESTRUCTIVE,
    ),
    ToolDefinition(
        name="make_bot_speak",
        title="Make Bot Speak",
        description="Make a bot say something in the meeting using text-to-speech",
        input_model=SpeakInput,
        annotations=WRITE,
    ),
    ToolDefinition(
        name="send_chat_message",
        title="Send Chat Message",
        description="Send a chat message to the meeting from the bot",
        input_model=SendChatInput,
        annotations=WRITE,
    ),
    ToolDefinition(
        name="get_chat_messages",
        title="Get Chat Messages",
        description="Get the chat messages posted in the meeting",
        input_model=BotIdInput,
        annotations=READ_ONLY,
    ),
    ToolDefinition(
        name="get_recording",
        title="Get Recording",
        description="Get the recording URL, size and duration for a meeting bot",
        input_model=BotIdInput,
        annotations=READ_ONLY,
    ),
    ToolDefinition(
        name="send_image_to_meeting",
        title="Send Image to Meeting",
        description="Display an image in the meeting through the bot's camera (Google Meet only, HTTPS URLs)",
        input_model=SendImageInput,
        annotations=WRITE,
    ),
    ToolDefinition(
        name="send_video_to_meeting",
        title="Send Video to Meeting",
        description="Play an MP4 video in the meeting through the bot (Google Meet only, HTTPS .mp4 URLs)",
        input_model=SendVideoInput,
        annotations=WRITE,
    ),
    ToolDefinition(
        name="delete_bot_data",
        title="Delete Bot Data",
        description="Permanently delete a bot's recordings, transcripts, chat messages and participant data",
        input_model=BotIdInput,
        annotations=DESTRUCTIVE,
    ),
)

_BY_NAME: Dict[str, ToolDefinition] = {tool.name: tool for tool in TOOLS}


def get_tool(name: str) -> Optional[ToolDefinition]:
    return _BY_NAME.get(name)


def list_tools() -> List[Dict[str, Any]]:
    """The full catalog as plain data, in declaration order."""
    return [tool.to_dict() for tool in TOOLS]

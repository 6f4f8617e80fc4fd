"""Tests for the MCP server wiring."""

import mcp.types as types

from meeting_bot_mcp.catalog import TOOLS
from meeting_bot_mcp.dispatcher import ERROR_MARKER
from meeting_bot_mcp.server import SERVER_NAME, create_server


class TestServer:
    def test_registers_tool_handlers(self, dispatcher):
        server = create_server(dispatcher)

        assert server.name == SERVER_NAME
        assert types.ListToolsRequest in server.request_handlers
        assert types.CallToolRequest in server.request_handlers

    async def test_list_tools_exposes_catalog(self, dispatcher):
        server = create_server(dispatcher)
        handler = server.request_handlers[types.ListToolsRequest]

        result = await handler(types.ListToolsRequest(method="tools/list"))

        tools = result.root.tools
        assert [tool.name for tool in tools] == [tool.name for tool in TOOLS]
        create = next(tool for tool in tools if tool.name == "create_meeting_bot")
        assert create.inputSchema["required"] == ["meeting_url"]

    async def test_call_tool_failures_come_back_as_one_text_block(self, dispatcher, gateway):
        server = create_server(dispatcher)
        handler = server.request_handlers[types.CallToolRequest]

        for name, arguments, expected in [
            ("launch_rocket", {}, "Unknown tool: launch_rocket"),
            ("get_bot_status", {}, "Missing or invalid required parameter: bot_id"),
        ]:
            request = types.CallToolRequest(
                method="tools/call",
                params=types.CallToolRequestParams(name=name, arguments=arguments),
            )
            result = await handler(request)

            content = result.root.content
            assert len(content) == 1
            assert content[0].type == "text"
            assert content[0].text == f"{ERROR_MARKER} {expected}"

        assert gateway.calls == []

    async def test_call_tool_success(self, dispatcher, gateway):
        gateway.response = []
        server = create_server(dispatcher)
        handler = server.request_handlers[types.CallToolRequest]

        result = await handler(types.CallToolRequest(
            method="tools/call",
            params=types.CallToolRequestParams(name="list_meeting_bots", arguments={}),
        ))

        assert [block.text for block in result.root.content] == ["📋 No active meeting bots found."]

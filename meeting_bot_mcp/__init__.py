"""Meeting Bot MCP Server.

Exposes a meeting-bot management API (create, control and inspect bots that
join Zoom, Google Meet and Teams calls) as MCP tools.
"""

__version__ = "1.0.0"

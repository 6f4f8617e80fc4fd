from meeting_bot_mcp.server import main

main()

"""MCP tools exposed by the MagnetCraft admin server."""

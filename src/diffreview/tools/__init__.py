"""MCP tool servers exposed to the review agent."""

"""MathRelay — natural-language math over HTTP/SSE and MCP tools."""

__version__ = "0.1.0"

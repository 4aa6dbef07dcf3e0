"""Tests for the MCP tool server: registration and formatted tool output.

Run:  uv run pytest tests/test_server.py
"""

import asyncio

import pytest

from mathrelay import server
from mathrelay.errors import DomainError, FactorialOverflowError, InvalidArgumentError


def test_tools_registered():
    names = {tool.name for tool in asyncio.run(server.mcp.list_tools())}
    assert {"log", "factorial", "power", "sqrt", "gcd", "is_prime", "trigonometry",
            "solve_query", "weather-forecast"} <= names


def test_trigonometry_schema_is_enum():
    tools = {tool.name: tool for tool in asyncio.run(server.mcp.list_tools())}
    schema = tools["trigonometry"].inputSchema
    assert schema["properties"]["function"]["enum"] == ["sin", "cos", "tan", "asin", "acos", "atan"]
    assert "base" not in tools["log"].inputSchema.get("required", [])


@pytest.mark.parametrize("fn, args, expected", [
    (server.factorial_tool, (5,), "5! = 120"),
    (server.log_tool, (8, 2), "log_2(8) = 3"),
    (server.log_tool, (1,), "ln(1) = 0"),
    (server.power_tool, (2, 10), "2^10 = 1024"),
    (server.sqrt_tool, (16,), "√16 = 4"),
    (server.gcd_tool, (12, 18), "gcd(12, 18) = 6"),
    (server.is_prime_tool, (7,), "7 is prime"),
    (server.is_prime_tool, (9,), "9 is not prime"),
    (server.trigonometry_tool, (0, "sin"), "sin(0) = 0"),
    (server.solve_query_tool, ("derivative of x^2",), "diff(x^2, x) = 2*x"),
])
def test_tool_output(fn, args, expected):
    assert fn(*args) == expected


def test_tool_errors_raise():
    with pytest.raises(FactorialOverflowError):
        server.factorial_tool(171)
    with pytest.raises(DomainError):
        server.sqrt_tool(-4)
    with pytest.raises(InvalidArgumentError):
        server.trigonometry_tool(0, "cot")

"""MathRelay — MCP tool server.

Run:   uv run python -m mathrelay.server [--transport stdio|sse|streamable-http]
Test:  uv run mcp dev mathrelay/server.py
"""

import argparse
import logging
from typing import Literal

from mcp.server.fastmcp import FastMCP

from .config import config
from .tools import numeric
from .tools.evaluator import solve_query
from .tools.weather import weather_report

logger = logging.getLogger(__name__)

mcp = FastMCP(
    name="MathRelay",
    instructions=(
        "You have access to deterministic math tools: factorial, power, sqrt, gcd, "
        "is_prime, trigonometry and log, plus a free-text solver and a weather lookup. "
        "ALWAYS use these tools for computation. Be concise."
    ),
)


def _num(value) -> str:
    """Render floats without a trailing .0 when they are whole."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def factorial_tool(n: int) -> str:
    """Factorial of a non-negative integer up to 170."""
    return f"{n}! = {numeric.factorial(n)}"


def log_tool(n: float, base: float = None) -> str:
    """Logarithm of a positive number. Natural log when base is omitted."""
    result = numeric.log(n, base)
    if base is None:
        return f"ln({_num(n)}) = {_num(result)}"
    return f"log_{_num(base)}({_num(n)}) = {_num(result)}"


def power_tool(base: float, exponent: float) -> str:
    """Raise base to exponent."""
    return f"{_num(base)}^{_num(exponent)} = {_num(numeric.power(base, exponent))}"


def sqrt_tool(n: float) -> str:
    """Square root of a non-negative number."""
    return f"√{_num(n)} = {_num(numeric.sqrt(n))}"


def gcd_tool(a: int, b: int) -> str:
    """Greatest common divisor of two integers."""
    return f"gcd({a}, {b}) = {numeric.gcd(a, b)}"


def is_prime_tool(n: int) -> str:
    """Check whether an integer is prime."""
    verdict = "is prime" if numeric.is_prime(n) else "is not prime"
    return f"{n} {verdict}"


def trigonometry_tool(angle: float,
                      function: Literal["sin", "cos", "tan", "asin", "acos", "atan"]) -> str:
    """Trigonometric function of an angle in radians (asin/acos take a value in [-1, 1])."""
    return f"{function}({_num(angle)}) = {_num(numeric.trigonometry(angle, function))}"


def solve_query_tool(query: str) -> str:
    """Solve a free-text question such as 'derivative of x^2' or 'factorial of 5'."""
    out = solve_query(query)
    return f"{out['parsedExpression']} = {out['result']}"


def weather_tool(City: str) -> str:
    """Current weather conditions for a city."""
    return weather_report(City)


# (function, name, title) — descriptions come from the docstrings
TOOLS = [
    (factorial_tool, "factorial", "Factorial"),
    (log_tool, "log", "Logarithm"),
    (power_tool, "power", "Power"),
    (sqrt_tool, "sqrt", "Square Root"),
    (gcd_tool, "gcd", "Greatest Common Divisor"),
    (is_prime_tool, "is_prime", "Primality Test"),
    (trigonometry_tool, "trigonometry", "Trigonometry"),
    (solve_query_tool, "solve_query", "Free-text Math"),
    (weather_tool, "weather-forecast", "Weather Forecast"),
]

for fn, name, title in TOOLS:
    mcp.tool(name=name, title=title)(fn)


def main():
    parser = argparse.ArgumentParser(description="MathRelay MCP server")
    parser.add_argument("--transport", choices=["stdio", "sse", "streamable-http"],
                        default=config.mcp_transport)
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger.info("Starting MathRelay MCP server (%s)", args.transport)
    mcp.run(transport=args.transport)


if __name__ == "__main__":
    main()

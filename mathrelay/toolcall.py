"""Remote tool-call demo: let a chat model pick a math tool, then run its call.

The model sees the free-text math endpoint plus the typed numeric tools.
Free-text calls are POSTed to the HTTP endpoint; typed calls run locally.

Run:  uv run python -m mathrelay.toolcall --prompt "Use this tool to solve: derivative of x^3 + 2x"
"""

import argparse
import json
import logging

import requests

from . import server
from .config import config
from .core import build_schema, chat_request, first_tool_call
from .errors import CalculatorError, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "Use this tool to solve: derivative of x^3 + 2x"

NUMERIC_TOOLS = ("factorial", "log", "power", "sqrt", "gcd", "is_prime", "trigonometry")


def call_endpoint(arguments: dict, endpoint: str, timeout: int) -> dict:
    try:
        resp = requests.post(endpoint, json=arguments, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise UpstreamError(f"Math endpoint {endpoint} failed: {e}")
    try:
        data = resp.json()
    except ValueError:
        raise UpstreamError(f"Math endpoint {endpoint} returned a non-JSON body (HTTP {resp.status_code})")
    if not resp.ok:
        error = data.get("error") if isinstance(data, dict) else data
        raise UpstreamError(f"Math endpoint returned HTTP {resp.status_code}: {error}")
    return data


def build_tools(endpoint: str, timeout: int) -> dict:
    """Name → callable for every tool offered to the model."""

    def math_query(query: str) -> dict:
        """Math query tool.

        Solves math using a custom MCP server. Accepts free text such as
        'factorial of 5', 'derivative of x^2', 'integral of 3x^2' or 'solve x^2 - 4'.
        """
        return call_endpoint({"query": query}, endpoint, timeout)

    tools = {"math_query": math_query}
    tools.update({name: fn for fn, name, _ in server.TOOLS if name in NUMERIC_TOOLS})
    return tools


def run(prompt: str, endpoint: str, model: str = None):
    """Ask the model and run the tool it calls. Returns the tool result, or None."""
    tools = build_tools(endpoint, config.http_timeout)
    schemas = [build_schema(fn, name) for name, fn in tools.items()]
    response = chat_request([{"role": "user", "content": prompt}], schemas, config, model=model)
    call = first_tool_call(response)
    if call is None:
        return None
    name, arguments = call
    logger.info("Tool call received: %s %s", name, arguments)
    if name not in tools:
        raise UpstreamError(f"Model called unknown tool '{name}'")
    try:
        return tools[name](**arguments)
    except CalculatorError:
        raise
    except TypeError as e:
        raise UpstreamError(f"Bad arguments for {name}: {e}") from e


def main():
    parser = argparse.ArgumentParser(description="Chat-completion tool-call demo")
    parser.add_argument("--prompt", default=DEFAULT_PROMPT)
    parser.add_argument("--endpoint", default=config.math_endpoint)
    parser.add_argument("--model", default=config.openrouter_model)
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    try:
        result = run(args.prompt, args.endpoint, args.model)
    except CalculatorError as e:
        logger.error("Error: %s", e)
        raise SystemExit(1)
    if result is None:
        print("No tool call made by the LLM.")
        return
    print("Tool result:")
    print(json.dumps(result, indent=2) if isinstance(result, dict) else result)


if __name__ == "__main__":
    main()

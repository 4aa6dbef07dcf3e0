"""Staged query processing shared by the SSE endpoint and the Gradio UI."""

from typing import NamedTuple

from .errors import CalculatorError
from .tools.evaluator import evaluate
from .tools.parser import classify_and_build, normalize


class Stage(NamedTuple):
    event: str
    data: str


def iter_stages(query, max_length: int = None):
    """Yield received → parsed → result → done, or an error stage and stop.

    Lazy: parsing runs only once the received stage has been consumed, and
    evaluation only after the parsed stage.
    """
    try:
        normalize(query)
    except CalculatorError as e:
        yield Stage("error", str(e))
        return

    yield Stage("message", f"Received: {query}")
    try:
        parsed = classify_and_build(query)
        yield Stage("message", f"Parsed as: {parsed}")
        result = evaluate(parsed, max_length)
    except CalculatorError as e:
        yield Stage("error", str(e))
        return
    yield Stage("message", f"Result: {result}")
    yield Stage("done", "done")

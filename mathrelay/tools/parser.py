"""Keyword parser — rewrites free-text math questions into SymPy call strings.

Handles:  "factorial of 5"     → factorial(5)
          "log 2.5"            → log(2.5)
          "derivative of x^2"  → diff(x^2, x)
          "integral of 3x^2"   → integrate(3x^2, x)
          "solve x^2 - 4"      → x^2 - 4
Anything without a trigger keyword is handed to the evaluator as-is.
"""

import re
from enum import Enum
from typing import NamedTuple

from ..errors import ExtractionError, MissingInputError


class Trigger(Enum):
    FACTORIAL = "factorial"
    LOG = "log"
    DERIVATIVE = "derivative"
    INTEGRAL = "integral"
    SOLVE = "solve"
    NONE = "none"


class Rule(NamedTuple):
    trigger: Trigger
    pattern: re.Pattern
    template: str


# Integer-or-decimal, shared by every numeric trigger
_NUMBER = re.compile(r"\d+(?:\.\d+)?")
_AFTER_OF = re.compile(r"of (.+)")
_AFTER_SOLVE = re.compile(r"solve (.+)")

# Checked top to bottom; the first keyword contained in the query wins.
RULES = (
    Rule(Trigger.FACTORIAL, _NUMBER, "factorial({})"),
    Rule(Trigger.LOG, _NUMBER, "log({})"),
    Rule(Trigger.DERIVATIVE, _AFTER_OF, "diff({}, x)"),
    Rule(Trigger.INTEGRAL, _AFTER_OF, "integrate({}, x)"),
    Rule(Trigger.SOLVE, _AFTER_SOLVE, "{}"),
)


def normalize(query) -> str:
    """Lowercase and trim a query. Blank or missing input is rejected."""
    if query is None:
        raise MissingInputError("Missing query")
    s = str(query).strip().lower()
    if not s:
        raise MissingInputError("Missing query")
    return s


def _match_rule(query: str):
    for rule in RULES:
        if rule.trigger.value in query:
            return rule
    return None


def classify(query) -> Trigger:
    rule = _match_rule(normalize(query))
    return rule.trigger if rule else Trigger.NONE


def _extract(rule: Rule, query: str) -> str:
    m = rule.pattern.search(query)
    if not m:
        raise ExtractionError(f"could not extract operand for {rule.trigger.value}")
    # Numeric patterns have no group; "of"/"solve" patterns capture the remainder
    fragment = m.group(1) if rule.pattern.groups else m.group(0)
    fragment = fragment.strip()
    if not fragment:
        raise ExtractionError(f"could not extract operand for {rule.trigger.value}")
    return fragment


def classify_and_build(query) -> str:
    """Turn a free-text query into the expression string handed to SymPy.

    Raises MissingInputError for blank input and ExtractionError when a trigger
    keyword is present but its operand is not.
    """
    s = normalize(query)
    rule = _match_rule(s)
    if rule is None:
        return s
    return rule.template.format(_extract(rule, s))

"""Symbolic evaluator — hands built expressions to SymPy's parse_expr.

Implicit multiplication and ^ → ** are applied, so "diff(2(x+1)^2, x)" works.
parse_expr runs the expression through eval, so every expression is screened
first: no private/dunder names, no attribute access, no string literals, and
no factorial or power whose exact value would be enormous.
"""

import io
import logging
import math
import tokenize

import sympy
from sympy.core.parameters import evaluate as sympy_evaluate
from sympy.parsing.sympy_parser import (
    parse_expr,
    standard_transformations,
    implicit_multiplication,
    convert_xor,
)

from ..config import config as default_config
from ..errors import EvaluationError
from .parser import classify_and_build

logger = logging.getLogger(__name__)

_TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication,
    convert_xor,
)

# Names an expression may call; anything else becomes a Symbol or an undefined Function.
# Builtins are emptied so eval cannot reach open, exec, chr and friends.
_ALLOWED = (
    # needed by the parser transformations
    "Symbol", "Function", "Integer", "Float", "Rational", "Add", "Mul", "Pow",
    "Lambda", "Tuple", "factorial", "factorial2",
    # calculus and algebra
    "diff", "integrate", "limit", "series", "summation", "Derivative", "Integral",
    "solve", "simplify", "expand", "factor", "apart", "trigsimp", "Eq",
    # functions and constants
    "sqrt", "cbrt", "root", "exp", "log", "ln", "binomial", "gamma",
    "sin", "cos", "tan", "cot", "sec", "csc", "asin", "acos", "atan", "atan2",
    "sinh", "cosh", "tanh", "Abs", "sign", "floor", "ceiling", "Min", "Max",
    "gcd", "lcm", "isprime", "mod_inverse",
    "pi", "E", "I", "oo", "zoo", "nan",
)
_NAMESPACE = {name: getattr(sympy, name) for name in _ALLOWED}
_NAMESPACE["__builtins__"] = {}

_SKIP_TOKENS = {tokenize.NL, tokenize.NEWLINE, tokenize.INDENT, tokenize.DEDENT,
                tokenize.ENDMARKER, tokenize.COMMENT}

# Largest factorial argument and power result (in bits) evaluated exactly
MAX_FACTORIAL_ARG = 10_000
MAX_POWER_BITS = 1_000_000


def _screen_tokens(expression: str):
    """Reject names, attribute access and literals that could escape into Python."""
    try:
        tokens = [t for t in tokenize.generate_tokens(io.StringIO(expression).readline)
                  if t.type not in _SKIP_TOKENS]
    except (tokenize.TokenError, SyntaxError) as e:
        raise EvaluationError(f"Could not tokenize expression: {e}") from e

    prev = None
    for tok in tokens:
        kind = tokenize.tok_name.get(tok.type, "")
        if tok.type == tokenize.STRING or kind.startswith("FSTRING"):
            raise EvaluationError("String literals are not allowed")
        if tok.type == tokenize.NAME:
            if tok.string.startswith("_"):
                raise EvaluationError(f"Name '{tok.string}' is not allowed")
            if prev is not None and prev.type == tokenize.OP and prev.string == ".":
                raise EvaluationError(f"Attribute access '.{tok.string}' is not allowed")
        prev = tok


def _magnitude(value) -> float:
    try:
        return abs(complex(value.evalf()))
    except OverflowError:
        return math.inf
    except (TypeError, ValueError):
        return 0.0


def _check_cost(expression: str):
    """Parse without evaluating and refuse factorials/powers too large to compute."""
    try:
        with sympy_evaluate(False):
            tree = parse_expr(expression, global_dict=dict(_NAMESPACE),
                              transformations=_TRANSFORMATIONS, evaluate=False)
    except Exception as e:
        # Genuine syntax errors resurface from the evaluating parse
        logger.debug("Unevaluated parse of %r failed: %s", expression, e)
        return
    if not isinstance(tree, sympy.Basic):
        return

    for node in sympy.preorder_traversal(tree):
        if isinstance(node, sympy.factorial) and node.args[0].is_number:
            if _magnitude(node.args[0]) > MAX_FACTORIAL_ARG:
                raise EvaluationError(f"Factorial argument too large (max {MAX_FACTORIAL_ARG})")
        elif node.is_Pow and node.base.is_number and node.exp.is_number:
            base = _magnitude(node.base)
            if base > 1 and _magnitude(node.exp) * math.log2(base) > MAX_POWER_BITS:
                raise EvaluationError("Power result too large to compute exactly")


def evaluate(expression: str, max_length: int = None) -> str:
    """Evaluate one expression string and return SymPy's normalized result."""
    if max_length is None:
        max_length = default_config.max_expression_length
    if len(expression) > max_length:
        raise EvaluationError(f"Expression too long ({len(expression)} > {max_length} chars)")
    _screen_tokens(expression)
    _check_cost(expression)
    try:
        result = parse_expr(expression, global_dict=dict(_NAMESPACE),
                            transformations=_TRANSFORMATIONS)
        return str(result)
    except Exception as e:
        logger.warning("Evaluation failed for %r: %s", expression, e)
        message = str(e) or type(e).__name__
        raise EvaluationError(message) from e


def solve_query(query, max_length: int = None) -> dict:
    """Free-text query → parsed expression → result."""
    parsed = classify_and_build(query)
    result = evaluate(parsed, max_length)
    return {"input": query, "parsedExpression": parsed, "result": result}

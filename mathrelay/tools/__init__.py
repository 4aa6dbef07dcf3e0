from .parser import classify, classify_and_build, Trigger
from .evaluator import evaluate, solve_query
from .numeric import factorial, log, power, sqrt, gcd, is_prime, trigonometry
from .weather import weather_report

__all__ = [
    "classify", "classify_and_build", "Trigger",
    "evaluate", "solve_query",
    "factorial", "log", "power", "sqrt", "gcd", "is_prime", "trigonometry",
    "weather_report",
]

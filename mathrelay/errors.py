"""Error taxonomy shared by every transport.

Each error carries the HTTP status the JSON endpoint answers with.
"""


class CalculatorError(Exception):
    status_code = 500


class MissingInputError(CalculatorError):
    status_code = 400


class ExtractionError(CalculatorError):
    """A trigger keyword matched but its operand could not be pulled out."""
    status_code = 400


class EvaluationError(CalculatorError):
    """The symbolic engine rejected the built expression."""
    status_code = 500


class DomainError(CalculatorError, ValueError):
    status_code = 400


class OperandTypeError(CalculatorError, TypeError):
    status_code = 400


class FactorialOverflowError(CalculatorError, OverflowError):
    status_code = 400


class InvalidArgumentError(CalculatorError, ValueError):
    status_code = 400


class UpstreamError(CalculatorError):
    """Geocoding, weather or chat-completion API failure."""
    status_code = 502


class CertificateError(CalculatorError):
    pass

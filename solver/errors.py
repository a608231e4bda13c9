"""Client-side error taxonomy. Every error is scoped to one in-flight request."""


class SolverError(Exception):
    """Base for failures reported to the UI layer as a rejected operation."""


class ConfigurationError(SolverError):
    """The gateway reports no vendor key, or could not be asked."""


class GatewayError(SolverError):
    """The gateway answered with an error envelope."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.status_code = status_code


class NetworkError(SolverError):
    """The gateway could not be reached."""


class ParseError(ValueError):
    """Vendor text held no extractable JSON array. Never escapes the parser."""

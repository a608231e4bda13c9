"""Gateway error taxonomy. Each error knows the HTTP status it is reported with."""

from __future__ import annotations

from typing import Any


class GatewayError(Exception):
    status_code = 500

    def __init__(self, message: str, detail: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_body(self) -> dict:
        body: dict[str, Any] = {"error": self.message}
        if self.detail is not None:
            body["detail"] = self.detail
        return body


class ConfigurationError(GatewayError):
    """A vendor API key is missing from process configuration."""

    def __init__(self, provider: str) -> None:
        super().__init__(f"{provider.upper()} API key not configured")
        self.provider = provider


class VendorError(GatewayError):
    """The vendor answered with a non-2xx status."""

    def __init__(self, provider: str, status_code: int, message: str, body: Any = None) -> None:
        super().__init__(message, detail=body)
        self.provider = provider
        self.status_code = status_code

    @property
    def is_credit_exhausted(self) -> bool:
        return "credit balance" in self.message.lower()


class NetworkError(GatewayError):
    """The vendor could not be reached."""

    status_code = 502


def vendor_error_message(body: Any, fallback: str) -> str:
    """Pull the human-readable message out of either vendor's error body."""
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        if body.get("message"):
            return str(body["message"])
    return fallback

from __future__ import annotations

from typing import Any, Optional


class SmsError(Exception):
    pass


class InvalidArgumentError(SmsError, ValueError):
    pass


class GatewayError(SmsError):
    """
    The provider answered, but not with its success code.

    Carries the provider's own message and code plus the raw decoded payload so
    callers can decide whether to fall back to another gateway.
    """

    def __init__(self, message: str, code: Optional[Any] = None, raw: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.raw = raw if raw is not None else {}

    def __repr__(self) -> str:
        return f"GatewayError(code={self.code!r}, message={self.message!r})"

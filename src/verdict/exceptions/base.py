"""Root exception for Verdict."""

from __future__ import annotations


class VerdictError(Exception):
    """Base class for all errors raised by Verdict."""

    code: str = ""

    def __str__(self) -> str:
        message = super().__str__()
        if self.code:
            return f"{self.code} {message}"
        return message

"""Protocol error taxonomy. Raised by factories and the planning kernel; validators return results."""

from __future__ import annotations

from collections.abc import Iterable

ERROR_SEPARATOR = "; "


class ProtocolError(Exception):
    """Base error carrying every accumulated validation message."""

    def __init__(self, message: str, errors: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.errors: tuple[str, ...] = tuple(errors)


class ShapeError(ProtocolError):
    """Payload does not match a primitive tag or a named shape."""


class UnknownIntentError(ShapeError):
    """Named intent is not present in the registry."""


class EnvelopeError(ProtocolError):
    """Assembled envelope violates envelope-level rules."""


class InputError(ProtocolError, ValueError):
    """Planning input is unusable (e.g. empty intent text)."""


def join_errors(errors: Iterable[str]) -> str:
    """Join error messages with the protocol separator."""
    return ERROR_SEPARATOR.join(errors)

"""Exceptions shared by the rule modules."""

from __future__ import annotations

from .enums import LogLevel


class CommandRejected(RuntimeError):
    """Raised when a command fails validation before touching state.

    Attributes:
        level: Severity of the player-facing log entry, or ``None`` when the
            rejection should stay silent.
    """

    def __init__(self, message: str, *, level: LogLevel | None = LogLevel.WARNING) -> None:
        super().__init__(message)
        self.level = level

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppError(Exception):
    """A controlled, user-facing error raised by the read API.

    Use this for unsupported routes, missing persisted files, etc.
    """

    status_code: int
    code: str
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code} ({self.status_code}): {self.message}"


class ProbeError(Exception):
    """One data source was unreadable or malformed this tick."""

    def __init__(self, source: str, cause: str) -> None:
        super().__init__(f"{source}: {cause}")
        self.source = source
        self.cause = cause

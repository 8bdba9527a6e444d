from __future__ import annotations
from typing import Any, Dict, Optional


class StreamEditError(Exception):
    """Base error; ``context`` holds position/width details for the message."""

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}

    def __str__(self) -> str:
        base = super().__str__()
        if not self.context:
            return base
        details = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{base} ({details})"


class EndOfData(StreamEditError, EOFError):
    """Not enough bytes to satisfy a read."""


class InvalidPosition(StreamEditError, ValueError):
    """Seek/skip target the editor does not allow (negative offset)."""


class MediumFailure(StreamEditError, OSError):
    """The medium cannot be used: closed, not seekable, or a short write."""

from __future__ import annotations

from typing import Optional


class HitsoundError(ValueError):
    """Base class for every failure raised while copying hitsounds."""

    def __init__(self, message: str, *, line_number: Optional[int] = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class InvalidField(HitsoundError):
    pass


class InvalidTimingPoint(HitsoundError):
    pass


class MissingRootTimingPoint(HitsoundError):
    pass


class NoTimingPoints(HitsoundError):
    pass


class NoAccurateSnapping(HitsoundError):
    pass


class ChartIOError(HitsoundError):
    pass

from __future__ import annotations

import math
from typing import List, NamedTuple

from .errors import InvalidField


class ChartLine(NamedTuple):
    number: int  # 1-based line number in the source text
    text: str


def split_fields(line: ChartLine, *, minimum: int, kind: str) -> List[str]:
    parts = [part.strip() for part in line.text.split(",")]
    if len(parts) < minimum:
        raise InvalidField(
            f"{kind} needs at least {minimum} fields, got {len(parts)}: {line.text!r}",
            line_number=line.number,
        )
    return parts


def parse_int(value: str, *, name: str, line: ChartLine) -> int:
    try:
        return int(value)
    except ValueError:
        raise InvalidField(
            f"{name} must be an integer, got {value!r}", line_number=line.number
        ) from None


def parse_time(value: str, *, name: str, line: ChartLine) -> int:
    """Parse a millisecond field, truncating values written with a decimal point."""
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        raise InvalidField(
            f"{name} must be numeric, got {value!r}", line_number=line.number
        ) from None


def parse_float(value: str, *, name: str, line: ChartLine) -> float:
    try:
        result = float(value)
    except ValueError:
        result = math.nan
    if not math.isfinite(result):
        raise InvalidField(
            f"{name} must be numeric, got {value!r}", line_number=line.number
        )
    return result

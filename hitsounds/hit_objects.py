"""Parse ``[HitObjects]`` records.

Record layout:

  x, y, time, type, hitSound, objectParams..., hitSample

Only the fields needed to place a hitsound are interpreted.  The type
bitmask decides where the cue sits:

  bit 0 (0x01)  circle   ``time``
  bit 1 (0x02)  slider   ``time``
  bit 3 (0x08)  spinner  ``endTime`` (field 5), never ``time``

Objects with none of these bits (e.g. mania hold notes) carry no cue and
are passed through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Iterable, List, Optional

from .errors import InvalidField
from .fields import ChartLine, parse_int, parse_time, split_fields

CIRCLE_BIT = 0x01
SLIDER_BIT = 0x02
SPINNER_BIT = 0x08

TIME_FIELD = 2
TYPE_FIELD = 3
ADDITIONS_FIELD = 4
END_TIME_FIELD = 5


class HitObjectKind(Enum):
    CIRCLE = auto()
    SLIDER = auto()
    SPINNER = auto()


def classify(type_bits: int) -> Optional[HitObjectKind]:
    if type_bits & CIRCLE_BIT:
        return HitObjectKind.CIRCLE
    if type_bits & SLIDER_BIT:
        return HitObjectKind.SLIDER
    if type_bits & SPINNER_BIT:
        return HitObjectKind.SPINNER
    return None


@dataclass(frozen=True)
class HitObject:
    line_number: int
    text: str
    kind: Optional[HitObjectKind]
    time: int
    additions: int
    end_time: Optional[int] = None

    @property
    def cue_time(self) -> Optional[int]:
        """Absolute time the hitsound is anchored at, or None for no cue."""

        if self.kind is HitObjectKind.SPINNER:
            return self.end_time
        if self.kind is None:
            return None
        return self.time

    def with_additions(self, additions: int) -> "HitObject":
        if additions == self.additions:
            return self
        parts = self.text.split(",")
        parts[ADDITIONS_FIELD] = str(additions)
        return replace(self, text=",".join(parts), additions=additions)


def parse_hit_object(line: ChartLine) -> HitObject:
    parts = split_fields(line, minimum=ADDITIONS_FIELD + 1, kind="hit object")
    time = parse_time(parts[TIME_FIELD], name="time", line=line)
    type_bits = parse_int(parts[TYPE_FIELD], name="type", line=line)
    additions = parse_int(parts[ADDITIONS_FIELD], name="hitsound", line=line)
    kind = classify(type_bits)

    end_time = None
    if kind is HitObjectKind.SPINNER:
        if len(parts) <= END_TIME_FIELD:
            raise InvalidField("spinner is missing its end time", line_number=line.number)
        end_time = parse_time(parts[END_TIME_FIELD], name="end time", line=line)

    return HitObject(
        line_number=line.number,
        text=line.text,
        kind=kind,
        time=time,
        additions=additions,
        end_time=end_time,
    )


def parse_hit_objects(lines: Iterable[ChartLine]) -> List[HitObject]:
    return [parse_hit_object(line) for line in lines]

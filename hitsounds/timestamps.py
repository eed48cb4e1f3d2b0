"""Absolute and tempo-relative timestamps.

An absolute timestamp is a plain millisecond offset from the start of the
chart.  A relative timestamp addresses a point as whole measures plus a
fraction of a measure past an anchor, on the grid of a given tempo and
meter.  Relative anchors always bottom out in an absolute timestamp.

Two charts that share a tempo-region history produce identical relative
timestamps for notes on the same beat, so ``signature`` can be used to
match cues across charts whose absolute offsets differ.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import singledispatch
from typing import Union

from .snapping import DEFAULT_SNAP_CONFIG, SnapConfig, ms_per_measure, resolve_snap


@dataclass(frozen=True)
class AbsoluteTimestamp:
    ms: int

    def milliseconds(self) -> int:
        return self.ms

    def into_relative(
        self,
        anchor: "Timestamp",
        bpm: float,
        meter: int,
        config: SnapConfig = DEFAULT_SNAP_CONFIG,
    ) -> "RelativeTimestamp":
        snap = resolve_snap(self.ms, anchor.milliseconds(), bpm, meter, config)
        return RelativeTimestamp(
            anchor=anchor,
            bpm=bpm,
            meter=meter,
            measures=snap.measures,
            num=snap.num,
            denom=snap.denom,
        )


@dataclass(frozen=True)
class RelativeTimestamp:
    anchor: "Timestamp"
    bpm: float
    meter: int
    measures: int
    num: int
    denom: int

    def milliseconds(self) -> int:
        measure_ms = ms_per_measure(self.bpm, self.meter)
        base = self.anchor.milliseconds()
        return math.floor(
            base + measure_ms * self.measures + measure_ms * self.num / self.denom
        )


Timestamp = Union[AbsoluteTimestamp, RelativeTimestamp]


@singledispatch
def signature(timestamp) -> str:
    raise TypeError(f"not a timestamp: {timestamp!r}")


@signature.register
def _(timestamp: AbsoluteTimestamp) -> str:
    return f"a:{timestamp.ms}"


@signature.register
def _(timestamp: RelativeTimestamp) -> str:
    return (
        f"r:({signature(timestamp.anchor)}):{timestamp.bpm:f}:{timestamp.meter}"
        f":{timestamp.measures}:{timestamp.num}:{timestamp.denom}"
    )

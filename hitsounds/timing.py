"""Parse ``[TimingPoints]`` records into a chain of timing points.

Record layout (comma separated, trailing fields optional):

  offset, beatLength, meter, sampleSet, sampleIndex, volume, uninherited, effects

A positive beat length starts a new tempo region (uninherited point).  A
negative beat length only changes slider velocity and sample defaults
(inherited point); its BPM and meter come from the closest preceding
uninherited point.  The ``uninherited`` column is ignored: the sign of the
beat length decides.

Defaults for missing fields: meter 4, sampleSet 0, sampleIndex 0,
volume 100, no kiai.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from .errors import (
    InvalidTimingPoint,
    MissingRootTimingPoint,
    NoAccurateSnapping,
    NoTimingPoints,
)
from .fields import ChartLine, parse_float, parse_int, parse_time, split_fields
from .snapping import DEFAULT_SNAP_CONFIG, SnapConfig
from .timestamps import AbsoluteTimestamp, RelativeTimestamp

logger = logging.getLogger(__name__)

DEFAULT_METER = 4
DEFAULT_VOLUME = 100
KIAI_BIT = 0x01


@dataclass(frozen=True)
class TimingRecord:
    """One raw timing-point line, before the tempo chain is built."""

    line_number: int
    offset: int
    beat_length: float
    meter: int = DEFAULT_METER
    sample_set: int = 0
    sample_index: int = 0
    volume: int = DEFAULT_VOLUME
    kiai: bool = False


@dataclass(frozen=True)
class UninheritedTimingPoint:
    time: AbsoluteTimestamp
    bpm: float
    meter: int
    sample_set: int = 0
    sample_index: int = 0
    volume: int = DEFAULT_VOLUME
    kiai: bool = False

    @property
    def offset(self) -> int:
        return self.time.milliseconds()


@dataclass(frozen=True)
class InheritedTimingPoint:
    # Lookup only: the governing tempo region, never owned by this point.
    parent: UninheritedTimingPoint = field(repr=False, compare=False)
    time: RelativeTimestamp
    sv_multiplier: float
    sample_set: int = 0
    sample_index: int = 0
    volume: int = DEFAULT_VOLUME
    kiai: bool = False

    @property
    def offset(self) -> int:
        return self.time.milliseconds()

    @property
    def bpm(self) -> float:
        return self.parent.bpm

    @property
    def meter(self) -> int:
        return self.parent.meter


TimingPoint = Union[UninheritedTimingPoint, InheritedTimingPoint]


def bpm_from_beat_length(beat_length: float) -> float:
    """Return the BPM for a positive beat length, rounded half up."""

    return float(math.floor(60000.0 / beat_length + 0.5))


def parse_timing_record(line: ChartLine) -> TimingRecord:
    parts = split_fields(line, minimum=2, kind="timing point")

    def _optional_int(index: int, name: str, default: int) -> int:
        if len(parts) <= index or parts[index] == "":
            return default
        return parse_int(parts[index], name=name, line=line)

    effects = _optional_int(7, "effects", 0)
    return TimingRecord(
        line_number=line.number,
        offset=parse_time(parts[0], name="offset", line=line),
        beat_length=parse_float(parts[1], name="beat length", line=line),
        meter=_optional_int(2, "meter", DEFAULT_METER),
        sample_set=_optional_int(3, "sample set", 0),
        sample_index=_optional_int(4, "sample index", 0),
        volume=_optional_int(5, "volume", DEFAULT_VOLUME),
        kiai=bool(effects & KIAI_BIT),
    )


def build_timing_points(
    records: Iterable[TimingRecord],
    config: SnapConfig = DEFAULT_SNAP_CONFIG,
) -> List[TimingPoint]:
    """Build the timing-point chain from raw records.

    Records are ordered by offset first; equal offsets keep their file
    order, so an uninherited point written before an inherited point at the
    same time stays first.
    """
    ordered = sorted(records, key=lambda record: record.offset)
    if not ordered:
        raise NoTimingPoints("chart has no timing points")

    points: List[TimingPoint] = []
    parent: Optional[UninheritedTimingPoint] = None
    for record in ordered:
        if record.beat_length == 0:
            raise InvalidTimingPoint(
                "beat length is equal to 0", line_number=record.line_number
            )
        if record.beat_length > 0:
            if record.meter <= 0:
                raise InvalidTimingPoint(
                    f"meter must be positive, got {record.meter}",
                    line_number=record.line_number,
                )
            bpm = bpm_from_beat_length(record.beat_length)
            if bpm <= 0:
                raise InvalidTimingPoint(
                    f"beat length {record.beat_length} rounds to 0 bpm",
                    line_number=record.line_number,
                )
            parent = UninheritedTimingPoint(
                time=AbsoluteTimestamp(record.offset),
                bpm=bpm,
                meter=record.meter,
                sample_set=record.sample_set,
                sample_index=record.sample_index,
                volume=record.volume,
                kiai=record.kiai,
            )
            points.append(parent)
            continue

        if parent is None:
            raise MissingRootTimingPoint(
                "first timing point must be uninherited (positive beat length)",
                line_number=record.line_number,
            )
        try:
            time = AbsoluteTimestamp(record.offset).into_relative(
                parent.time, parent.bpm, parent.meter, config
            )
        except NoAccurateSnapping as exc:
            raise NoAccurateSnapping(
                f"inherited timing point: {exc}", line_number=record.line_number
            ) from None
        points.append(
            InheritedTimingPoint(
                parent=parent,
                time=time,
                sv_multiplier=abs(100.0 / record.beat_length),
                sample_set=record.sample_set,
                sample_index=record.sample_index,
                volume=record.volume,
                kiai=record.kiai,
            )
        )

    logger.debug(
        "built %d timing points (%d uninherited)",
        len(points),
        sum(1 for point in points if isinstance(point, UninheritedTimingPoint)),
    )
    return points


def parse_timing_points(
    lines: Iterable[ChartLine],
    config: SnapConfig = DEFAULT_SNAP_CONFIG,
) -> List[TimingPoint]:
    return build_timing_points((parse_timing_record(line) for line in lines), config)


def uninherited_points(points: Iterable[TimingPoint]) -> List[UninheritedTimingPoint]:
    """Return the tempo-defining points, ascending by offset."""

    return sorted(
        (point for point in points if isinstance(point, UninheritedTimingPoint)),
        key=lambda point: point.offset,
    )

"""Collect the hitsounds of a chart keyed by a tempo-independent signature.

Every cue-carrying hit object is anchored to the latest uninherited timing
point at or before its cue time and snapped onto that point's beat grid.
The resulting relative timestamp's signature identifies the cue across
charts that share the same tempo-region history, whatever their absolute
offsets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .chart import Chart
from .errors import NoAccurateSnapping
from .hit_objects import HitObject, parse_hit_objects
from .snapping import DEFAULT_SNAP_CONFIG, SnapConfig
from .timestamps import AbsoluteTimestamp, RelativeTimestamp, Timestamp, signature
from .timing import TimingPoint, parse_timing_points, uninherited_points

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Hitsound:
    timestamp: Timestamp
    additions: int
    line_number: Optional[int] = None

    @property
    def signature(self) -> str:
        return signature(self.timestamp)


@dataclass(frozen=True)
class HitsoundData:
    timing_points: Tuple[TimingPoint, ...]
    hitsounds: Mapping[str, Hitsound]

    def __len__(self) -> int:
        return len(self.hitsounds)


def anchor_hit_objects(
    objects: Iterable[HitObject],
    timing_points: Iterable[TimingPoint],
    config: SnapConfig = DEFAULT_SNAP_CONFIG,
) -> List[Tuple[HitObject, RelativeTimestamp]]:
    """Snap every cue-carrying object onto its governing tempo grid.

    Returns ``(object, timestamp)`` pairs ascending by cue time.  Objects
    without a cue are skipped.  Any object that cannot be snapped aborts the
    whole run with ``NoAccurateSnapping``.
    """
    tempo = uninherited_points(timing_points)
    cues = sorted(
        (obj for obj in objects if obj.cue_time is not None),
        key=lambda obj: obj.cue_time,
    )

    anchored: List[Tuple[HitObject, RelativeTimestamp]] = []
    cursor = 0
    for obj in cues:
        while cursor + 1 < len(tempo) and tempo[cursor + 1].offset <= obj.cue_time:
            cursor += 1
        point = tempo[cursor]
        try:
            timestamp = AbsoluteTimestamp(obj.cue_time).into_relative(
                point.time, point.bpm, point.meter, config
            )
        except NoAccurateSnapping as exc:
            raise NoAccurateSnapping(
                f"hit object: {exc}", line_number=obj.line_number
            ) from None
        anchored.append((obj, timestamp))
    return anchored


def collect_chart(chart: Chart, config: SnapConfig = DEFAULT_SNAP_CONFIG) -> HitsoundData:
    timing_points = parse_timing_points(chart.lines("TimingPoints"), config)
    objects = parse_hit_objects(chart.lines("HitObjects"))

    hitsounds: Dict[str, Hitsound] = {}
    for obj, timestamp in anchor_hit_objects(objects, timing_points, config):
        hitsound = Hitsound(
            timestamp=timestamp,
            additions=obj.additions,
            line_number=obj.line_number,
        )
        # Later cues on the same beat replace earlier ones.
        hitsounds[hitsound.signature] = hitsound

    logger.debug(
        "collected %d hitsounds from %d hit objects", len(hitsounds), len(objects)
    )
    return HitsoundData(
        timing_points=tuple(timing_points), hitsounds=MappingProxyType(hitsounds)
    )


def collect_hitsounds(text: str, config: SnapConfig = DEFAULT_SNAP_CONFIG) -> HitsoundData:
    return collect_chart(Chart.from_text(text), config)

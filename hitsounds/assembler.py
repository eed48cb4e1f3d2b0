from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List

from .chart import Chart
from .collector import HitsoundData, anchor_hit_objects
from .hit_objects import HitObject, parse_hit_objects
from .snapping import DEFAULT_SNAP_CONFIG, SnapConfig
from .timestamps import signature
from .timing import parse_timing_points

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeResult:
    text: str
    matched: int  # destination objects whose hitsound was replaced
    hit_objects: int


def merge_hit_objects(
    hsdata: HitsoundData,
    chart: Chart,
    config: SnapConfig = DEFAULT_SNAP_CONFIG,
) -> tuple[List[HitObject], int]:
    """Return the chart's hit objects with source hitsounds carried over.

    Objects keep their file order.  Only the ``hitSound`` field of objects
    whose signature exists in ``hsdata`` changes.
    """
    timing_points = parse_timing_points(chart.lines("TimingPoints"), config)
    objects = parse_hit_objects(chart.lines("HitObjects"))

    replacements: Dict[int, HitObject] = {}
    for obj, timestamp in anchor_hit_objects(objects, timing_points, config):
        source = hsdata.hitsounds.get(signature(timestamp))
        if source is None:
            continue
        replacements[obj.line_number] = obj.with_additions(source.additions)

    merged = [replacements.get(obj.line_number, obj) for obj in objects]
    return merged, len(replacements)


def apply_hitsounds(
    hsdata: HitsoundData,
    destination: str,
    config: SnapConfig = DEFAULT_SNAP_CONFIG,
) -> MergeResult:
    """Rebuild ``destination`` with the hitsounds collected from the source.

    Timing points and every other canonical section are copied unchanged.
    Sections outside the canonical layout are not emitted.
    """
    chart = Chart.from_text(destination)
    for name in chart.extra_sections:
        logger.warning("dropping non-canonical section [%s]", name)

    if not chart.has_section("HitObjects"):
        return MergeResult(text=chart.to_text(), matched=0, hit_objects=0)

    objects, matched = merge_hit_objects(hsdata, chart, config)
    logger.info("matched %d of %d hit objects", matched, len(objects))
    text = chart.to_text({"HitObjects": [obj.text for obj in objects]})
    return MergeResult(text=text, matched=matched, hit_objects=len(objects))

from __future__ import annotations

import logging
from pathlib import Path
import sys

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from hitsounds.assembler import apply_hitsounds  # noqa: E402
from hitsounds.collector import collect_hitsounds  # noqa: E402
from hitsounds.errors import MissingRootTimingPoint, NoAccurateSnapping  # noqa: E402

TIMING = ["1000,500,4,2,0,100,1,0", "3000,-50,4,2,0,80,0,0"]

SOURCE = "\n".join(
    [
        "osu file format v14",
        "",
        "[General]",
        "AudioFilename: audio.mp3",
        "",
        "[TimingPoints]",
        *TIMING,
        "",
        "[HitObjects]",
        "256,192,1000,1,2,0:0:0:0:",
        "256,192,1500,1,4,0:0:0:0:",
        "100,100,2000,2,8,B|200:100,1,100",
        "256,192,2500,12,6,3000,0:0:0:0:",
        "",
    ]
)


def _destination(objects: list[str], *, timing: list[str] = TIMING) -> str:
    return "\n".join(
        [
            "osu file format v14",
            "",
            "[General]",
            "AudioFilename: other.mp3",
            "",
            "[Metadata]",
            "Title:copy target",
            "",
            "[TimingPoints]",
            *timing,
            "",
            "[HitObjects]",
            *objects,
            "",
        ]
    )


@pytest.fixture(scope="module")
def source_data():
    return collect_hitsounds(SOURCE)


def test_matching_objects_receive_source_hitsounds(source_data) -> None:
    destination = _destination(
        [
            "10,10,1001,5,0,0:0:0:0:",
            "10,10,1499,1,0,0:0:0:0:",
            "10,10,2002,2,0,L|50:50,1,50",
            "10,10,2600,12,0,3001,0:0:0:0:",
        ]
    )
    result = apply_hitsounds(source_data, destination)
    assert result.matched == 4
    assert result.hit_objects == 4
    assert result.text == (
        "osu file format v14\r\n"
        "\r\n[General]\r\n"
        "AudioFilename: other.mp3\r\n"
        "\r\n[Metadata]\r\n"
        "Title:copy target\r\n"
        "\r\n[TimingPoints]\r\n"
        "1000,500,4,2,0,100,1,0\r\n"
        "3000,-50,4,2,0,80,0,0\r\n"
        "\r\n[HitObjects]\r\n"
        "10,10,1001,5,2,0:0:0:0:\r\n"
        "10,10,1499,1,4,0:0:0:0:\r\n"
        "10,10,2002,2,8,L|50:50,1,50\r\n"
        "10,10,2600,12,6,3001,0:0:0:0:\r\n"
    )


def test_unmatched_and_cueless_objects_are_untouched(source_data) -> None:
    destination = _destination(
        [
            "10,10,1250,1,0,0:0:0:0:",
            "64,192,1000,128,0,1500:0:0:0:0:",
            "10,10,1500,1,0,0:0:0:0:",
        ]
    )
    result = apply_hitsounds(source_data, destination)
    assert result.matched == 1
    assert result.text.endswith(
        "\r\n[HitObjects]\r\n"
        "10,10,1250,1,0,0:0:0:0:\r\n"
        "64,192,1000,128,0,1500:0:0:0:0:\r\n"
        "10,10,1500,1,4,0:0:0:0:\r\n"
    )


def test_hit_object_order_is_preserved(source_data) -> None:
    destination = _destination(["10,10,2000,1,0,0:0:0:0:", "10,10,1000,1,0,0:0:0:0:"])
    result = apply_hitsounds(source_data, destination)
    assert result.text.endswith(
        "10,10,2000,1,8,0:0:0:0:\r\n10,10,1000,1,2,0:0:0:0:\r\n"
    )


def test_different_tempo_history_does_not_match(source_data) -> None:
    destination = _destination(["10,10,1500,1,0,0:0:0:0:"], timing=["500,500,4"])
    result = apply_hitsounds(source_data, destination)
    assert result.matched == 0
    assert "10,10,1500,1,0,0:0:0:0:\r\n" in result.text


def test_sections_are_reordered_and_extra_sections_dropped(source_data, caplog) -> None:
    destination = "\n".join(
        [
            "osu file format v14",
            "[HitObjects]",
            "10,10,1000,1,0,0:0:0:0:",
            "[Colours]",
            "Combo1 : 255,0,0",
            "[Custom]",
            "anything",
            "[TimingPoints]",
            *TIMING,
            "[Events]",
            "//Background and Video events",
        ]
    )
    with caplog.at_level(logging.WARNING, logger="hitsounds.assembler"):
        result = apply_hitsounds(source_data, destination)

    assert result.text == (
        "osu file format v14\r\n"
        "\r\n[Events]\r\n"
        "//Background and Video events\r\n"
        "\r\n[TimingPoints]\r\n"
        "1000,500,4,2,0,100,1,0\r\n"
        "3000,-50,4,2,0,80,0,0\r\n"
        "\r\n[Colours]\r\n"
        "Combo1 : 255,0,0\r\n"
        "\r\n[HitObjects]\r\n"
        "10,10,1000,1,2,0:0:0:0:\r\n"
    )
    assert "Custom" not in result.text
    assert any("[Custom]" in record.getMessage() for record in caplog.records)


def test_destination_without_hit_objects_passes_through(source_data) -> None:
    result = apply_hitsounds(source_data, "osu file format v14\n[General]\nMode: 0\n")
    assert result.matched == 0
    assert result.text == "osu file format v14\r\n\r\n[General]\r\nMode: 0\r\n"


def test_invalid_destination_timing_aborts(source_data) -> None:
    with pytest.raises(MissingRootTimingPoint):
        apply_hitsounds(
            source_data, _destination(["10,10,1000,1,0,0:0:0:0:"], timing=["0,-100,4"])
        )


def test_unsnappable_destination_object_aborts(source_data) -> None:
    with pytest.raises(NoAccurateSnapping):
        apply_hitsounds(source_data, _destination(["10,10,1062,1,0,0:0:0:0:"]))


def test_merging_a_chart_onto_itself_is_stable(source_data) -> None:
    first = apply_hitsounds(source_data, SOURCE)
    second = apply_hitsounds(source_data, first.text)
    assert first.text == second.text
    assert first.matched == 4


def test_storyboard_indentation_survives_merge() -> None:
    events = [
        "//Storyboard Layer 3 (Foreground)",
        "Sprite,Foreground,Centre,\"sb/dot.png\",320,240",
        " L,0,4",
        "  F,0,0,500,0,1",
    ]
    chart = "\n".join(
        [
            "osu file format v14",
            "[Events]",
            *events,
            "[TimingPoints]",
            "1000,500,4,2,0,100,1,0",
            "[HitObjects]",
            "256,192,1000,1,2,0:0:0:0:",
        ]
    )
    result = apply_hitsounds(collect_hitsounds(chart), chart)
    assert result.text == (
        "osu file format v14\r\n"
        "\r\n[Events]\r\n"
        + "".join(line + "\r\n" for line in events)
        + "\r\n[TimingPoints]\r\n"
        "1000,500,4,2,0,100,1,0\r\n"
        "\r\n[HitObjects]\r\n"
        "256,192,1000,1,2,0:0:0:0:\r\n"
    )

from pathlib import Path
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from hitsounds.chart import CANONICAL_ORDER, Chart, canonical_name  # noqa: E402
from hitsounds.fields import ChartLine  # noqa: E402


SAMPLE = "\r\n".join(
    [
        "osu file format v14",
        "",
        "[general]",
        "AudioFilename: audio.mp3",
        "   ",
        "[HitObjects]",
        "256,192,1000,1,0,0:0:0:0:",
        "",
        "[TimingPoints]",
        "1000,500,4,2,0,100,1,0",
        "",
        "[Custom]",
        "key: value",
        "",
    ]
)


def test_canonical_order() -> None:
    assert CANONICAL_ORDER == (
        "version",
        "General",
        "Editor",
        "Metadata",
        "Difficulty",
        "Events",
        "TimingPoints",
        "Colours",
        "HitObjects",
    )


def test_canonical_name_is_case_insensitive() -> None:
    assert canonical_name("timingpoints") == "TimingPoints"
    assert canonical_name("HITOBJECTS") == "HitObjects"
    assert canonical_name("Custom") == "Custom"


def test_from_text_splits_sections() -> None:
    chart = Chart.from_text(SAMPLE)
    assert list(chart.sections) == ["version", "General", "HitObjects", "TimingPoints", "Custom"]
    assert chart.lines("version") == [ChartLine(1, "osu file format v14")]
    assert chart.lines("General") == [ChartLine(4, "AudioFilename: audio.mp3")]
    assert chart.lines("TimingPoints") == [ChartLine(10, "1000,500,4,2,0,100,1,0")]
    assert chart.lines("Colours") == []
    assert not chart.has_section("Colours")


def test_extra_sections() -> None:
    chart = Chart.from_text(SAMPLE)
    assert chart.extra_sections == ["Custom"]


def test_header_needs_alphabetic_name() -> None:
    chart = Chart.from_text("v14\n[General]\n[not a header]\n")
    assert chart.lines("General") == [ChartLine(3, "[not a header]")]


def test_repeated_header_appends() -> None:
    chart = Chart.from_text("[Events]\na\n[General]\nb\n[events]\nc\n")
    assert [line.text for line in chart.lines("Events")] == ["a", "c"]


def test_to_text_reorders_and_uses_crlf() -> None:
    chart = Chart.from_text(SAMPLE)
    assert chart.to_text() == (
        "osu file format v14\r\n"
        "\r\n[General]\r\n"
        "AudioFilename: audio.mp3\r\n"
        "\r\n[TimingPoints]\r\n"
        "1000,500,4,2,0,100,1,0\r\n"
        "\r\n[HitObjects]\r\n"
        "256,192,1000,1,0,0:0:0:0:\r\n"
    )


def test_to_text_never_synthesizes_sections() -> None:
    chart = Chart.from_text("[Metadata]\nTitle:x\n")
    text = chart.to_text({"HitObjects": ["1,1,1,1,1"]})
    assert text == "\r\n[Metadata]\r\nTitle:x\r\n"


def test_to_text_overrides_present_section() -> None:
    chart = Chart.from_text(SAMPLE)
    text = chart.to_text({"HitObjects": ["new"]})
    assert text.endswith("\r\n[HitObjects]\r\nnew\r\n")


def test_empty_present_section_keeps_its_header() -> None:
    chart = Chart.from_text("v14\n[Colours]\n\n[General]\nMode: 0\n")
    assert chart.to_text() == "v14\r\n\r\n[General]\r\nMode: 0\r\n\r\n[Colours]\r\n"


def test_indented_lines_are_kept_verbatim() -> None:
    chart = Chart.from_text(
        "v14\n"
        "[Events]\n"
        "Sprite,Foreground,Centre,\"sb/dot.png\",320,240\n"
        " L,0,4\n"
        "  F,0,0,500,0,1\n"
        "_M,0,0,500,320,240,330,250\n"
        "  [General]  \n"
        "Mode: 0\n"
    )
    assert [line.text for line in chart.lines("Events")] == [
        "Sprite,Foreground,Centre,\"sb/dot.png\",320,240",
        " L,0,4",
        "  F,0,0,500,0,1",
        "_M,0,0,500,320,240,330,250",
    ]
    assert chart.lines("General") == [ChartLine(8, "Mode: 0")]

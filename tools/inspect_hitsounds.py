#!/usr/bin/env python3
"""List the timing points and collected hitsounds of a .osu chart."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from hitsounds.collector import collect_hitsounds  # noqa: E402
from hitsounds.errors import HitsoundError  # noqa: E402
from hitsounds.timing import InheritedTimingPoint  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Print the timing points and hitsound signatures of a chart."
    )
    parser.add_argument("chart", type=Path)
    parser.add_argument(
        "--signatures-only",
        action="store_true",
        help="Skip the timing point listing",
    )
    args = parser.parse_args(argv)

    try:
        text = args.chart.read_text(encoding="utf-8", errors="surrogateescape")
        hsdata = collect_hitsounds(text)
    except OSError as exc:
        print(f"error: cannot read {args.chart}: {exc}", file=sys.stderr)
        return 1
    except HitsoundError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if not args.signatures_only:
        print(f"timing points: {len(hsdata.timing_points)}")
        for point in hsdata.timing_points:
            if isinstance(point, InheritedTimingPoint):
                print(
                    f"  {point.offset:>8}  inherited    sv={point.sv_multiplier:.2f} "
                    f"vol={point.volume} kiai={int(point.kiai)}"
                )
            else:
                print(
                    f"  {point.offset:>8}  uninherited  bpm={point.bpm:g} meter={point.meter} "
                    f"vol={point.volume} kiai={int(point.kiai)}"
                )

    print(f"hitsounds: {len(hsdata)}")
    ordered = sorted(
        hsdata.hitsounds.items(), key=lambda item: item[1].timestamp.milliseconds()
    )
    for sig, hitsound in ordered:
        print(f"  {hitsound.timestamp.milliseconds():>8}  additions={hitsound.additions}  {sig}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

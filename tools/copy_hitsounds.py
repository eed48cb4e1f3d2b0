#!/usr/bin/env python3
"""Copy hitsounds from one .osu chart onto the matching cues of another."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from hitsounds.errors import HitsoundError  # noqa: E402
from hitsounds.snapping import SNAP_TOLERANCE_MS, SnapConfig  # noqa: E402
from hitsounds.transplant import copy_hitsounds  # noqa: E402


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Copy hitsounds between charts that share a timing layout",
    )
    parser.add_argument("source", type=Path, help="Chart to copy hitsounds from")
    parser.add_argument("destination", type=Path, help="Chart to copy hitsounds to")
    parser.add_argument(
        "--no-backup",
        dest="backup",
        action="store_false",
        help="Do not save <destination>.bak before overwriting",
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        default=SNAP_TOLERANCE_MS,
        help=f"Snapping tolerance in milliseconds (default {SNAP_TOLERANCE_MS})",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        config = SnapConfig(tolerance_ms=args.tolerance)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        result = copy_hitsounds(
            args.source, args.destination, backup=args.backup, config=config
        )
    except HitsoundError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(
        f"copied {result.hitsounds} hitsounds -> {args.destination} "
        f"({result.matched}/{result.hit_objects} objects updated)"
    )
    if result.backup is not None:
        print(f"  backup: {result.backup}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

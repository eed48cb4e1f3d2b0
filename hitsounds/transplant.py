"""Copy hitsounds from one chart file to another.

The source is parsed and the destination merged entirely in memory before
anything is written.  When a backup is requested, the untouched destination
bytes are written to ``<destination>.bak`` before the destination itself is
overwritten, so a failed run never leaves the destination half-updated
without a copy of the original.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .assembler import apply_hitsounds
from .collector import collect_hitsounds
from .errors import ChartIOError
from .snapping import DEFAULT_SNAP_CONFIG, SnapConfig

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".bak"
ENCODING = "utf-8"
# Undecodable bytes survive a decode/encode round trip unchanged.
ENCODING_ERRORS = "surrogateescape"

PathLike = Union[str, Path]


@dataclass(frozen=True)
class TransplantResult:
    hitsounds: int  # distinct hitsounds collected from the source
    matched: int  # destination objects that received a source hitsound
    hit_objects: int
    backup: Optional[Path] = None


def backup_path(destination: PathLike) -> Path:
    return Path(str(destination) + BACKUP_SUFFIX)


def _read_bytes(path: Path, role: str) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise ChartIOError(f"cannot read {role} {path}: {exc.strerror or exc}") from exc


def _write_bytes(path: Path, data: bytes, role: str) -> None:
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise ChartIOError(f"cannot write {role} {path}: {exc.strerror or exc}") from exc


def copy_hitsounds(
    source: PathLike,
    destination: PathLike,
    *,
    backup: bool = True,
    config: SnapConfig = DEFAULT_SNAP_CONFIG,
) -> TransplantResult:
    """Carry the hitsounds of ``source`` onto the matching cues of ``destination``.

    Raises a ``HitsoundError`` subclass on any failure; the destination is
    left untouched unless the final write itself fails.
    """
    source = Path(source)
    destination = Path(destination)

    source_text = _read_bytes(source, "source").decode(ENCODING, ENCODING_ERRORS)
    hsdata = collect_hitsounds(source_text, config)
    logger.info("collected %d hitsounds from %s", len(hsdata), source)

    original = _read_bytes(destination, "destination")
    merged = apply_hitsounds(hsdata, original.decode(ENCODING, ENCODING_ERRORS), config)

    written_backup = None
    if backup:
        written_backup = backup_path(destination)
        _write_bytes(written_backup, original, "backup")
        logger.info("backed up %s to %s", destination, written_backup)

    _write_bytes(destination, merged.text.encode(ENCODING, ENCODING_ERRORS), "destination")
    logger.info("wrote %s (%d objects updated)", destination, merged.matched)

    return TransplantResult(
        hitsounds=len(hsdata),
        matched=merged.matched,
        hit_objects=merged.hit_objects,
        backup=written_backup,
    )

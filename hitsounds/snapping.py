"""Match an absolute time to the closest standard subdivision of a measure.

A measure is split into ``denom`` equal parts for every denominator the
editor offers (1/1 up to 1/16 with triplets).  Each split yields two
candidate positions per numerator: one inside the current measure and one
shifted by a whole measure, so a note landing just before the next barline
can still snap onto it without changing ``measures``.

Fractions are never reduced: a note on the half-measure snaps to ``1/2``
because the 1/2 grid is checked before the 2/4 grid.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .errors import NoAccurateSnapping

SNAP_TOLERANCE_MS = 3.0
SNAP_DENOMINATORS: Tuple[int, ...] = (1, 2, 3, 4, 6, 8, 12, 16)


@dataclass(frozen=True)
class SnapConfig:
    tolerance_ms: float = SNAP_TOLERANCE_MS
    denominators: Tuple[int, ...] = SNAP_DENOMINATORS

    def __post_init__(self) -> None:
        if self.tolerance_ms < 0:
            raise ValueError(f"tolerance_ms must be >= 0, got {self.tolerance_ms}")
        if not self.denominators:
            raise ValueError("need at least one snapping denominator")
        if any(d <= 0 for d in self.denominators):
            raise ValueError(f"denominators must be positive: {self.denominators}")


DEFAULT_SNAP_CONFIG = SnapConfig()


@dataclass(frozen=True)
class Snap:
    measures: int
    num: int
    denom: int
    delta: float


def ms_per_measure(bpm: float, meter: int) -> float:
    if bpm <= 0:
        raise ValueError(f"bpm must be positive, got {bpm}")
    if meter <= 0:
        raise ValueError(f"meter must be positive, got {meter}")
    return 60000.0 / bpm * meter


def resolve_snap(
    target: int,
    base: int,
    bpm: float,
    meter: int,
    config: SnapConfig = DEFAULT_SNAP_CONFIG,
) -> Snap:
    """Snap ``target`` onto the grid that starts at ``base``.

    Raises ``NoAccurateSnapping`` when the closest grid position is further
    than ``config.tolerance_ms`` away.
    """
    measure_ms = ms_per_measure(bpm, meter)
    elapsed = target - base
    measures = math.floor(elapsed / measure_ms)
    offset = elapsed - measures * measure_ms

    best: Snap | None = None
    for denom in sorted(config.denominators):
        for i in range(denom):
            for num in (i, i + denom):
                delta = abs(offset - measure_ms * num / denom)
                # strict comparison keeps the earliest candidate on ties
                if best is None or delta < best.delta:
                    best = Snap(measures=measures, num=num, denom=denom, delta=delta)

    assert best is not None  # config guarantees at least one denominator
    if best.delta > config.tolerance_ms:
        raise NoAccurateSnapping(
            f"no snapping within {config.tolerance_ms}ms for {target}ms "
            f"(anchor {base}ms, {bpm:g} bpm, meter {meter}); "
            f"closest is {best.num}/{best.denom} off by {best.delta:.2f}ms"
        )
    return best

"""Copy hitsounds between osu! charts by musical position."""

from .assembler import MergeResult, apply_hitsounds  # noqa: F401
from .chart import CANONICAL_ORDER, Chart  # noqa: F401
from .collector import (  # noqa: F401
    Hitsound,
    HitsoundData,
    anchor_hit_objects,
    collect_chart,
    collect_hitsounds,
)
from .errors import (  # noqa: F401
    ChartIOError,
    HitsoundError,
    InvalidField,
    InvalidTimingPoint,
    MissingRootTimingPoint,
    NoAccurateSnapping,
    NoTimingPoints,
)
from .hit_objects import HitObject, HitObjectKind, parse_hit_object  # noqa: F401
from .snapping import DEFAULT_SNAP_CONFIG, Snap, SnapConfig, resolve_snap  # noqa: F401
from .timestamps import AbsoluteTimestamp, RelativeTimestamp, signature  # noqa: F401
from .timing import (  # noqa: F401
    InheritedTimingPoint,
    UninheritedTimingPoint,
    parse_timing_points,
)
from .transplant import BACKUP_SUFFIX, TransplantResult, copy_hitsounds  # noqa: F401

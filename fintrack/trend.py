from typing import Iterable, NamedTuple

from fintrack.domain import Snapshot

# Fewer points than this don't make a trend line worth drawing
MIN_TREND_POINTS = 2


class TrendPoint(NamedTuple):
    month: str
    savings: float


def project_trend(snapshots: Iterable[Snapshot]) -> tuple[TrendPoint, ...]:
    """Savings per month, oldest first, for the savings trend chart."""
    ordered = sorted(snapshots, key=lambda s: (s.month, s.created_at))
    return tuple(TrendPoint(s.month, s.savings) for s in ordered)


def has_trend(points: tuple[TrendPoint, ...]) -> bool:
    return len(points) >= MIN_TREND_POINTS

from fintrack.domain import Snapshot
from fintrack.trend import MIN_TREND_POINTS, TrendPoint, has_trend, project_trend


def snap(month, savings, created_at=0):
    return Snapshot(
        id=f"{month}-{created_at}", month=month, income=0, target_savings=0, categories=(),
        total_expense=0, savings=savings, savings_rate=0, created_at=created_at,
    )


def test_trend_ascending_by_month():
    points = project_trend([snap("2024-01", 10), snap("2024-03", 30), snap("2024-02", 20)])
    assert points == (
        TrendPoint("2024-01", 10),
        TrendPoint("2024-02", 20),
        TrendPoint("2024-03", 30),
    )


def test_trend_ties_oldest_saved_first():
    points = project_trend([snap("2024-01", 2, created_at=200), snap("2024-01", 1, created_at=100)])
    assert [p.savings for p in points] == [1, 2]


def test_trend_empty():
    assert project_trend([]) == ()


def test_trend_returns_every_point():
    points = project_trend([snap("2024-01", 10)])
    assert len(points) == 1
    assert not has_trend(points)
    assert has_trend(points * MIN_TREND_POINTS)

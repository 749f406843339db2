from decimal import Decimal
from src.app.services.statistics_aggregator import StatisticsAggregator, UNCATEGORIZED


def test_project_summary_counts_and_funding():
    rows = [
        ("approved", "Energy", Decimal("1000"), Decimal("400"), Decimal("100")),
        ("approved", "Energy", Decimal("2000"), Decimal("0"), Decimal("0")),
        ("approved", None, Decimal("500"), Decimal("500"), Decimal("0")),
        ("pending", "Health", Decimal("100"), Decimal("0"), Decimal("0")),
        ("rejected", "Energy", Decimal("100"), Decimal("0"), Decimal("0")),
    ]

    summary = StatisticsAggregator().project_summary(rows)

    counts = summary["project_counts"]
    assert counts["total"] == 5
    assert counts["approved"] == 3
    assert counts["pending"] == 1
    assert counts["rejected"] == 1
    assert counts["funded"] == 0

    funding = summary["funding_stats"]
    assert funding["total_projects"] == 3
    assert funding["total_funding_goal"] == 3500.0
    assert funding["total_current_funding"] == 1000.0
    # (50% + 0% + 100%) / 3
    assert funding["avg_progress"] == 50.0

    assert summary["category_breakdown"] == [
        {"category": "Energy", "count": 2, "total_funding": 500.0},
        {"category": UNCATEGORIZED, "count": 1, "total_funding": 500.0},
    ]


def test_zero_goal_projects_do_not_skew_progress():
    rows = [("approved", "Energy", Decimal("0"), Decimal("10"), Decimal("0"))]

    funding = StatisticsAggregator().project_summary(rows)["funding_stats"]

    assert funding["total_projects"] == 0
    assert funding["avg_progress"] == 0.0


def test_category_limit():
    rows = [("approved", f"Cat{i}", Decimal("10"), Decimal("0"), Decimal("0")) for i in range(5)]

    breakdown = StatisticsAggregator(category_limit=3).project_summary(rows)["category_breakdown"]

    assert [item["category"] for item in breakdown] == ["Cat0", "Cat1", "Cat2"]


def test_user_summary_excludes_admins_from_total():
    groups = [
        ("project_owner", "pending", 3),
        ("project_owner", "approved", 2),
        ("investor", "rejected", 1),
        ("admin", "approved", 2),
    ]

    summary = StatisticsAggregator().user_summary(groups)

    assert summary == {
        "total": 6,
        "project_owners": 5,
        "investors": 1,
        "admins": 2,
        "pending": 3,
        "approved": 2,
        "rejected": 1,
    }


def test_empty_snapshot():
    snapshot = StatisticsAggregator().build_snapshot([], [], [])

    assert snapshot["project_counts"]["total"] == 0
    assert snapshot["funding_stats"]["avg_progress"] == 0.0
    assert snapshot["category_breakdown"] == []
    assert snapshot["recent_activity"] == []
    assert snapshot["generated_at"] is not None

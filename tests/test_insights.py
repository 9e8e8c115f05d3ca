from fintrack.domain import CategoryEntry
from fintrack.insights import food_share, generate_insights, target_check
from fintrack.metrics import compute_totals


def totals_for(income, *pairs):
    return compute_totals(income, tuple(CategoryEntry(n, a) for n, a in pairs))


def test_three_insights_in_fixed_order():
    totals = totals_for("4000", ("Food", "500"), ("Rent", "1500"))
    assert generate_insights(totals, "4000") == (
        "Food is 12.5% of your income.",
        "Your savings rate is 50.0%.",
        "Top spending category: Rent at $1,500.",
    )


def test_extra_categories_do_not_add_insights():
    totals = totals_for("1000", *[(f"Custom {i}", i) for i in range(10)])
    assert len(generate_insights(totals, "1000")) == 3


def test_food_share_zero_without_income():
    assert food_share(totals_for("", ("Food", 100)), "") == "0.0"
    assert food_share(totals_for("-10", ("Food", 100)), "-10") == "0.0"


def test_food_share_without_food_category():
    assert food_share(totals_for("1000", ("Rent", 100)), "1000") == "0.0"
    # matched by exact name only
    assert food_share(totals_for("1000", ("food", 100)), "1000") == "0.0"


def test_top_category_sentinel_insight():
    totals = totals_for("1000")
    assert generate_insights(totals, "1000")[2] == "Top spending category: N/A at $0."


def test_target_check_messages():
    totals = totals_for("1000", ("Food", 400))
    assert target_check(totals, "") == "Set a target savings value to track progress."
    assert target_check(totals, "500") == "Ahead by $100 vs target."
    assert target_check(totals, "600") == "Ahead by $0 vs target."
    assert target_check(totals, "850") == "Behind by $250 vs target."

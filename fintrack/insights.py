from typing import Any

from fintrack.config import FOOD_CATEGORY
from fintrack.domain import FinancialTotals
from fintrack.formatting import as_currency, format_percent
from fintrack.functional import first_match
from fintrack.metrics import target_gap
from fintrack.normalizer import coerce_number


def food_share(totals: FinancialTotals, income: Any) -> str:
    parsed_income = coerce_number(income)
    if parsed_income <= 0:
        return "0.0"
    food = first_match(totals.category_totals, lambda c: c.name == FOOD_CATEGORY)
    amount = food.map(lambda c: c.amount).get_or_else(0)
    return format_percent(amount / parsed_income * 100)


def generate_insights(totals: FinancialTotals, income: Any) -> tuple[str, str, str]:
    """The three dashboard insights, always in the same order."""
    highest = totals.highest_category
    return (
        f"{FOOD_CATEGORY} is {food_share(totals, income)}% of your income.",
        f"Your savings rate is {format_percent(totals.savings_rate)}%.",
        f"Top spending category: {highest.name} at {as_currency(highest.amount)}.",
    )


def target_check(totals: FinancialTotals, target_savings: Any) -> str:
    if target_savings is None or target_savings == "":
        return "Set a target savings value to track progress."
    gap = target_gap(totals, target_savings)
    direction = "Ahead by" if gap >= 0 else "Behind by"
    return f"{direction} {as_currency(abs(gap))} vs target."

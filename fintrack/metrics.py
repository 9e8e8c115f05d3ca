from functools import lru_cache
from typing import Any

from fintrack.domain import NO_CATEGORY, CategoryEntry, FinancialTotals
from fintrack.normalizer import coerce_number

OVERSPEND_WARNING = "Warning: Your expenses are higher than your monthly income."


@lru_cache(maxsize=128)
def compute_totals(income: Any, categories: tuple[CategoryEntry, ...]) -> FinancialTotals:
    parsed_income = coerce_number(income)
    category_totals = tuple(
        CategoryEntry(name=c.name, amount=coerce_number(c.amount)) for c in categories
    )

    total_expense = sum(c.amount for c in category_totals)
    savings = parsed_income - total_expense
    savings_rate = savings / parsed_income * 100 if parsed_income > 0 else 0

    # strictly greater: first category wins ties, sentinel wins at zero
    highest = NO_CATEGORY
    for c in category_totals:
        if c.amount > highest.amount:
            highest = c

    return FinancialTotals(
        category_totals=category_totals,
        total_expense=total_expense,
        savings=savings,
        savings_rate=savings_rate,
        highest_category=highest,
    )


def _is_negative(raw: Any) -> bool:
    if raw is None or raw == "":
        return False
    return coerce_number(raw) < 0


def validation_errors(income: Any, target_savings: Any, categories: tuple[CategoryEntry, ...]) -> tuple[str, ...]:
    errors = []
    if _is_negative(income):
        errors.append("Monthly income cannot be negative.")
    if _is_negative(target_savings):
        errors.append("Target savings cannot be negative.")
    for c in categories:
        if _is_negative(c.amount):
            errors.append(f"{c.name} expense cannot be negative.")
    return tuple(errors)


def overspend_warning(totals: FinancialTotals) -> str:
    return OVERSPEND_WARNING if totals.savings < 0 else ""


def chart_data(totals: FinancialTotals) -> tuple[CategoryEntry, ...]:
    return tuple(c for c in totals.category_totals if c.amount > 0)


def target_gap(totals: FinancialTotals, target_savings: Any) -> float:
    return totals.savings - coerce_number(target_savings)

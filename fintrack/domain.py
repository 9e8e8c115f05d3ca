from dataclasses import dataclass, field
from typing import Union

Amount = Union[int, float, str]


@dataclass(frozen=True)
class CategoryEntry:
    name: str
    amount: Amount = ""   # raw input until parsed


NO_CATEGORY = CategoryEntry(name="N/A", amount=0)


@dataclass(frozen=True)
class FinancialTotals:
    category_totals: tuple[CategoryEntry, ...]
    total_expense: float
    savings: float
    savings_rate: float
    highest_category: CategoryEntry


@dataclass(frozen=True)
class Snapshot:
    id: str
    month: str                # "YYYY-MM"
    income: float
    target_savings: float
    categories: tuple[CategoryEntry, ...]
    total_expense: float
    savings: float
    savings_rate: float
    created_at: int           # ms since epoch

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "month": self.month,
            "income": self.income,
            "targetSavings": self.target_savings,
            "categories": [{"name": c.name, "amount": c.amount} for c in self.categories],
            "totalExpense": self.total_expense,
            "savings": self.savings,
            "savingsRate": self.savings_rate,
            "createdAt": self.created_at,
        }


# Application state of one input session (raw strings as typed)
@dataclass(frozen=True)
class DashboardState:
    month: str
    income: str = ""
    target_savings: str = ""
    categories: tuple[CategoryEntry, ...] = field(default_factory=tuple)
    new_category: str = ""

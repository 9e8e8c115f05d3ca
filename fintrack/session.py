"""Input-session state and its transitions.

A ``DashboardState`` is never mutated: each transition returns a new state
(or the same one when the input is rejected), which keeps every derived
value a pure function of the state the UI currently holds.
"""

from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional

from fintrack.config import DEFAULT_CATEGORIES
from fintrack.domain import CategoryEntry, DashboardState, Snapshot
from fintrack.functional import Either, Right, rejection
from fintrack.history import HistoryStore
from fintrack.metrics import compute_totals, validation_errors
from fintrack.normalizer import coerce_number, make_id, now_ms


def current_month() -> str:
    return datetime.now().strftime("%Y-%m")


def initial_state(month: Optional[str] = None) -> DashboardState:
    return DashboardState(
        month=current_month() if month is None else month,
        categories=tuple(CategoryEntry(name) for name in DEFAULT_CATEGORIES),
    )


def set_month(state: DashboardState, month: str) -> DashboardState:
    return replace(state, month=month)


def set_income(state: DashboardState, income: str) -> DashboardState:
    return replace(state, income=income)


def set_target_savings(state: DashboardState, target: str) -> DashboardState:
    return replace(state, target_savings=target)


def set_new_category(state: DashboardState, name: str) -> DashboardState:
    return replace(state, new_category=name)


def add_category(state: DashboardState, name: Optional[str] = None) -> DashboardState:
    clean_name = (state.new_category if name is None else name).strip()
    if not clean_name:
        return state
    if any(c.name.lower() == clean_name.lower() for c in state.categories):
        return state
    return replace(
        state,
        categories=state.categories + (CategoryEntry(clean_name),),
        new_category="",
    )


def is_removable(category: CategoryEntry) -> bool:
    return category.name not in DEFAULT_CATEGORIES


def remove_category(state: DashboardState, index: int) -> DashboardState:
    if not 0 <= index < len(state.categories) or not is_removable(state.categories[index]):
        return state
    return replace(
        state,
        categories=tuple(c for i, c in enumerate(state.categories) if i != index),
    )


def update_category_amount(state: DashboardState, index: int, value: str) -> DashboardState:
    return replace(
        state,
        categories=tuple(
            CategoryEntry(c.name, value) if i == index else c
            for i, c in enumerate(state.categories)
        ),
    )


def unique_categories(categories: Iterable[CategoryEntry]) -> tuple[CategoryEntry, ...]:
    """Keep the first entry per case-insensitive name."""
    seen = set()
    kept = []
    for c in categories:
        key = c.name.lower()
        if key not in seen:
            seen.add(key)
            kept.append(c)
    return tuple(kept)


def load_snapshot(state: DashboardState, snapshot: Snapshot) -> DashboardState:
    """Put a saved month back into the input form."""
    return replace(
        state,
        month=snapshot.month,
        income=str(snapshot.income),
        target_savings=str(snapshot.target_savings or 0),
        categories=unique_categories(CategoryEntry(c.name, str(c.amount)) for c in snapshot.categories),
        new_category="",
    )


def build_snapshot(state: DashboardState, snapshot_id: Optional[str] = None, now: Optional[int] = None) -> Snapshot:
    totals = compute_totals(state.income, state.categories)
    return Snapshot(
        id=snapshot_id or make_id(),
        month=state.month,
        income=coerce_number(state.income),
        target_savings=coerce_number(state.target_savings),
        categories=totals.category_totals,
        total_expense=totals.total_expense,
        savings=totals.savings,
        savings_rate=totals.savings_rate,
        created_at=now_ms() if now is None else now,
    )


def _require_month(state: DashboardState) -> Either[dict, DashboardState]:
    if not state.month:
        return rejection("save_rejected", "Please select a month before saving a snapshot.")
    return Right(state)


def _require_valid_inputs(state: DashboardState) -> Either[dict, DashboardState]:
    errors = validation_errors(state.income, state.target_savings, state.categories)
    if errors:
        return rejection(
            "save_rejected",
            "Please fix validation errors before saving a snapshot.",
            errors=list(errors),
        )
    return Right(state)


def save_snapshot(
    state: DashboardState,
    history: HistoryStore,
    overwrite: bool = False,
    now: Optional[int] = None,
) -> Either[dict, Snapshot]:
    """Save the current inputs as the snapshot for ``state.month``.

    Rejected with ``save_rejected`` when no month is selected or validation
    messages are pending. A month that already has a snapshot comes back as
    ``duplicate_month`` until the caller repeats the call with
    ``overwrite=True``.
    """
    existing_id = history.find_by_month(state.month).map(lambda s: s.id).to_optional()
    return (
        Right(state)
        .bind(_require_month)
        .bind(_require_valid_inputs)
        .map(lambda s: build_snapshot(s, existing_id, now))
        .bind(lambda snapshot: history.save(snapshot, overwrite=overwrite))
    )


def confirm_overwrite(
    state: DashboardState,
    history: HistoryStore,
    pending_month: Optional[str],
    now: Optional[int] = None,
) -> Either[dict, Snapshot]:
    """Carry out an overwrite the user confirmed for ``pending_month``.

    The confirmation only covers that month; if the form has moved to
    another month since, nothing is saved.
    """
    if not pending_month or pending_month != state.month:
        return rejection(
            "stale_confirmation",
            f"The month changed since the overwrite prompt for {pending_month}. Save again to confirm.",
            month=state.month,
        )
    return save_snapshot(state, history, overwrite=True, now=now)

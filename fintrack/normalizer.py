"""Coercion of untrusted values and repair of persisted snapshot records.

``normalize_snapshot`` is the only way a stored record becomes a ``Snapshot``.
It accepts anything ``json.loads`` can produce (and more) and never raises.
"""

import math
import time
from collections.abc import Mapping, Sequence
from typing import Any, Optional
from uuid import uuid4

from fintrack.domain import CategoryEntry, Snapshot
from fintrack.functional import Maybe, Nothing, Some


def now_ms() -> int:
    return int(time.time() * 1000)


def make_id() -> str:
    return str(uuid4())


def coerce_number(value: Any, default: Optional[float] = 0) -> Optional[float]:
    """Parse ``value`` as a finite number, falling back to ``default``.

    Booleans count as 1/0, strings are trimmed before parsing, and empty,
    unparseable or non-finite values give ``default``. Integral results come
    back as ``int`` so that ``"50"`` and ``50`` compare and serialize alike.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return default
        value = text
    elif not isinstance(value, (int, float)):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if not math.isfinite(number):
        return default
    return int(number) if number.is_integer() else number


def _category_name(entry: Any) -> str:
    name = entry.get("name") if isinstance(entry, Mapping) else None
    return str(name).strip() if name else ""


def normalize_categories(raw: Any) -> tuple[CategoryEntry, ...]:
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        return ()
    categories = []
    for entry in raw:
        name = _category_name(entry)
        if not name:
            continue
        amount = entry.get("amount") if isinstance(entry, Mapping) else None
        categories.append(CategoryEntry(name=name, amount=coerce_number(amount)))
    return tuple(categories)


def normalize_snapshot(record: Any, now: Optional[int] = None) -> Maybe[Snapshot]:
    if not isinstance(record, Mapping):
        return Nothing()

    snapshot_id = record.get("id")
    month = record.get("month")
    created_at = coerce_number(record.get("createdAt"), default=None)

    return Some(Snapshot(
        id=snapshot_id if isinstance(snapshot_id, str) and snapshot_id else make_id(),
        month=month if isinstance(month, str) else "",
        income=coerce_number(record.get("income")),
        target_savings=coerce_number(record.get("targetSavings")),
        categories=normalize_categories(record.get("categories")),
        total_expense=coerce_number(record.get("totalExpense")),
        savings=coerce_number(record.get("savings")),
        savings_rate=coerce_number(record.get("savingsRate")),
        created_at=int(created_at) if created_at else (now if now is not None else now_ms()),
    ))

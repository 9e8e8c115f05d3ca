from fintrack.domain import CategoryEntry
from fintrack.normalizer import coerce_number, normalize_categories, normalize_snapshot

NOW = 1_700_000_000_000


def full_record(**overrides):
    record = {
        "id": "snap-1",
        "month": "2024-03",
        "income": 4000,
        "targetSavings": 500,
        "categories": [{"name": "Food", "amount": 300}, {"name": "Rent", "amount": 1500}],
        "totalExpense": 1800,
        "savings": 2200,
        "savingsRate": 55,
        "createdAt": 1_710_000_000_000,
    }
    record.update(overrides)
    return record


def test_coerce_number():
    assert coerce_number("50") == 50
    assert isinstance(coerce_number("50"), int)
    assert coerce_number(" 12.5 ") == 12.5
    assert coerce_number("") == 0
    assert coerce_number("abc") == 0
    assert coerce_number(None) == 0
    assert coerce_number([1]) == 0
    assert coerce_number(True) == 1
    assert coerce_number("inf") == 0
    assert coerce_number(float("nan"), default=7) == 7
    assert coerce_number(10 ** 400) == 0


def test_non_object_normalizes_to_nothing():
    for value in (None, 5, "snapshot", [1, 2], True):
        assert normalize_snapshot(value).is_none()


def test_well_formed_record_round_trips():
    record = full_record()
    snapshot = normalize_snapshot(record).get_or_else(None)
    assert snapshot.to_record() == record


def test_category_names_trimmed_and_amounts_coerced():
    snapshot = normalize_snapshot(full_record(categories=[{"name": " Food ", "amount": "50"}])).get_or_else(None)
    assert snapshot.categories == (CategoryEntry("Food", 50),)


def test_bad_categories_dropped_or_zeroed():
    raw = [
        {"name": "   ", "amount": 10},
        {"amount": 10},
        "Food",
        None,
        {"name": "Bills", "amount": "n/a"},
        {"name": 42, "amount": 3},
    ]
    assert normalize_categories(raw) == (CategoryEntry("Bills", 0), CategoryEntry("42", 3))
    assert normalize_categories({"name": "Food"}) == ()
    assert normalize_categories("Food") == ()
    assert normalize_categories(None) == ()


def test_missing_id_generated():
    first = normalize_snapshot(full_record(id="")).get_or_else(None)
    second = normalize_snapshot(full_record(id=17)).get_or_else(None)
    assert first.id and second.id
    assert first.id != second.id


def test_non_string_month_becomes_empty():
    snapshot = normalize_snapshot(full_record(month=202403)).get_or_else(None)
    assert snapshot.month == ""


def test_numeric_fields_default():
    snapshot = normalize_snapshot({"month": "2024-01", "income": "abc", "savings": None}, now=NOW).get_or_else(None)
    assert snapshot.income == 0
    assert snapshot.target_savings == 0
    assert snapshot.total_expense == 0
    assert snapshot.savings == 0
    assert snapshot.savings_rate == 0
    assert snapshot.created_at == NOW
    assert snapshot.categories == ()


def test_zero_created_at_defaults_to_now():
    snapshot = normalize_snapshot(full_record(createdAt=0), now=NOW).get_or_else(None)
    assert snapshot.created_at == NOW

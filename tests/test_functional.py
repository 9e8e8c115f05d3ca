from fintrack.functional import Some, Nothing, Either, Left, Right, first_match, rejection


def test_maybe_map():
    maybe_value = Some(5)
    doubled = maybe_value.map(lambda x: x * 2)

    assert doubled.is_some()
    assert doubled.get_or_else(0) == 10

    mapped_nothing = Nothing().map(lambda x: x * 2)
    assert mapped_nothing.is_none()
    assert mapped_nothing.get_or_else(0) == 0


def test_maybe_filter_and_to_optional():
    assert Some("2024-01").filter(bool) == Some("2024-01")
    assert Some("").filter(bool).is_none()
    assert Nothing().filter(bool).is_none()
    assert Some(3).to_optional() == 3
    assert Nothing().to_optional() is None


def test_either_map_and_bind():
    right_value = Right(5)
    assert right_value.map(lambda x: x * 2).get_or_else(0) == 10

    left_value = Left("error")
    mapped_left = left_value.map(lambda x: x * 2)
    assert mapped_left.is_left()
    assert mapped_left.get_or_else(0) == 0
    assert mapped_left.get_error() == "error"

    def non_empty(month: str) -> Either[str, str]:
        return Right(month) if month else Left("empty month")

    assert Right("2024-05").bind(non_empty) == Right("2024-05")
    assert Right("").bind(non_empty).get_error() == "empty month"
    assert Left("original").bind(non_empty).get_error() == "original"


def test_first_match():
    months = ("2024-01", "2024-02", "2024-03")
    assert first_match(months, lambda m: m.endswith("02")) == Some("2024-02")
    assert first_match(months, lambda m: m.startswith("1999")).is_none()
    assert first_match((), lambda m: True).is_none()


def test_rejection_builds_error_dict():
    result = rejection("save_rejected", "No month.", month="")
    assert result.is_left()
    assert result.get_error() == {"error": "save_rejected", "message": "No month.", "month": ""}

from fintrack.formatting import as_currency, format_percent


def test_as_currency_whole_dollars_with_separators():
    assert as_currency(1234) == "$1,234"
    assert as_currency(1234567.4) == "$1,234,567"
    assert as_currency(0) == "$0"


def test_as_currency_rounds_half_away_from_zero():
    assert as_currency(2.5) == "$3"
    assert as_currency(1234.5) == "$1,235"
    assert as_currency(-2.5) == "-$3"


def test_as_currency_negative():
    assert as_currency(-50) == "-$50"
    assert as_currency("-1500") == "-$1,500"


def test_as_currency_coerces_garbage_to_zero():
    assert as_currency("") == "$0"
    assert as_currency("abc") == "$0"
    assert as_currency(None) == "$0"
    assert as_currency(float("nan")) == "$0"


def test_format_percent_one_decimal():
    assert format_percent(25) == "25.0"
    assert format_percent(33.333) == "33.3"
    assert format_percent(12.25) == "12.3"
    assert format_percent(-12.5) == "-12.5"
    assert format_percent(0) == "0.0"

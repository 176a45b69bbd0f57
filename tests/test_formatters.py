import math

from sipplanner.utils.formatters import format_currency, format_number, format_percentage, format_years


def test_currency_uses_indian_grouping():
    assert format_currency(100) == "₹100"
    assert format_currency(1000) == "₹1,000"
    assert format_currency(100000) == "₹1,00,000"
    assert format_currency(1234567) == "₹12,34,567"
    assert format_currency(123456789) == "₹12,34,56,789"


def test_currency_rounds_to_whole_units():
    assert format_currency(999.5) == "₹1,000"
    assert format_currency(0.4) == "₹0"


def test_currency_negative_and_symbol_override():
    assert format_currency(-1500) == "-₹1,500"
    assert format_currency(-0.2) == "₹0"
    assert format_currency(2500, symbol="$") == "$2,500"


def test_currency_non_finite():
    assert format_currency(math.nan) == "₹NaN"
    assert format_currency(math.inf) == "₹∞"


def test_percentage_and_years():
    assert format_percentage(7) == "7%"
    assert format_percentage(7.0) == "7%"
    assert format_percentage(7.5) == "7.5%"
    assert format_years(1) == "1 year"
    assert format_years(5) == "5 years"
    assert format_years(2.5) == "2.5 years"


def test_format_number():
    assert format_number(5000000.0) == "5000000"
    assert format_number(6.5) == "6.5"
    assert format_number(3) == "3"

from pos_dashboard.formatting import (
    escape_dollar_for_markdown,
    format_currency,
    format_quantity,
    format_signed_currency,
    round_currency,
)


def test_round_currency_rounds_halves_up():
    assert round_currency(0.125) == 0.13
    assert round_currency(-0.125) == -0.12
    assert round_currency(1000 / 3) == 333.33
    assert round_currency(125) == 125


def test_format_currency():
    assert format_currency(1234567.891) == '$1,234,567.89'
    assert format_currency(1234.5, include_sign=False) == '1,234.50'
    assert format_signed_currency(-500) == '-$500.00'
    assert format_signed_currency(12) == '$12.00'


def test_format_quantity():
    assert format_quantity(12345) == '12,345'
    assert format_quantity(2.5, decimals=2) == '2.50'


def test_escape_dollar_for_markdown():
    assert escape_dollar_for_markdown('$5 y $6') == '\\$5 y \\$6'

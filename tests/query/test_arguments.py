"""Tests for numeric argument preconditions and InvalidArgumentError."""

import math
from fractions import Fraction

import pytest

from rowquery import Query
from rowquery.config import MAX_SAFE_INTEGER
from rowquery.core.arguments import is_number, is_safe_integer, require_integer, require_min
from rowquery.core.errors import InvalidArgumentError


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, True),
        (-7, True),
        (3.0, True),
        (MAX_SAFE_INTEGER, True),
        (MAX_SAFE_INTEGER + 1, False),
        (1.5, False),
        (Fraction(3, 2), False),
        (Fraction(4, 2), True),
        (math.nan, False),
        (math.inf, False),
        (True, False),
        ("3", False),
        (None, False),
    ],
    ids=[
        "zero",
        "negative",
        "integral_float",
        "max_safe",
        "above_max_safe",
        "fraction",
        "non_integral_rational",
        "integral_rational",
        "nan",
        "inf",
        "bool",
        "str",
        "none",
    ],
)
def test_is_safe_integer(value, expected):
    assert is_safe_integer(value) is expected


def test_is_number_excludes_bool():
    assert is_number(1.5) is True
    assert is_number(False) is False


def test_require_min_passes_at_bound():
    require_min("skip", 0, 0, 0)


def test_require_min_message():
    with pytest.raises(InvalidArgumentError) as exc_info:
        require_min("limit", 0, -3, 0)
    assert str(exc_info.value) == (
        "-3 is not a valid argument to param 0 on limit(). It should be equal or greater than 0."
    )


def test_require_integer_fields():
    with pytest.raises(InvalidArgumentError) as exc_info:
        require_integer("skip", 0, 1.5)
    err = exc_info.value
    assert err.method == "skip"
    assert err.param == 0
    assert err.argument == 1.5
    assert err.expected == "an integer"


def test_invalid_argument_error_is_value_error():
    assert issubclass(InvalidArgumentError, ValueError)


def test_skip_rejects_non_integral_rational():
    with pytest.raises(InvalidArgumentError, match="It should be an integer"):
        Query.from_rows([1, 2, 3]).skip(Fraction(3, 2))

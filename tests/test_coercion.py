## printfmt — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import math
from decimal import Decimal
from fractions import Fraction

import pytest

from printfmt.coercion import (coerce_integer, coerce_float, coerce_size, coerce_text,
                               coerce_char, coerce_truth, coerce_json, UNDEFINED_TEXT)


@pytest.mark.parametrize("value, expected", [
    (42, 42),
    (True, 1),
    (2**70, 2**70),
    (3.99, 3),
    (-3.99, -3),
    (1e20, 100000000000000000000),
    ("42", 42),
    (" -17 ", -17),
    ("0x1f", 31),
    ("-0b101", -5),
    ("12345678901234567890123", 12345678901234567890123),
    ("7.9", 7),
    (Decimal("7.5"), 7),
    (Fraction(7, 2), 3),
])
def test_integer_coercion(value, expected):
    assert coerce_integer(value) == (True, expected)


@pytest.mark.parametrize("value", ["junk", None, float("nan"), float("inf"), object(), Decimal("NaN")])
def test_integer_coercion_degrades_to_zero(value):
    assert coerce_integer(value) == (False, 0)


def test_float_coercion():
    assert coerce_float("1.5") == (True, 1.5)
    assert coerce_float("0x10") == (True, 16.0)
    assert coerce_float(Decimal("2.25")) == (True, 2.25)
    assert coerce_float("nope") == (False, 0.0)
    assert coerce_float(None) == (False, 0.0)
    assert coerce_float(10**400).value == math.inf
    assert math.isnan(coerce_float(float("nan")).value)


def test_size_coercion():
    assert coerce_size("7").value == 7
    assert coerce_size(-3).value == -3
    assert coerce_size(4.8).value == 4
    assert coerce_size(None) == (False, None)
    assert coerce_size("wide") == (False, None)


def test_text_coercion():
    assert coerce_text(None) == (False, UNDEFINED_TEXT)
    assert coerce_text(True).value == "true"
    assert coerce_text(12).value == "12"
    assert coerce_text([1, 2]).value == "[1, 2]"


def test_text_coercion_survives_broken_str():
    class Broken:
        def __str__(self): raise RuntimeError("nope")
    ok, text = coerce_text(Broken())
    assert not ok and "Broken" in text


def test_char_coercion():
    assert coerce_char("hello").value == "h"
    assert coerce_char(65).value == "A"
    assert coerce_char(9731).value == "☃"
    assert coerce_char("") == (False, "\x00")
    assert coerce_char(-1) == (False, "\x00")


def test_truth_coercion():
    assert coerce_truth(1).value is True
    assert coerce_truth("").value is False
    assert coerce_truth([]).value is False

    class Ambiguous:
        def __bool__(self): raise ValueError("ambiguous")
    assert coerce_truth(Ambiguous()) == (False, True)


def test_json_coercion():
    assert coerce_json({"a": [1, 2], "b": None}).value == '{"a":[1,2],"b":null}'
    assert coerce_json("é").value == '"é"'
    assert coerce_json({3, 1, 2}).value == "[1,2,3]"
    assert coerce_json(Decimal("1.5")).value == "1.5"
    assert coerce_json(object()) == (False, "null")


def test_integer_coercion_beyond_the_digit_conversion_limit():
    digits = "7" * 5000
    assert coerce_integer(digits).value == 7 * (10**5000 - 1) // 9
    assert coerce_integer("-" + digits).value == -7 * (10**5000 - 1) // 9
    assert coerce_integer("1e999999999") == (False, 0)
    assert coerce_integer(Decimal("1e999999999")) == (False, 0)
    assert coerce_integer("1e30").value == 10**30
    assert len(coerce_text(10**5000).value) == 5001
    assert coerce_text(-10**5000).value == "-1" + "0" * 5000


def test_json_coercion_maps_non_finite_numbers_to_null():
    assert coerce_json({"x": float("nan")}) == (True, '{"x":null}')
    assert coerce_json([float("inf"), 1.5]).value == "[null,1.5]"
    assert coerce_json(Decimal("Infinity")).value == "null"
    assert coerce_json(Decimal("1e999")).value == "null"

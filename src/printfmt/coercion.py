## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Argument coercion never raises: every helper returns a `Coerced` pair whose value is
# usable even when `ok` is False.
#

import re
import json
import math
import numbers
import logging
import operator
import dataclasses
from typing import Any, NamedTuple
from decimal import Decimal, InvalidOperation
from fractions import Fraction

from .formatting import int_to_decimal, decimal_to_int


log = logging.getLogger(__name__)

MAX_SAFE_INTEGER = 2**53 - 1
UNDEFINED_TEXT = '<undef>'
# Decimal arguments with more integer digits than this degrade to zero.
MAX_DECIMAL_DIGITS = 100_000

_INT_LITERAL = re.compile(r'[-+]?(?:\d+|0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+)')


class Coerced(NamedTuple):
    ok: bool
    value: Any


def _failed(value: Any, default: Any, kind: str) -> Coerced:
    log.debug("Could not coerce %r to %s, using %r.", value, kind, default)
    return Coerced(False, default)


## INTEGERS
def _parse_integer(text: str) -> Coerced:
    text = text.strip().replace('_', '')
    if text == '': return Coerced(True, 0)
    if _INT_LITERAL.fullmatch(text):
        sign, digits = (-1, text[1:]) if text[0] == '-' else (1, text.lstrip('+'))
        if digits[:2].lower() in ('0x', '0o', '0b'): return Coerced(True, sign * int(digits, 0))
        return Coerced(True, sign * decimal_to_int(digits))
    try:
        d = Decimal(text)
    except InvalidOperation:
        return _failed(text, 0, 'integer')
    return _decimal_to_integer(d)


def _decimal_to_integer(d: Decimal) -> Coerced:
    if not d.is_finite() or d.adjusted() >= MAX_DECIMAL_DIGITS: return _failed(d, 0, 'integer')
    return Coerced(True, int(d))


def coerce_integer(value: Any) -> Coerced:
    """Exact integer for the wide path, truncated machine number for the narrow path."""
    if isinstance(value, int): return Coerced(True, int(value))
    if isinstance(value, float):
        if not math.isfinite(value): return _failed(value, 0, 'integer')
        if abs(value) <= MAX_SAFE_INTEGER: return Coerced(True, math.trunc(value))
        return Coerced(True, int(value))
    if isinstance(value, (str, bytes)):
        text = value.decode('utf-8', 'replace') if isinstance(value, bytes) else value
        return _parse_integer(text)
    if isinstance(value, Decimal): return _decimal_to_integer(value)
    if isinstance(value, Fraction): return Coerced(True, int(value))
    if value is None: return _failed(value, 0, 'integer')
    try:
        return Coerced(True, operator.index(value))
    except TypeError:
        pass
    if isinstance(value, numbers.Real):
        try:
            return coerce_integer(float(value))
        except (TypeError, ValueError, OverflowError):
            pass
    return _failed(value, 0, 'integer')


## FLOATS
def coerce_float(value: Any) -> Coerced:
    if isinstance(value, float): return Coerced(True, value)
    if isinstance(value, int):
        try:
            return Coerced(True, float(value))
        except OverflowError:
            return Coerced(True, math.inf if value > 0 else -math.inf)
    if isinstance(value, (str, bytes)):
        text = (value.decode('utf-8', 'replace') if isinstance(value, bytes) else value).strip()
        if text == '': return Coerced(True, 0.0)
        if _INT_LITERAL.fullmatch(text.replace('_', '')):
            return coerce_float(_parse_integer(text).value)
        try:
            return Coerced(True, float(text))
        except ValueError:
            return _failed(value, 0.0, 'float')
    if value is None: return _failed(value, 0.0, 'float')
    try:
        return Coerced(True, float(value))
    except (TypeError, ValueError, OverflowError):
        return _failed(value, 0.0, 'float')


## WIDTH & PRECISION
def coerce_size(value: Any) -> Coerced:
    """Width or precision taken from an argument; no usable number means no constraint."""
    if value is None: return Coerced(False, None)
    number = coerce_float(value)
    if not number.ok or not math.isfinite(number.value): return _failed(value, None, 'size')
    return Coerced(True, math.trunc(number.value))


## TEXT
def coerce_text(value: Any) -> Coerced:
    if value is None: return Coerced(False, UNDEFINED_TEXT)
    if isinstance(value, str): return Coerced(True, value)
    if isinstance(value, bool): return Coerced(True, str(value).lower())
    if type(value) is int: return Coerced(True, int_to_decimal(value))
    try:
        return Coerced(True, str(value))
    except Exception:
        return _failed(value, object.__repr__(value), 'text')


def coerce_char(value: Any) -> Coerced:
    if isinstance(value, str):
        return Coerced(True, value[0]) if value else _failed(value, '\x00', 'char')
    code = coerce_integer(value)
    if code.ok and 0 <= code.value <= 0x10FFFF:
        return Coerced(True, chr(code.value))
    return _failed(value, '\x00', 'char')


def coerce_truth(value: Any) -> Coerced:
    try:
        return Coerced(True, bool(value))
    except Exception:
        # Ambiguous truth values (e.g. arrays) are still objects that exist.
        return _failed(value, True, 'boolean')


## STRUCTURED
def _finite(value: Any):
    """Replace non-finite floats with None, as JSON has no spelling for them."""
    match value:
        case float() if not math.isfinite(value): return None
        case dict(): return {k: _finite(v) for k, v in value.items()}
        case list() | tuple(): return [_finite(v) for v in value]
        case _: return value


def _json_default(value: Any):
    if isinstance(value, (Decimal, Fraction)):
        try:
            return _finite(float(value))
        except (OverflowError, ValueError):
            return None
    if isinstance(value, (set, frozenset)): return _finite(sorted(value, key=repr))
    if isinstance(value, (bytes, bytearray)): return value.decode('utf-8', 'replace')
    if dataclasses.is_dataclass(value) and not isinstance(value, type): return _finite(dataclasses.asdict(value))
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def coerce_json(value: Any) -> Coerced:
    try:
        return Coerced(True, json.dumps(_finite(value), separators=(',', ':'), ensure_ascii=False,
                                     allow_nan=False, default=_json_default))
    except (TypeError, ValueError, RecursionError):
        return _failed(value, 'null', 'json')

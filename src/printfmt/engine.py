## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import math
from typing import Any, Callable, NamedTuple, Sequence

from .types import Conversion, Directive, Star
from .tokenizer import tokenize
from .formatting import RADIX_PREFIXES, pad, split_sign, to_radix
from .coercion import coerce_integer, coerce_float, coerce_size, coerce_text, coerce_char, coerce_truth, coerce_json


class ArgumentCursor:
    """Positional arguments with the implicit sequential pointer."""

    def __init__(self, values: Sequence[Any]):
        self.values = values if isinstance(values, (list, tuple)) else list(values)
        self.offset = 0

    def at(self, position: int) -> Any:
        # 1-based; out of range is the same as a missing argument.
        return self.values[position - 1] if 1 <= position <= len(self.values) else None

    def next(self) -> Any:
        self.offset += 1
        return self.at(self.offset)


class Field(NamedTuple):
    width: int | None
    precision: int | None
    left: bool
    zero: bool


def _resolve_star(star: Star | None, cursor: ArgumentCursor) -> int | None:
    if star is None: return None
    match star.kind:
        case Star.LITERAL: return star.value
        case Star.NEXT: return coerce_size(cursor.next()).value
        case Star.INDIRECT: return coerce_size(cursor.at(star.value)).value


def _resolve_field(d: Directive, cursor: ArgumentCursor) -> Field:
    width = _resolve_star(d.width, cursor)
    precision = _resolve_star(d.precision, cursor)
    left = d.left
    # A negative width from an argument means left-justify; a negative precision means none.
    if width is not None and width < 0: width, left = -width, True
    if precision is not None and precision < 0: precision = None
    return Field(width, precision, left, d.zero and not left)


## CONVERSIONS
def _fmt_string(d: Directive, value: Any, f: Field) -> str:
    text = coerce_text(value).value
    if f.precision is not None: text = text[:f.precision]
    return pad(text, f.width, f.left, f.zero)


_RADIX = {
    Conversion.DECIMAL: 10, Conversion.INTEGER: 10, Conversion.UNSIGNED: 10,
    Conversion.OCTAL: 8, Conversion.HEX: 16, Conversion.HEX_UPPER: 16,
    Conversion.BINARY: 2, Conversion.BINARY_UPPER: 2,
}

def _fmt_integer(d: Directive, value: Any, f: Field) -> str:
    n = coerce_integer(value).value
    radix = _RADIX[d.conversion]
    digits = to_radix(abs(n), radix)
    if f.precision is not None: digits = digits.rjust(f.precision, '0')
    if radix == 10:
        prefix = d.sign_for(n < 0)
    elif d.alternate and n != 0 and not (radix == 8 and digits.startswith('0')):
        prefix = RADIX_PREFIXES[radix]
    else:
        prefix = ''
    if d.conversion.upper: digits, prefix = digits.upper(), prefix.upper()
    return pad(digits, f.width, f.left, f.zero, prefix)


def _fmt_float(d: Directive, value: Any, f: Field) -> str:
    x = coerce_float(value).value
    sign = '+' if '+' in d.flags else ' ' if ' ' in d.flags else '-'
    spec = f"{sign}{'#' if d.alternate else ''}.{6 if f.precision is None else f.precision}{d.conversion.value}"
    sign, body = split_sign(format(x, spec))
    return pad(body, f.width, f.left, f.zero and math.isfinite(x), sign)


def _fmt_char(d: Directive, value: Any, f: Field) -> str:
    return pad(coerce_char(value).value, f.width, f.left)


def _fmt_boolean(d: Directive, value: Any, f: Field) -> str:
    truthy = coerce_truth(value).value
    text = ('yes' if truthy else 'no') if d.alternate else ('true' if truthy else 'false')
    if d.conversion.upper: text = text.upper()
    return pad(text, f.width, f.left, f.zero)


def _fmt_json(d: Directive, value: Any, f: Field) -> str:
    return pad(coerce_json(value).value, f.width, f.left)


HANDLERS: dict[Conversion, Callable[[Directive, Any, Field], str]] = {
    Conversion.STRING: _fmt_string,
    **{conv: _fmt_integer for conv in _RADIX},
    **{conv: _fmt_float for conv in (Conversion.FIXED, Conversion.FIXED_UPPER, Conversion.EXPONENT,
                                     Conversion.EXPONENT_UPPER, Conversion.SHORTEST, Conversion.SHORTEST_UPPER)},
    Conversion.CHAR: _fmt_char,
    Conversion.BOOLEAN: _fmt_boolean, Conversion.BOOLEAN_UPPER: _fmt_boolean,
    Conversion.JSON: _fmt_json, Conversion.JSON_UPPER: _fmt_json,
}

assert set(HANDLERS) == set(Conversion), "Every conversion needs exactly one handler."


def format_directive(d: Directive, cursor: ArgumentCursor) -> str:
    if d.escape: return '%'
    # Width, then precision, then the value: each may take the next sequential argument.
    field = _resolve_field(d, cursor)
    value = cursor.at(d.position) if d.position is not None else cursor.next()
    if (handler := HANDLERS.get(d.conversion)) is None:
        return d.text
    return handler(d, value, field)


def vsprintf(template: str, args: Sequence[Any]) -> str:
    if '%' not in template: return template

    cursor = ArgumentCursor(args)
    out = []
    for item in tokenize(template):
        out.append(item if isinstance(item, str) else format_directive(item, cursor))
    return ''.join(out)


def sprintf(template: str, *args: Any) -> str:
    return vsprintf(template, args)

## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re


RADIX_PREFIXES = {8: '0', 16: '0x', 2: '0b'}


def to_radix(n: int, radix: int) -> str:
    match radix:
        case 2: return format(n, 'b')
        case 8: return format(n, 'o')
        case 16: return format(n, 'x')
        case _: return int_to_decimal(n)


def int_to_decimal(n: int) -> str:
    """Decimal digits of `n`, also above the interpreter's int/str conversion limit."""
    try:
        return str(n)
    except ValueError:
        pass
    if n < 0: return '-' + int_to_decimal(-n)
    # Split around a power of ten holding roughly half of the digits.
    k = n.bit_length() * 3 // 20
    hi, lo = divmod(n, 10**k)
    return int_to_decimal(hi) + int_to_decimal(lo).rjust(k, '0')


def decimal_to_int(digits: str) -> int:
    """Parse a run of decimal digits of any length."""
    try:
        return int(digits, 10)
    except ValueError:
        if not digits.isdigit(): raise
    half = len(digits) // 2
    return decimal_to_int(digits[:-half]) * 10**half + decimal_to_int(digits[-half:])


def pad(text: str, width: int | None, left: bool = False, zero: bool = False, prefix: str = '') -> str:
    """Pad `prefix + text` to `width`; zeros go between the prefix (sign, radix marker) and the digits."""
    if width is None or len(prefix) + len(text) >= width:
        return prefix + text
    fill = width - len(prefix) - len(text)
    if left: return prefix + text + ' ' * fill
    if zero: return prefix + '0' * fill + text
    return ' ' * fill + prefix + text


def split_sign(text: str) -> tuple[str, str]:
    if text[:1] in ('-', '+', ' '): return text[:1], text[1:]
    return '', text


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))

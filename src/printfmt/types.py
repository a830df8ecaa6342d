## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from enum import Enum
from typing import Any, Mapping, Sequence
from dataclasses import dataclass


class Conversion(Enum):
    STRING = 's'
    DECIMAL = 'd'
    INTEGER = 'i'
    UNSIGNED = 'u'
    OCTAL = 'o'
    HEX = 'x'
    HEX_UPPER = 'X'
    BINARY = 'b'
    BINARY_UPPER = 'B'
    FIXED = 'f'
    FIXED_UPPER = 'F'
    EXPONENT = 'e'
    EXPONENT_UPPER = 'E'
    SHORTEST = 'g'
    SHORTEST_UPPER = 'G'
    CHAR = 'c'
    BOOLEAN = 'y'
    BOOLEAN_UPPER = 'Y'
    JSON = 'j'
    JSON_UPPER = 'J'

    @property
    def upper(self) -> bool:
        return self.value.isupper()


class Star:
    """Width or precision as written in a directive: `12`, `*` or `*3$`."""
    LITERAL = 1
    INDIRECT = 2
    NEXT = 3

    __slots__ = ('kind', 'value')

    def __init__(self, kind, value=None):
        self.kind = kind
        self.value = value

    @classmethod
    def from_token(cls, tok: str | None) -> "Star | None":
        if not tok: return None
        if tok == '*': return cls(cls.NEXT)
        if tok.startswith('*'): return cls(cls.INDIRECT, int(tok[1:-1]))
        # `N$` after the flags is not a size; it carries no constraint.
        if tok.endswith('$'): return None
        return cls(cls.LITERAL, int(tok))

    def __eq__(self, other):
        return isinstance(other, Star) and (self.kind, self.value) == (other.kind, other.value)

    def __hash__(self):
        return hash((self.kind, self.value))

    def __repr__(self):
        match self.kind:
            case Star.NEXT: return "Star(*)"
            case Star.INDIRECT: return f"Star(*{self.value}$)"
            case _: return f"Star({self.value})"


@dataclass(frozen=True)
class Directive:
    text: str                           # raw source, emitted verbatim when unhandled
    conversion: Conversion | None       # None only for the `%%` escape
    position: int | None = None         # 1-based explicit argument index
    flags: str = ''
    width: Star | None = None
    precision: Star | None = None
    length: str | None = None           # hh, h, ll, l, L; accepted and ignored

    @property
    def escape(self) -> bool:
        return self.conversion is None

    @property
    def left(self) -> bool: return '-' in self.flags
    @property
    def zero(self) -> bool: return '0' in self.flags and '-' not in self.flags
    @property
    def alternate(self) -> bool: return '#' in self.flags

    def sign_for(self, negative: bool) -> str:
        if negative: return '-'
        return '+' if '+' in self.flags else ' ' if ' ' in self.flags else ''


## FORMAT MAPS
@dataclass(frozen=True)
class NameMap:
    """Names are implicitly assigned indices 1..N in list order."""
    names: tuple[str, ...]

    def index_of(self, name: str) -> int | None:
        return self.names.index(name) + 1 if name in self.names else None

    def slots(self) -> list[str | None]:
        return list(self.names)


@dataclass(frozen=True)
class IndexMap:
    """Explicit `(name, index)` pairs; indices may be sparse, reused or out of order.

    Named arguments are placed at slot `index - 1`; when an index is reused, the pair that sorts
    last (by index, then declaration order) owns the slot and the others are not read.
    """
    pairs: tuple[tuple[str, int], ...]

    def index_of(self, name: str) -> int | None:
        return next((idx for n, idx in self.pairs if n == name), None)

    def slots(self) -> list[str | None]:
        slots: list[str | None] = [None] * max((idx for _, idx in self.pairs), default=0)
        for name, idx in sorted(self.pairs, key=lambda p: p[1]):
            if idx >= 1: slots[idx - 1] = name
        return slots


FormatMap = NameMap | IndexMap

DEFAULT_FORMAT_ARGS = ('date', 'type', 'level', 'message')
DEFAULT_FORMAT_MAP = NameMap(DEFAULT_FORMAT_ARGS)


def as_format_map(value: Any) -> FormatMap:
    """Accept a ready map, a list of names, or a list of `(name, index)` pairs."""
    if value is None: return DEFAULT_FORMAT_MAP
    if isinstance(value, (NameMap, IndexMap)): return value
    if isinstance(value, Mapping):
        return IndexMap(tuple((str(k), int(v)) for k, v in value.items()))
    items = tuple(value)
    if items and all(isinstance(it, (tuple, list)) and len(it) == 2 for it in items):
        return IndexMap(tuple((str(n), int(i)) for n, i in items))
    return NameMap(tuple(str(n) for n in items))


## ARGUMENT SOURCES
@dataclass(frozen=True)
class Sequential:
    """Variadic arguments, formatted positionally without name resolution."""
    values: Sequence[Any]

@dataclass(frozen=True)
class Indexed:
    """Array of arguments for a template that may still contain named placeholders."""
    values: Sequence[Any]
    format_map: FormatMap = DEFAULT_FORMAT_MAP

@dataclass(frozen=True)
class Named:
    """Object of arguments read off by the names declared in the format map."""
    values: Mapping[str, Any]
    format_map: FormatMap = DEFAULT_FORMAT_MAP


ArgumentSource = Sequential | Indexed | Named


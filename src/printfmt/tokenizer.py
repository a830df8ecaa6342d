## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
from typing import Iterator

import lark
from .types import Conversion, Directive, Star


# Upper-case F, E and G are accepted alongside the lower-case float verbs.
CONVERSIONS = 'bcdefgiosuxXyYjJBFEG'

#                %    [pos]                [flags]            [width]
DIRECTIVE = (r"%(?:%|(?:(?P<position>\d+)\$)?(?P<flags>[-+ 0#']*)(?P<width>\*(?:\d+\$)?|\d+\$|\d+)?"
#                [.prec]                            [len]                        [verb]
             r"(?:\.(?P<precision>\*(?:\d+\$)?|\d+\$|\d+))?(?P<length>hh|h|ll|l|L)?(?P<conv>[" + CONVERSIONS + r"]))")

DIRECTIVE_RE = re.compile(DIRECTIVE)


# Literal text is either a run without `%`, or a single `%` that does not start a directive.
GRAMMAR = r"""start: (DIRECTIVE | TEXT | PERCENT)*

DIRECTIVE.3: /%s/
TEXT.2: /[^%%]+/
PERCENT.1: "%%"
""" % re.sub(r'\(\?P<\w+>', '(?:', DIRECTIVE)

_LEXER = lark.Lark(GRAMMAR, parser="lalr", lexer="basic")


def parse_directive(text: str) -> Directive | None:
    """Decode the fields of a single directive, or None if `text` is not one."""
    if (m := DIRECTIVE_RE.fullmatch(text)) is None: return None
    if text == '%%': return Directive(text, None)
    return Directive(
        text, Conversion(m['conv']),
        position=int(m['position']) if m['position'] else None,
        flags=m['flags'] or '',
        width=Star.from_token(m['width']),
        precision=Star.from_token(m['precision']),
        length=m['length'])


def tokenize(template: str) -> Iterator[str | Directive]:
    text = []
    for tok in _LEXER.lex(template):
        if tok.type == 'DIRECTIVE':
            if text:
                yield ''.join(text)
                text = []
            yield parse_directive(str(tok))
        else:
            text.append(str(tok))
    if text:
        yield ''.join(text)

## printfmt — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Conversion, Directive, NameMap, IndexMap, Sequential, Indexed, Named, DEFAULT_FORMAT_MAP
from .errors import *
from .engine import sprintf, vsprintf
from .compiler import CompileCache
from .runtime import Formatter

_FORMATTER = Formatter()

def __getattr__(name):
    return getattr(_FORMATTER, name)

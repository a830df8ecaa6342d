## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import logging
import threading

from .types import FormatMap, NameMap, IndexMap, DEFAULT_FORMAT_MAP
from .errors import FormatNameError
from .tokenizer import CONVERSIONS


log = logging.getLogger(__name__)

NAMED = re.compile(r"%([-+ 0#'*0-9.]*)([A-Za-z_]\w*)\$([" + CONVERSIONS + r"])", re.ASCII)


class CompileCache:
    """Compiled templates keyed by their source string only; entries are never evicted.

    The key ignores the format map: once a template is compiled, later calls return the same
    positional form even when they pass a different map.
    """

    def __init__(self):
        self.entries: dict[str, str] = {}
        self.hits = 0
        self.misses = 0
        self._lock = threading.Lock()

    def get(self, template: str) -> str | None:
        return self.entries.get(template)

    def store(self, template: str, compiled: str) -> str:
        with self._lock:
            # First writer wins; the value is deterministic for a template and map anyway.
            return self.entries.setdefault(template, compiled)

    def clear(self) -> None:
        with self._lock:
            self.entries.clear()
            self.hits = self.misses = 0

    def __contains__(self, template: str) -> bool:
        return template in self.entries

    def __len__(self) -> int:
        return len(self.entries)


def _compile_index_map(template: str, fmt_map: IndexMap) -> str:
    out = template
    for name, idx in fmt_map.pairs:
        # Plain textual substitution, in map order; the prefix run is kept as-is.
        out = re.sub(r"([-%+ 0#'.*0-9]*)" + re.escape(name), lambda m: f"{m[1]}{idx}", out)
    return out


def _compile_name_map(template: str, fmt_map: NameMap) -> str:
    def _replace(m: re.Match) -> str:
        prefix, name, conv = m.groups()
        if (idx := fmt_map.index_of(name)) is None:
            raise FormatNameError(f"Placeholder `{name}` is not declared in the format map.",
                                  fmt_token=name, fmt_template=template)
        return f"%{prefix}{idx}${conv}"
    return NAMED.sub(_replace, template)


def compile_format(template: str, fmt_map: FormatMap = DEFAULT_FORMAT_MAP, cache: CompileCache | None = None) -> str:
    if cache is not None and (compiled := cache.get(template)) is not None:
        cache.hits += 1
        log.debug("Compile cache hit for %r.", template)
        return compiled

    match fmt_map:
        case IndexMap():
            compiled = _compile_index_map(template, fmt_map)
        case NameMap():
            compiled = _compile_name_map(template, fmt_map)
        case _:
            raise TypeError(f"Unsupported format map {type(fmt_map).__name__}.")

    if cache is None: return compiled
    cache.misses += 1
    log.debug("Compiled %r into %r.", template, compiled)
    return cache.store(template, compiled)

## printfmt — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Mapping

from .types import ArgumentSource, FormatMap, Sequential, Indexed, Named, as_format_map
from .engine import vsprintf
from .compiler import CompileCache, compile_format


class Formatter:
    """Formatting facade that owns one compiled-template cache."""

    def __init__(self, cache: CompileCache | None = None, format_map: Any = None):
        self.cache = cache if cache is not None else CompileCache()
        self.format_map: FormatMap = as_format_map(format_map)

    def _map(self, format_map: Any) -> FormatMap:
        return self.format_map if format_map is None else as_format_map(format_map)

    # Compilation ─────────────────────────────────────────────────────────────────────────────
    def compile(self, template: str, format_map: Any = None) -> str:
        return compile_format(template, self._map(format_map), self.cache)

    # Formatting ──────────────────────────────────────────────────────────────────────────────
    def format(self, template: str, *args: Any) -> str:
        return self.render(template, Sequential(args))

    def format_args(self, template: str, args) -> str:
        return vsprintf(template, args)

    def format_named(self, template: str, args, format_map: Any = None) -> str:
        fmt_map = self._map(format_map)
        if isinstance(args, Mapping):
            return self.render(template, Named(args, fmt_map))
        return self.render(template, Indexed(args, fmt_map))

    def render(self, template: str, source: ArgumentSource) -> str:
        match source:
            case Sequential(values=values):
                return vsprintf(template, values)
            case Indexed(values=values, format_map=fmt_map):
                return vsprintf(self.compile(template, fmt_map), values)
            case Named(values=values, format_map=fmt_map):
                argv = [None if name is None else values.get(name) for name in fmt_map.slots()]
                return vsprintf(self.compile(template, fmt_map), argv)
            case _:
                raise TypeError(f"Unsupported argument source {type(source).__name__}.")

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def is_compiled(self, template: str) -> bool:
        return template in self.cache

    def clear_cache(self) -> None:
        self.cache.clear()

## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# printfmt — POSIX printf-style formatting with named placeholders, from the command line.
#

import os
import sys
import json
import logging
from dataclasses import dataclass

import click

from .errors import FormatError
from .types import IndexMap, NameMap, DEFAULT_FORMAT_MAP
from .formatting import write_without_ansi
from .runtime import Formatter


@dataclass(frozen=True)
class RunConfig:
    verbose: int
    plain: bool


DEMO = [
    ("vsprintf", "%-1$s %-2$s: %4$s", ["2025-04-26", "ERROR", "unused", "Disk full"]),
    ("named", "%-date$s %-type$s: %message$s", {"date": "2025-04-26", "type": "ERROR", "message": "Disk full"}),
    ("sprintf", "%#llx", [0x1_ffff_ffff_fff]),
    ("sprintf", "%#B", [42]),
]


def _configure_logging(config: RunConfig) -> None:
    level = logging.DEBUG if os.environ.get('PRINTFMT_DEBUG') or config.verbose >= 2 else \
            logging.INFO if config.verbose == 1 else logging.WARNING
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s', stream=sys.stderr)


def _parse_map(entries: tuple[str, ...]):
    if not entries: return DEFAULT_FORMAT_MAP
    if any('=' in e for e in entries):
        pairs = []
        for entry in entries:
            name, sep, index = entry.partition('=')
            if not sep or not index.isdigit():
                raise click.BadParameter(f"Expected NAME=INDEX for every map entry, got `{entry}`.")
            pairs.append((name, int(index)))
        return IndexMap(tuple(pairs))
    return NameMap(tuple(entries))


def _parse_value(text: str, as_json: bool):
    if not as_json: return text
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Argument `{text}` is not valid JSON: {exc.msg}.")


def _report(exc: FormatError) -> None:
    print(f'\033[30;43m COMPILE ERROR. \033[0m Placeholder `\033[1;97m{exc.fmt_token}\033[0m` is not in the format map.', file=sys.stderr)
    if exc.fmt_template is not None:
        print(f'\033[90m  {exc.fmt_template}\033[0m', file=sys.stderr)


@click.group(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--verbose', '-v', default=0, count=True, help='Increase logging verbosity (-vv for debug).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes from all output.')
@click.pass_context
def cli(ctx: click.Context, verbose: int, plain: bool) -> None:
    config = RunConfig(verbose=verbose, plain=plain)
    if config.plain:
        sys.stdout.write = write_without_ansi(sys.stdout.write)
        sys.stderr.write = write_without_ansi(sys.stderr.write)
    _configure_logging(config)
    ctx.ensure_object(dict)
    ctx.obj['config'] = config
    ctx.obj['formatter'] = Formatter()


@cli.command('format')
@click.argument('template')
@click.argument('args', nargs=-1)
@click.option('--json', '-j', 'as_json', is_flag=True, help='Parse each argument as a JSON value.')
@click.option('--named', '-n', is_flag=True, help='Arguments are NAME=VALUE pairs for named placeholders.')
@click.option('--map', '-m', 'map_entries', multiple=True, help='Format map entry, NAME or NAME=INDEX (repeatable).')
@click.pass_context
def format_cmd(ctx: click.Context, template: str, args: tuple[str, ...], as_json: bool, named: bool,
               map_entries: tuple[str, ...]) -> None:
    formatter: Formatter = ctx.obj['formatter']
    try:
        if named:
            values = {}
            for arg in args:
                name, sep, raw = arg.partition('=')
                if not sep: raise click.BadParameter(f"Expected NAME=VALUE, got `{arg}`.")
                values[name] = _parse_value(raw, as_json)
            result = formatter.format_named(template, values, _parse_map(map_entries))
        elif map_entries:
            result = formatter.format_named(template, [_parse_value(a, as_json) for a in args], _parse_map(map_entries))
        else:
            result = formatter.format(template, *(_parse_value(a, as_json) for a in args))
    except FormatError as exc:
        _report(exc)
        ctx.exit(1)
    click.echo(result)


@cli.command('compile')
@click.argument('template')
@click.option('--map', '-m', 'map_entries', multiple=True, help='Format map entry, NAME or NAME=INDEX (repeatable).')
@click.pass_context
def compile_cmd(ctx: click.Context, template: str, map_entries: tuple[str, ...]) -> None:
    formatter: Formatter = ctx.obj['formatter']
    try:
        click.echo(formatter.compile(template, _parse_map(map_entries)))
    except FormatError as exc:
        _report(exc)
        ctx.exit(1)


@cli.command('demo')
@click.pass_context
def demo_cmd(ctx: click.Context) -> None:
    formatter: Formatter = ctx.obj['formatter']
    for kind, template, args in DEMO:
        match kind:
            case "named": result = formatter.format_named(template, args)
            case "vsprintf": result = formatter.format_args(template, args)
            case _: result = formatter.format(template, *args)
        click.echo(f"\033[90m{template:<32}\033[0m {result}")


def main(argv: list[str] | None = None) -> None:
    cli.main(args=argv, prog_name='printfmt')


if __name__ == "__main__":
    main()

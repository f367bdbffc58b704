"""tsmatchup locate command - find a delimiter and its matches in a file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click

from tsmatchup.config import load_config
from tsmatchup.core.errors import ConfigError, InvalidOptionError
from tsmatchup.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    set_request_id,
)
from tsmatchup.engine.service import MatchupEngine
from tsmatchup.treesitter.grammars import detect_language

log = get_logger("cli.locate")


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-l", "--line", type=int, required=True, help="1-based cursor line")
@click.option("-c", "--column", type=int, default=1, show_default=True, help="1-based column")
@click.option(
    "-d",
    "--direction",
    default="current",
    show_default=True,
    help="current, next or prev",
)
@click.option(
    "-s",
    "--side",
    default="both_all",
    show_default=True,
    help="open, mid, close, both, both_all or open_mid",
)
@click.option("--language", default=None, help="Override language detection")
@click.option("--no-mids", is_flag=True, help="Ignore mid delimiters")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def locate_command(
    ctx: click.Context,
    file: Path,
    line: int,
    column: int,
    direction: str,
    side: str,
    language: str | None,
    no_mids: bool,
    as_json: bool,
) -> None:
    """Locate the delimiter at LINE:COLUMN of FILE and list its matches."""
    if line < 1 or column < 1:
        raise click.BadParameter("line and column are 1-based")

    try:
        config = load_config(Path.cwd())
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    if not (ctx.obj or {}).get("verbose"):
        configure_logging(config=config.logging)
    set_request_id()
    ctx.call_on_close(clear_request_id)

    language = language or detect_language(file)
    if language is None:
        raise click.ClickException(f"Cannot detect language of {file}; pass --language")

    engine, store = MatchupEngine.create(config)
    document_id = str(file.resolve())
    if store is not None:
        store.open(document_id, file.read_bytes(), language)
    engine.attach(document_id, language)

    if not engine.is_enabled(document_id):
        _fail(as_json, {"enabled": False, "language": language}, f"Not enabled for {language}")

    suppress = no_mids or config.matching.suppress_mid_markers
    try:
        options = engine.options(
            cursor=(line - 1, column - 1),
            direction=direction,
            side=side,
            suppress_mids=suppress,
        )
    except InvalidOptionError as e:
        raise click.ClickException(str(e)) from e

    delim = engine.get_delimiter(document_id, options)
    if delim is None:
        _fail(as_json, {"enabled": True, "delimiter": None}, "No delimiter found")
        return

    forward = engine.get_matching(delim.id, True, document_id, suppress_mids=suppress)
    backward = engine.get_matching(delim.id, False, document_id, suppress_mids=suppress)
    log.debug("locate_done", forward=len(forward), backward=len(backward))

    if as_json:
        click.echo(
            json.dumps(
                {
                    "enabled": True,
                    "delimiter": delim.to_dict(),
                    "backward": [list(m) for m in backward],
                    "forward": [list(m) for m in forward],
                }
            )
        )
        return

    click.echo(f"{delim.side.value} {delim.key} {delim.text!r} at {delim.line}:{delim.column}")
    for entry in backward:
        click.echo(f"  <- {entry.text!r} {entry.line}:{entry.column}")
    for entry in forward:
        label = repr(entry.text) if entry.text else "(scope end)"
        click.echo(f"  -> {label} {entry.line}:{entry.column}")


def _fail(as_json: bool, payload: dict[str, Any], message: str) -> None:
    if as_json:
        click.echo(json.dumps(payload))
    else:
        click.echo(message, err=True)
    raise SystemExit(1)

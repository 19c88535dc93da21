# chara_card/cli.py
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich import box

from .config import load_settings
from .errors import CardExtractionError
from .extract import extract_card_file, scan_directory
from .logging_config import setup_logging
from .normalize import build_manifest, card_summary
from .util import json_safe


app = typer.Typer(add_completion=False, help="Extract JSON character cards embedded in PNG images")
console = Console()
err_console = Console(stderr=True, soft_wrap=True)

logger = logging.getLogger("chara_card.cli")

USAGE = "Usage: chara-card extract <card.png> [--raw]"


def _settings(verbose: bool):
    try:
        s = load_settings()
    except ValueError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    setup_logging(logging.DEBUG if verbose else s.log_level)
    return s


@app.command("extract")
def extract(
    path: Optional[Path] = typer.Argument(None, help="PNG file holding the card"),
    raw: bool = typer.Option(False, "--raw", help="Print the embedded text as found instead of re-serialized JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
):
    if path is None:
        err_console.print(escape(USAGE))
        raise typer.Exit(1)
    s = _settings(verbose)

    try:
        result = extract_card_file(path, s.keyword)
    except (CardExtractionError, OSError) as e:
        logger.debug("Extraction failed for %s", path, exc_info=True)
        err_console.print(f"[red]{type(e).__name__}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if raw:
        typer.echo(result.raw_text, nl=False)
    else:
        typer.echo(json.dumps(json_safe(result.parsed), indent=s.json_indent, ensure_ascii=False, allow_nan=False))


@app.command("scan")
def scan(
    directory: Path = typer.Argument(..., help="Directory searched recursively for *.png cards"),
    manifest: Optional[Path] = typer.Option(None, "--manifest", help="Also write a JSON manifest of the scan to this path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
):
    s = _settings(verbose)
    if not directory.is_dir():
        err_console.print(f"[red]Not a directory: {escape(str(directory))}[/red]")
        raise typer.Exit(1)

    table = Table(title="Character Cards", box=box.SIMPLE_HEAVY)
    table.add_column("File")
    table.add_column("Keyword")
    table.add_column("Name")
    table.add_column("Links")
    table.add_column("Status")

    outcomes = list(scan_directory(directory, s.keyword))
    found = ok = 0
    for path, outcome in outcomes:
        found += 1
        rel = escape(path.relative_to(directory).as_posix())
        if isinstance(outcome, Exception):
            table.add_row(rel, "", "", "", f"[red]{type(outcome).__name__}[/red]")
            continue
        ok += 1
        summary = card_summary(outcome.parsed)
        table.add_row(
            rel, escape(outcome.keyword), escape(summary["name"]),
            str(summary["links_count"]), "[green]ok[/green]",
        )

    console.print(table)
    console.print(f"[green]Done: {ok}/{found} card(s) extracted.[/green]")
    if manifest is not None:
        data = build_manifest(directory, outcomes)
        try:
            manifest.parent.mkdir(parents=True, exist_ok=True)
            manifest.write_text(json.dumps(json_safe(data), indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            err_console.print(f"[red]{type(e).__name__}: {escape(str(e))}[/red]")
            raise typer.Exit(1)
        console.print(f"[cyan]Manifest: {escape(str(manifest))} ({data['count']} item(s), {len(data['errors'])} error(s))[/cyan]")
        logger.info("Wrote manifest %s", manifest)
    if found and not ok:
        raise typer.Exit(2)

def main():
    app()

if __name__ == "__main__":
    main()

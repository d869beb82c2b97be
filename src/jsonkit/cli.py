"""Command line interface."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from jsonkit.accessors import extract_path
from jsonkit.config import JsonKitConfig, load_config
from jsonkit.errors import DecodeError
from jsonkit.io.json_io import load_from_file, load_from_url, write_json
from jsonkit.io.printing import render

app = typer.Typer(help="Normalize and query JSON documents", add_completion=False)


def _config(path: Path | None) -> JsonKitConfig:
    return load_config(path) if path else JsonKitConfig()


def _emit(payload: dict) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=True))


def _load(source: str, config: JsonKitConfig):
    if "://" in source:
        return load_from_url(source, config=config)
    return load_from_file(Path(source), config=config)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr")) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


@app.command("fmt")
def fmt(
    source: str = typer.Argument(..., help="Path or URL of a JSON document"),
    indent: Optional[int] = typer.Option(None, "--indent", help="Indent width; 0 for compact output"),
    sort_keys: bool = typer.Option(False, "--sort-keys", help="Order object fields by key at every level"),
    keep_nulls: bool = typer.Option(False, "--keep-nulls", help="Keep null-valued fields"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout"),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to YAML config"),
) -> None:
    """Re-render a document with stable layout."""
    settings = _config(config)
    updates: dict = {"sort_keys": sort_keys or settings.printer.sort_keys}
    if keep_nulls:
        updates["drop_nulls"] = False
    if indent is not None:
        updates["indent"] = indent or None
    printer = settings.printer.model_copy(update=updates)
    try:
        document = _load(source, settings)
        if output is not None:
            write_json(document, output, printer=printer.model_copy(update={"trailing_newline": True}))
            return
        typer.echo(render(document, printer))
    except DecodeError as exc:
        _emit(exc.to_payload())
        raise typer.Exit(code=1)


@app.command("get")
def get(
    source: str = typer.Argument(..., help="Path or URL of a JSON document"),
    path: str = typer.Argument(..., help="Dotted field path, e.g. result.account.balance"),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to YAML config"),
) -> None:
    """Print the value found at a dotted field path."""
    settings = _config(config)
    try:
        value = extract_path(_load(source, settings), path)
    except DecodeError as exc:
        _emit(exc.to_payload())
        raise typer.Exit(code=1)
    typer.echo(render(value, settings.printer))


if __name__ == "__main__":
    app()

"""Scoped JSON load/write helpers.

Every loader acquires its source, reads it fully, parses, and releases the
source exactly once through ``Context.bracket`` whether parsing worked or not.
"""

from __future__ import annotations

from functools import partial
import logging
import os
from pathlib import Path
import tempfile
from typing import Any, Callable
from urllib.parse import urlparse
from urllib.request import url2pathname

from jsonkit.codecs import CodecRegistry, decode
from jsonkit.config import JsonKitConfig
from jsonkit.context import RAISING, Context
from jsonkit.errors import IoFailure
from jsonkit.io.parsing import parse_text
from jsonkit.io.printing import Printer, render
from jsonkit.io.sources import TextOpener, TextSource, open_file, open_resource, open_url, read_fully
from jsonkit.types import JsonValue

logger = logging.getLogger(__name__)


def _release(label: str) -> Callable[[TextSource], None]:
    def release(source: TextSource) -> None:
        source.close()
        logger.debug(f"Released {label}")

    return release


def _load(acquire: Callable[[], TextSource], label: str, ctx: Context, config: JsonKitConfig) -> Any:
    def opened() -> TextSource:
        source = acquire()
        logger.debug(f"Acquired {label}")
        return source

    def use(source: TextSource) -> Any:
        text = ctx.blocking(lambda: read_fully(source, label))
        return ctx.and_then(text, lambda raw: parse_text(raw, ctx, excerpt_chars=config.parse.excerpt_chars))

    return ctx.bracket(opened, use, _release(label))


def load_from_file(
    path: str | Path,
    ctx: Context = RAISING,
    *,
    opener: TextOpener = open_file,
    config: JsonKitConfig | None = None,
) -> Any:
    return _load(lambda: opener(path), str(path), ctx, config or JsonKitConfig())


def load_from_url(
    url: str,
    ctx: Context = RAISING,
    *,
    opener: TextOpener | None = None,
    config: JsonKitConfig | None = None,
) -> Any:
    """Load from ``http(s)://`` through requests; ``file:`` URLs go to the file loader."""
    settings = config or JsonKitConfig()
    scheme = urlparse(url).scheme.lower()
    if scheme == "file":
        path = url2pathname(urlparse(url).path)
        return load_from_file(path, ctx, opener=opener or open_file, config=settings)
    if scheme not in ("http", "https"):
        return ctx.fail(IoFailure(f"open URL with scheme '{scheme}'", url))
    fetch = opener or partial(open_url, http=settings.http)
    return _load(lambda: fetch(url), url, ctx, settings)


def load_from_resource(
    name: str,
    package: str | None = None,
    ctx: Context = RAISING,
    *,
    opener: Callable[[str, str], TextSource] = open_resource,
    config: JsonKitConfig | None = None,
) -> Any:
    """Load a named resource shipped inside ``package`` (or the override directory)."""
    settings = config or JsonKitConfig()
    owner = package or settings.resource_package
    return _load(lambda: opener(name, owner), f"resource {owner}/{name}", ctx, settings)


def load_records_from_file(
    path: str | Path,
    target: Any,
    ctx: Context = RAISING,
    *,
    codecs: CodecRegistry | None = None,
    opener: TextOpener = open_file,
    config: JsonKitConfig | None = None,
) -> Any:
    """Load a JSON array file and decode every element into ``target``."""
    loaded = load_from_file(path, ctx, opener=opener, config=config)
    return ctx.and_then(loaded, lambda json_value: decode(json_value, list[target], ctx, codecs))


class _PendingWrite:
    """Temp file beside the target; replaced onto it only after a full write."""

    def __init__(self, target: Path) -> None:
        self.target = target
        self.temp: Path | None = None
        self.handle: Any = None
        self.written = False

    def open(self) -> "_PendingWrite":
        try:
            self.target.parent.mkdir(parents=True, exist_ok=True)
            self.handle = tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.target.parent,
                prefix=f".{self.target.name}.",
                suffix=".tmp",
                delete=False,
            )
        except OSError as exc:
            raise IoFailure("open file for writing", self.target) from exc
        self.temp = Path(self.handle.name)
        return self

    def write(self, text: str) -> None:
        try:
            self.handle.write(text)
            self.handle.flush()
            os.fsync(self.handle.fileno())
        except OSError as exc:
            raise IoFailure("write", self.target) from exc
        self.written = True

    def close(self) -> None:
        self.handle.close()
        if not self.written:
            self.temp.unlink(missing_ok=True)

    def commit(self) -> None:
        try:
            os.replace(self.temp, self.target)
        except OSError as exc:
            self.temp.unlink(missing_ok=True)
            raise IoFailure("replace", self.target) from exc
        logger.debug(f"Wrote {self.target}")


def write_json(
    json_value: JsonValue,
    path: str | Path,
    ctx: Context = RAISING,
    *,
    printer: Printer | None = None,
    config: JsonKitConfig | None = None,
) -> Any:
    """Overwrite ``path`` with rendered JSON (4-space indent by default).

    Text is rendered before any file is opened, so an unencodable value
    leaves the target untouched.
    """
    settings = config or JsonKitConfig()
    layout = printer or settings.write_printer
    pending = _PendingWrite(Path(path))

    def store(text: str) -> Any:
        written = ctx.bracket(
            pending.open,
            lambda handle: ctx.blocking(lambda: handle.write(text)),
            lambda handle: handle.close(),
        )
        return ctx.and_then(written, lambda _: ctx.blocking(pending.commit))

    return ctx.and_then(ctx.attempt(lambda: render(json_value, layout)), store)

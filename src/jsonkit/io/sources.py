"""Text sources the loaders acquire and release.

An opener takes a target (path, URL, resource name) and returns an open
``TextSource``. Loaders accept any opener, which keeps the file system and
network out of the parsing path and lets tests count open handles.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Protocol

import requests

from jsonkit.config import HttpConfig
from jsonkit.errors import IoFailure
from jsonkit.resource_locator import find_resource

logger = logging.getLogger(__name__)


class TextSource(Protocol):
    def read(self) -> str: ...

    def close(self) -> None: ...


TextOpener = Callable[[Any], TextSource]


def open_file(path: str | Path) -> TextSource:
    try:
        return Path(path).open("r", encoding="utf-8")
    except OSError as exc:
        raise IoFailure("open file", path) from exc


class HttpSource:
    """Response body of a streamed GET, decoded as UTF-8."""

    def __init__(self, response: requests.Response) -> None:
        self.response = response

    def read(self) -> str:
        return self.response.content.decode("utf-8")

    def close(self) -> None:
        self.response.close()


def open_url(url: str, *, http: HttpConfig | None = None) -> TextSource:
    settings = http or HttpConfig()
    try:
        response = requests.get(url, headers=settings.headers, timeout=settings.timeout_s, stream=True)
    except requests.RequestException as exc:
        raise IoFailure("fetch", url) from exc
    try:
        response.raise_for_status()
    except requests.HTTPError as exc:
        logger.warning(f"GET {url} returned HTTP {response.status_code}")
        response.close()
        raise IoFailure("fetch", url) from exc
    return HttpSource(response)


def open_resource(name: str, package: str) -> TextSource:
    try:
        return find_resource(name, package).open("r", encoding="utf-8")
    except OSError as exc:
        raise IoFailure("open resource", name) from exc


def read_fully(source: TextSource, label: str) -> str:
    try:
        return source.read()
    except (OSError, UnicodeDecodeError, requests.RequestException) as exc:
        raise IoFailure("read", label) from exc

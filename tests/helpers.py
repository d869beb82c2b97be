from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

from jsonkit.io.sources import open_file


def write_text(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def write_document(path: Path, payload: Any) -> Path:
    return write_text(path, json.dumps(payload, indent=2))


class StaticSource:
    """In-memory source that records whether it was closed."""

    def __init__(self, text: str, *, fail_on_read: Exception | None = None) -> None:
        self._text = text
        self._fail_on_read = fail_on_read
        self.closed = False
        self.close_calls = 0

    def read(self) -> str:
        if self._fail_on_read is not None:
            raise self._fail_on_read
        return self._text

    def close(self) -> None:
        self.closed = True
        self.close_calls += 1


class TrackingOpener:
    """Wraps an opener and remembers every source it handed out."""

    def __init__(self, inner: Callable[..., Any] = open_file) -> None:
        self.inner = inner
        self.opened: list[Any] = []

    def __call__(self, *args: Any) -> Any:
        source = self.inner(*args)
        self.opened.append(source)
        return source

    @property
    def open_handles(self) -> list[Any]:
        return [source for source in self.opened if not source.closed]


def sample_ledger() -> dict:
    return {
        "ledger_index": 91234567,
        "ledger_hash": "4BC50C9B0D8515D3EAAE1E74B29A95804346C491EE1A95BF25E4AAB854A6A652",
        "closed": True,
        "close_time": None,
        "totals": {"drops": 99999999999999999, "fee": "0.000012"},
        "transactions": [
            {"account": "rHb9CJAWyB4rj91VRWn96DkukG4bwdtyTh", "amount": "1000", "memo": None},
            {"account": "rPT1Sjq2YGrBMTttX4GZHjKu9dyfzbpAYe", "amount": "25"},
        ],
    }

"""JSON text rendering with configurable layout."""

from __future__ import annotations

from decimal import Decimal
import json
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from jsonkit.errors import EncodeFailure
from jsonkit.types import JsonObject, JsonValue


class Printer(BaseModel):
    """Output layout. ``indent=None`` renders compact text on one line.

    ``drop_nulls`` removes null-valued object fields at every nesting level;
    nulls inside arrays are kept.
    """

    model_config = ConfigDict(frozen=True)

    indent: int | None = Field(default=2, ge=0)
    sort_keys: bool = False
    drop_nulls: bool = True
    ensure_ascii: bool = False
    trailing_newline: bool = False


DROPPING_NULLS = Printer()
DROPPING_NULLS_SORTED = Printer(sort_keys=True)
SPACES4 = Printer(indent=4, drop_nulls=False)
COMPACT = Printer(indent=None, drop_nulls=False)


def _scalar(value: Any, printer: Printer) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, int):
        try:
            return str(int(value))
        except ValueError:
            # int to str is capped by sys.get_int_max_str_digits(); Decimal is not
            return str(Decimal(value))
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise EncodeFailure("JSON has no representation for non-finite numbers", value)
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise EncodeFailure("JSON has no representation for non-finite numbers", value)
        return float.__repr__(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=printer.ensure_ascii)
    raise EncodeFailure(f"{type(value).__name__} is not a JSON value", value)


def _entries(obj: JsonObject, printer: Printer) -> list[tuple[str, JsonValue]]:
    entries = list(obj.items())
    for key, _ in entries:
        if not isinstance(key, str):
            raise EncodeFailure("JSON object keys must be strings", key)
    if printer.drop_nulls:
        entries = [(key, value) for key, value in entries if value is not None]
    if printer.sort_keys:
        entries.sort(key=lambda item: item[0])
    return entries


def _emit(value: Any, printer: Printer, level: int, out: list[str]) -> None:
    if isinstance(value, dict):
        members: list[tuple[str | None, Any]] = list(_entries(value, printer))
        brackets = "{}"
    elif isinstance(value, (list, tuple)):
        members = [(None, item) for item in value]
        brackets = "[]"
    else:
        out.append(_scalar(value, printer))
        return

    if not members:
        out.append(brackets)
        return

    if printer.indent is None:
        item_sep, key_sep, inner, outer = ",", ":", "", ""
    else:
        item_sep, key_sep = ",", ": "
        inner = "\n" + " " * (printer.indent * (level + 1))
        outer = "\n" + " " * (printer.indent * level)

    out.append(brackets[0])
    for index, (key, item) in enumerate(members):
        if index:
            out.append(item_sep)
        out.append(inner)
        if key is not None:
            out.append(json.dumps(key, ensure_ascii=printer.ensure_ascii))
            out.append(key_sep)
        _emit(item, printer, level + 1, out)
    out.append(outer)
    out.append(brackets[1])


def render(json_value: JsonValue, printer: Printer = DROPPING_NULLS) -> str:
    """Render a JSON value. ``Decimal`` numbers keep their exact digits."""
    out: list[str] = []
    _emit(json_value, printer, 0, out)
    if printer.trailing_newline:
        out.append("\n")
    return "".join(out)


def print_json(json_value: JsonValue, printer: Printer = DROPPING_NULLS) -> str:
    """Formatted text with null object fields dropped (unless the printer keeps them)."""
    return render(json_value, printer)


def print_object(obj: JsonObject, printer: Printer = DROPPING_NULLS) -> str:
    return render(obj, printer)

"""Shape assertions and field access over parsed JSON values."""

from __future__ import annotations

from typing import Any, Iterable

from jsonkit.codecs import CodecRegistry, decode, default_codecs
from jsonkit.context import RAISING, Context
from jsonkit.errors import FieldNotFound, ShapeMismatch
from jsonkit.types import JsonObject, JsonValue, Option, Some


def _is_object(json: JsonValue) -> bool:
    return isinstance(json, dict)


def _is_array(json: JsonValue) -> bool:
    return isinstance(json, list)


def as_object(
    json: JsonValue,
    ctx: Context = RAISING,
    *,
    field: str | None = None,
    lookup: str | None = None,
) -> Any:
    if _is_object(json):
        return ctx.pure(json)
    return ctx.fail(ShapeMismatch("object", json, field=field, lookup=lookup))


def as_array(json: JsonValue, ctx: Context = RAISING, *, field: str | None = None) -> Any:
    if _is_array(json):
        return ctx.pure(json)
    return ctx.fail(ShapeMismatch("array", json, field=field))


def as_string(json: JsonValue, ctx: Context = RAISING, *, field: str | None = None) -> Any:
    if isinstance(json, str):
        return ctx.pure(json)
    return ctx.fail(ShapeMismatch("string", json, field=field))


def find_field(obj: JsonObject, name: str) -> Option[JsonValue]:
    """Look up ``name``; ``None`` means absent, ``Some(None)`` a JSON null."""
    if name in obj:
        return Some(obj[name])
    return None


def find_field_in(json: JsonValue, name: str, ctx: Context = RAISING) -> Any:
    """Object-checked lookup. Fails only when ``json`` is not an object."""
    return ctx.map(as_object(json, ctx, lookup=name), lambda obj: find_field(obj, name))


def extract_field(obj: JsonObject, name: str, ctx: Context = RAISING) -> Any:
    return ctx.from_option(find_field(obj, name), FieldNotFound(name))


def extract_field_in(json: JsonValue, name: str, ctx: Context = RAISING) -> Any:
    return ctx.and_then(as_object(json, ctx, lookup=name), lambda obj: extract_field(obj, name, ctx))


def extract_path(json: JsonValue, path: Iterable[str] | str, ctx: Context = RAISING) -> Any:
    """Chain single-field lookups, e.g. ``extract_path(doc, "result.ledger.hash")``.

    Failures name the dotted path walked so far.
    """
    names = path.split(".") if isinstance(path, str) else list(path)
    result = ctx.pure(json)
    for depth, name in enumerate(names):
        walked = ".".join(names[: depth + 1])
        parent = ".".join(names[:depth]) or None
        result = ctx.and_then(result, lambda value, n=name, w=walked, p=parent: _step(value, n, w, p, ctx))
    return result


def _step(value: JsonValue, name: str, walked: str, parent: str | None, ctx: Context) -> Any:
    if not _is_object(value):
        return ctx.fail(ShapeMismatch("object", value, field=parent))
    return ctx.from_option(find_field(value, name), FieldNotFound(walked))


def extract_field_as(
    json: JsonValue,
    name: str,
    target: Any,
    ctx: Context = RAISING,
    codecs: CodecRegistry | None = None,
) -> Any:
    """Extract ``name`` and decode it into ``target``.

    Not an object -> ``ShapeMismatch``; absent -> ``FieldNotFound``;
    conversion failed -> ``DecodeFailure``.
    """
    registry = codecs or default_codecs()
    return ctx.and_then(
        extract_field_in(json, name, ctx),
        lambda value: decode(value, target, ctx, registry, field=name),
    )


def find_field_as(
    obj: JsonObject,
    name: str,
    target: Any,
    ctx: Context = RAISING,
    codecs: CodecRegistry | None = None,
) -> Any:
    """Optional counterpart of ``extract_field_as``: absent gives ``None``."""
    found = find_field(obj, name)
    if found is None:
        return ctx.pure(None)
    registry = codecs or default_codecs()
    return ctx.map(decode(found.value, target, ctx, registry, field=name), Some)


def has_field(name: str, json: JsonValue) -> bool:
    return _is_object(json) and name in json


def to_key_value_list(json: JsonValue, ctx: Context = RAISING) -> Any:
    return ctx.map(as_object(json, ctx), lambda obj: list(obj.items()))

"""Field ordering and null removal before serialization.

All helpers return new containers; inputs are never modified.
"""

from __future__ import annotations

from jsonkit.types import JsonObject, JsonValue


def _by_key(item: tuple[str, JsonValue]) -> str:
    # str comparison is ordinal by code point, so "B" sorts before "a"
    return item[0]


def sort_fields(obj: JsonObject) -> JsonObject:
    """Top-level fields ordered by key. Nested values keep their order."""
    return dict(sorted(obj.items(), key=_by_key))


def sort_fields_dropping_nulls(obj: JsonObject) -> JsonObject:
    """Like ``sort_fields`` but without top-level null fields. Does not recurse."""
    kept = [(key, value) for key, value in obj.items() if value is not None]
    return dict(sorted(kept, key=_by_key))


def drop_null_values_deep(json_value: JsonValue) -> JsonValue:
    """Remove null-valued object fields at every nesting level, through arrays too.

    Array elements that are null stay: only object fields are dropped.
    """
    if isinstance(json_value, dict):
        return {
            key: drop_null_values_deep(value)
            for key, value in json_value.items()
            if value is not None
        }
    if isinstance(json_value, list):
        return [drop_null_values_deep(item) for item in json_value]
    return json_value


def replace_field(name: str, obj: JsonObject, value: JsonValue) -> JsonObject:
    """Rebind ``name`` to ``value``.

    The field is removed and re-added, so it moves to the end of the order.
    """
    replaced = {key: item for key, item in obj.items() if key != name}
    replaced[name] = value
    return replaced

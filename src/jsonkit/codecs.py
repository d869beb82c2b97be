"""Typed decode/encode bridge built on pydantic ``TypeAdapter``."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
import logging
from typing import Any, Callable

from pydantic import TypeAdapter
from pydantic_core import to_jsonable_python

from jsonkit.context import RAISING, Context
from jsonkit.errors import DecodeFailure
from jsonkit.io.parsing import parse_text
from jsonkit.io.printing import COMPACT, render
from jsonkit.types import JsonObject, JsonValue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Codec:
    decode: Callable[[JsonValue], Any]
    encode: Callable[[Any], JsonValue]


def type_name(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)


def _key(key: Any) -> str:
    return key if isinstance(key, str) else str(to_jsonable_python(key))


def json_leaves(value: Any) -> JsonValue:
    """Turn a python-mode dump into JSON values, keeping ``Decimal`` numbers as numbers."""
    if isinstance(value, dict):
        return {_key(key): json_leaves(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_leaves(item) for item in value]
    if value is None or isinstance(value, (str, int, float, Decimal)):
        return value
    return json_leaves(to_jsonable_python(value))


class CodecRegistry:
    """Explicit type-indexed codec lookup.

    Types without a registered codec get one derived from pydantic. Decoding
    goes through pydantic's JSON mode, so with ``strict=True`` a JSON string
    is never coerced into a number.
    """

    def __init__(self, *, strict: bool = True) -> None:
        self.strict = strict
        self._codecs: dict[Any, Codec] = {}

    def register(
        self,
        target: Any,
        *,
        decode: Callable[[JsonValue], Any] | None = None,
        encode: Callable[[Any], JsonValue] | None = None,
    ) -> None:
        fallback = self._derive(target)
        self._codecs[target] = Codec(
            decode=decode or fallback.decode,
            encode=encode or fallback.encode,
        )

    def codec_for(self, target: Any) -> Codec:
        try:
            return self._codecs[target]
        except KeyError:
            codec = self._derive(target)
            self._codecs[target] = codec
            return codec
        except TypeError:
            # unhashable target, e.g. some Annotated forms
            return self._derive(target)

    def _derive(self, target: Any) -> Codec:
        adapter = TypeAdapter(target)
        logger.debug(f"Derived pydantic codec for {type_name(target)}")
        strict = self.strict

        def decode_value(value: JsonValue) -> Any:
            return adapter.validate_json(render(value, COMPACT), strict=strict)

        def encode_value(value: Any) -> JsonValue:
            return json_leaves(adapter.dump_python(value))

        return Codec(decode=decode_value, encode=encode_value)


@lru_cache(maxsize=1)
def default_codecs() -> CodecRegistry:
    return CodecRegistry()


def decode(
    json: JsonValue,
    target: Any,
    ctx: Context = RAISING,
    codecs: CodecRegistry | None = None,
    *,
    field: str | None = None,
) -> Any:
    codec = (codecs or default_codecs()).codec_for(target)

    def run() -> Any:
        try:
            return codec.decode(json)
        except (ValueError, TypeError) as exc:
            raise DecodeFailure(type_name(target), json, field=field) from exc

    return ctx.attempt(run)


def decode_object(
    obj: JsonObject,
    target: Any,
    ctx: Context = RAISING,
    codecs: CodecRegistry | None = None,
) -> Any:
    return decode(obj, target, ctx, codecs)


def encode(value: Any, target: Any = None, codecs: CodecRegistry | None = None) -> JsonValue:
    codec = (codecs or default_codecs()).codec_for(target if target is not None else type(value))
    return codec.encode(value)


def parse_and_decode(
    text: str,
    target: Any,
    ctx: Context = RAISING,
    codecs: CodecRegistry | None = None,
) -> Any:
    """Parse then decode; the error's ``stage`` is ``"parse"`` or ``"decode"``."""
    return ctx.and_then(parse_text(text, ctx), lambda json: decode(json, target, ctx, codecs))

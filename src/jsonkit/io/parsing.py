"""Text to JSON value parsing."""

from __future__ import annotations

from decimal import Decimal
import json
from typing import Any

from jsonkit.context import RAISING, Context
from jsonkit.errors import ParseFailure


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard constant {name}")


def _parse_int(digits: str) -> int | Decimal:
    try:
        return int(digits)
    except ValueError:
        # past sys.get_int_max_str_digits(); Decimal has no such limit
        return Decimal(digits)


def loads(text: str) -> Any:
    """Strict JSON parse: ints unbounded, other numbers as ``Decimal``."""
    return json.loads(text, parse_float=Decimal, parse_int=_parse_int, parse_constant=_reject_constant)


def parse_text(text: str, ctx: Context = RAISING, *, excerpt_chars: int = 200) -> Any:
    """Parse ``text``. Malformed input fails with ``ParseFailure`` holding an excerpt."""

    def run() -> Any:
        try:
            return loads(text)
        except json.JSONDecodeError as exc:
            raise ParseFailure(exc.msg, text, line=exc.lineno, column=exc.colno, limit=excerpt_chars) from exc
        except (ValueError, TypeError, RecursionError) as exc:
            raise ParseFailure(str(exc), str(text), limit=excerpt_chars) from exc

    return ctx.attempt(run)

"""Error taxonomy for JSON access, decoding and I/O."""

from __future__ import annotations

from typing import Any

_EXCERPT_CHARS = 200


def excerpt(value: Any, limit: int = _EXCERPT_CHARS) -> str:
    """Bounded text rendering of an offending fragment."""
    try:
        text = value if isinstance(value, str) else repr(value)
    except ValueError:
        # repr of an int past sys.get_int_max_str_digits()
        text = f"<{type(value).__name__} holding an integer too long to display>"
    if len(text) <= limit:
        return text
    return text[:limit] + f"... ({len(text) - limit} more chars)"


class DecodeError(ValueError):
    """A JSON value could not be interpreted the way the caller expected."""

    kind = "decode_error"
    stage: str | None = None

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        expected: str | None = None,
        fragment: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.expected = expected
        self.fragment = fragment

    def __str__(self) -> str:
        if self.fragment is None:
            return self.message
        return f"{self.message}: {self.fragment}"

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.kind, "message": self.message}
        if self.field is not None:
            payload["field"] = self.field
        if self.expected is not None:
            payload["expected"] = self.expected
        if self.__cause__ is not None:
            payload["cause"] = str(self.__cause__)
        return payload


class ShapeMismatch(DecodeError):
    """Value is not the JSON kind required at an access point."""

    kind = "shape_mismatch"

    def __init__(
        self,
        expected: str,
        value: Any,
        *,
        field: str | None = None,
        lookup: str | None = None,
    ) -> None:
        if lookup:
            where = f" when looking up field '{lookup}'"
            field = lookup
        else:
            where = f" at '{field}'" if field else ""
        super().__init__(
            f"not an {expected}{where}" if expected[0] in "aeiou" else f"not a {expected}{where}",
            field=field,
            expected=expected,
            fragment=excerpt(value),
        )


class FieldNotFound(DecodeError):
    """A required field is absent from an object."""

    kind = "field_not_found"

    def __init__(self, field: str) -> None:
        super().__init__(f"field '{field}' not found", field=field)


class DecodeFailure(DecodeError):
    """Shape matched but typed conversion failed."""

    kind = "decode_failure"
    stage = "decode"

    def __init__(self, target: str, value: Any, *, field: str | None = None) -> None:
        where = f" in field '{field}'" if field else ""
        super().__init__(
            f"could not decode {target}{where}",
            field=field,
            expected=target,
            fragment=excerpt(value),
        )


class EncodeFailure(DecodeError):
    """A value has no JSON text representation."""

    kind = "encode_failure"

    def __init__(self, message: str, value: Any) -> None:
        super().__init__(message, fragment=excerpt(value))


class ParseFailure(DecodeError):
    """Raw text is not valid JSON."""

    kind = "parse_failure"
    stage = "parse"

    def __init__(
        self,
        reason: str,
        text: str,
        *,
        line: int | None = None,
        column: int | None = None,
        limit: int = _EXCERPT_CHARS,
    ) -> None:
        location = f" at line {line} column {column}" if line is not None else ""
        super().__init__(
            f"error parsing text to JSON{location}: {reason}",
            expected="json",
            fragment=excerpt(text, limit),
        )
        self.line = line
        self.column = column


class IoFailure(DecodeError):
    """A source could not be acquired, read or written."""

    kind = "io_failure"

    def __init__(self, action: str, target: Any) -> None:
        super().__init__(f"could not {action} {target}")
        self.target = str(target)

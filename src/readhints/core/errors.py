from __future__ import annotations


class HintError(ValueError):
    """Raised when an embedded hint block cannot be decoded.

    Always fatal for the decode call that raised it; records already appended
    to the caller's output list are left in place.
    """

    kind = "hint"

    def __init__(
        self, message: str, *, field: str | None = None, position: int | None = None
    ) -> None:
        super().__init__(message)
        self.field = field
        self.position = position


class UnknownReference(HintError):
    kind = "unknown_reference"

    def __init__(self, name: str, *, position: int | None = None) -> None:
        super().__init__(
            f"Bad reference name: {name!r}", field="reference name", position=position
        )
        self.name = name


def _describe(char: str | None) -> str:
    return "end of identifier" if char is None else repr(char)


class MalformedOffset(HintError):
    kind = "malformed_offset"

    def __init__(self, char: str | None, field: str, *, position: int | None = None) -> None:
        super().__init__(
            f"While parsing hint {field}, expected digit but got {_describe(char)}",
            field=field,
            position=position,
        )
        self.char = char


class MalformedLength(HintError):
    kind = "malformed_length"

    def __init__(self, char: str | None, field: str, *, position: int | None = None) -> None:
        super().__init__(
            f"While parsing hint {field}, expected digit but got {_describe(char)}",
            field=field,
            position=position,
        )
        self.char = char


class InvalidInterval(HintError):
    kind = "invalid_interval"

    def __init__(self, left: int, right: int, *, position: int | None = None) -> None:
        super().__init__(
            f"Right offset {right} must be greater than left offset {left}",
            field="right offset",
            position=position,
        )
        self.left = left
        self.right = right


class NameBufferOverflow(HintError):
    kind = "name_buffer_overflow"

    def __init__(self, limit: int, *, position: int | None = None) -> None:
        super().__init__(
            f"Reference name exceeds {limit} characters",
            field="reference name",
            position=position,
        )
        self.limit = limit


class MissingDelimiter(HintError):
    kind = "missing_delimiter"

    def __init__(self, char: str | None, field: str, *, position: int | None = None) -> None:
        super().__init__(
            f"Expected '!' after hint {field} but got {_describe(char)}",
            field=field,
            position=position,
        )
        self.char = char

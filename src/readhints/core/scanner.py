from __future__ import annotations

from readhints.core.errors import HintError, MissingDelimiter, NameBufferOverflow

DELIMITER = "!"
# Reference names are copied into a bounded buffer (1023 chars + terminator).
MAX_NAME_LENGTH_DEFAULT = 1023


class FieldScanner:
    """Bounds-checked cursor over a `!`-delimited hint block.

    `pos` is an explicit index into the immutable identifier; reads at or past
    the end return None instead of advancing.
    """

    def __init__(
        self, text: str, pos: int = 0, *, max_name_length: int = MAX_NAME_LENGTH_DEFAULT
    ) -> None:
        if pos < 0:
            raise ValueError("pos must be >= 0")
        if max_name_length <= 0:
            raise ValueError("max_name_length must be positive")
        self.text = text
        self.pos = pos
        self.max_name_length = max_name_length

    def peek(self) -> str | None:
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def at(self, ch: str) -> bool:
        return self.peek() == ch

    def take(self) -> str | None:
        ch = self.peek()
        if ch is not None:
            self.pos += 1
        return ch

    def expect(self, ch: str, field: str) -> None:
        got = self.peek()
        if got != ch:
            raise MissingDelimiter(got, field, position=self.pos)
        self.pos += 1

    def read_name(self, field: str = "reference name") -> str:
        """Copy characters up to the next `!` and step past it."""
        start = self.pos
        end = self.text.find(DELIMITER, start)
        if end == -1:
            # Unterminated: report the overflow first if the tail is already too long
            if len(self.text) - start > self.max_name_length:
                raise NameBufferOverflow(self.max_name_length, position=start)
            raise MissingDelimiter(None, field, position=len(self.text))
        if end - start > self.max_name_length:
            raise NameBufferOverflow(self.max_name_length, position=start)
        self.pos = end + 1
        return self.text[start:end]

    def read_digits(self, field: str, error: type[HintError]) -> int:
        """Parse an unsigned decimal run terminated by `!` (left unconsumed).

        An empty run is 0. A non-digit raises `error(char, field)`; running off
        the end raises MissingDelimiter.
        """
        value = 0
        while True:
            ch = self.peek()
            if ch is None:
                raise MissingDelimiter(None, field, position=self.pos)
            if ch == DELIMITER:
                return value
            if not ("0" <= ch <= "9"):
                raise error(ch, field, position=self.pos)  # type: ignore[call-arg]
            value = value * 10 + (ord(ch) - 48)
            self.pos += 1

    def read_signed(self, field: str, error: type[HintError]) -> tuple[int, bool]:
        """Like `read_digits` with an optional leading `-`.

        Returns (value, negative); `-!` is (0, True).
        """
        negative = self.at("-")
        if negative:
            self.pos += 1
        value = self.read_digits(field, error)
        return (-value if negative else value), negative

    def read_trailing_digits(self) -> int:
        """Parse digits up to the first non-digit or end of text; never fails."""
        value = 0
        while True:
            ch = self.peek()
            if ch is None or not ("0" <= ch <= "9"):
                return value
            value = value * 10 + (ord(ch) - 48)
            self.pos += 1

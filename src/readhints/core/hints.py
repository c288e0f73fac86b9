"""Decoders for alignment hints embedded in read names.

A hint block starts at the `!h!` sentinel and holds one or more records::

    point:    !h!!<ref>!<off>!<+|->!<len>!<5'off>[!<ref>!...]
    interval: !h!!<ref>![-]<left>!<right>!<len>!<5'off>[!<ref>!...]

The trailing 5' offset has no closing `!`; the block continues only while the
next character is `!`.
"""

from __future__ import annotations

import logging
from typing import Generic, Protocol, TypeVar

from readhints.core.errors import (
    InvalidInterval,
    MalformedLength,
    MalformedOffset,
    MissingDelimiter,
    UnknownReference,
)
from readhints.core.records import IntervalHit, PointHit
from readhints.core.scanner import DELIMITER, MAX_NAME_LENGTH_DEFAULT, FieldScanner
from readhints.core.search import HINT_SENTINEL, find_hint

logger = logging.getLogger(__name__)

R = TypeVar("R", PointHit, IntervalHit)


class RefLookup(Protocol):
    def find(self, name: str) -> int | None: ...


class Layout(Protocol[R]):
    """Reads the fields between the reference name and the 5' offset."""

    def read_body(self, scanner: FieldScanner) -> tuple:
        ...

    def build(self, ref_id: int, body: tuple, five_prime_off: int) -> R:
        ...


class PointLayout:
    def read_body(self, scanner: FieldScanner) -> tuple[int, bool, int]:
        ref_off = scanner.read_digits("reference offset", MalformedOffset)
        scanner.expect(DELIMITER, "reference offset")
        orientation = scanner.take()
        if orientation is None:
            raise MissingDelimiter(None, "orientation", position=scanner.pos)
        # Anything other than '+' is reverse
        fw = orientation == "+"
        scanner.expect(DELIMITER, "orientation")
        length = scanner.read_digits("seed length", MalformedLength)
        scanner.expect(DELIMITER, "seed length")
        return ref_off, fw, length

    def build(self, ref_id: int, body: tuple, five_prime_off: int) -> PointHit:
        ref_off, fw, length = body
        return PointHit(ref_id, ref_off, fw, length, five_prime_off)


class IntervalLayout:
    def read_body(self, scanner: FieldScanner) -> tuple[int, int, int]:
        left, negative = scanner.read_signed("left offset", MalformedOffset)
        scanner.expect(DELIMITER, "left offset")
        right_pos = scanner.pos
        right = scanner.read_digits("right offset", MalformedOffset)
        if right <= left:
            raise InvalidInterval(left, right, position=right_pos)
        scanner.expect(DELIMITER, "right offset")
        hit_length = scanner.read_digits("seed length", MalformedLength)
        # Sign follows the left offset; kept as encoded
        if negative:
            hit_length = -hit_length
        scanner.expect(DELIMITER, "seed length")
        return left, right, hit_length

    def build(self, ref_id: int, body: tuple, five_prime_off: int) -> IntervalHit:
        left, right, hit_length = body
        return IntervalHit(
            ref_id=ref_id,
            left=left,
            length=right - left + 1,
            hit_length=hit_length,
            five_prime_off=five_prime_off,
        )


class HintDecoder(Generic[R]):
    """Record loop shared by the point and interval layouts."""

    def __init__(
        self, layout: Layout[R], *, max_name_length: int = MAX_NAME_LENGTH_DEFAULT
    ) -> None:
        self.layout = layout
        self.max_name_length = max_name_length

    def decode(
        self, identifier: str, start: int, table: RefLookup, out: list[R] | None = None
    ) -> list[R]:
        if identifier[start : start + len(HINT_SENTINEL)] != HINT_SENTINEL:
            raise ValueError(f"no hint sentinel at offset {start}")
        if out is None:
            out = []
        scanner = FieldScanner(
            identifier, start + len(HINT_SENTINEL), max_name_length=self.max_name_length
        )
        while scanner.at(DELIMITER):
            scanner.take()
            name_pos = scanner.pos
            name = scanner.read_name()
            ref_id = table.find(name)
            if ref_id is None:
                logger.debug("Hint parsing error: bad reference name: %s", name)
                raise UnknownReference(name, position=name_pos)
            body = self.layout.read_body(scanner)
            five_prime_off = scanner.read_trailing_digits()
            record = self.layout.build(ref_id, body, five_prime_off)
            logger.debug("Decoded hint %r from %s", record, name)
            out.append(record)
        return out


def decode_point(
    identifier: str,
    start: int,
    table: RefLookup,
    out: list[PointHit] | None = None,
    *,
    max_name_length: int = MAX_NAME_LENGTH_DEFAULT,
) -> list[PointHit]:
    """Decode point hints from the block at `start` into `out`.

    `start` must be the offset reported by `find_hint`. Records decoded before
    an error stay in `out`.
    """
    decoder = HintDecoder(PointLayout(), max_name_length=max_name_length)
    return decoder.decode(identifier, start, table, out)


def decode_interval(
    identifier: str,
    start: int,
    table: RefLookup,
    out: list[IntervalHit] | None = None,
    *,
    max_name_length: int = MAX_NAME_LENGTH_DEFAULT,
) -> list[IntervalHit]:
    """Decode interval hints from the block at `start` into `out`."""
    decoder = HintDecoder(IntervalLayout(), max_name_length=max_name_length)
    return decoder.decode(identifier, start, table, out)


def parse_hints(
    identifier: str,
    table: RefLookup,
    *,
    interval: bool = False,
    max_name_length: int = MAX_NAME_LENGTH_DEFAULT,
) -> list[PointHit] | list[IntervalHit]:
    """Detect and decode a hint block; returns [] when the name carries none."""
    start = find_hint(identifier)
    if start is None:
        return []
    if interval:
        return decode_interval(identifier, start, table, max_name_length=max_name_length)
    return decode_point(identifier, start, table, max_name_length=max_name_length)

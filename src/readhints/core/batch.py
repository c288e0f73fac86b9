from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from readhints.core.errors import HintError
from readhints.core.hints import RefLookup, decode_interval, decode_point
from readhints.core.records import IntervalHit, PointHit
from readhints.core.scanner import MAX_NAME_LENGTH_DEFAULT
from readhints.core.search import find_hint

logger = logging.getLogger(__name__)

ON_ERROR_POLICIES = ("skip", "abort")


@dataclass(frozen=True)
class HintResult:
    name: str
    offset: int | None  # sentinel position, None when the name has no hints
    records: list[PointHit] | list[IntervalHit] = field(default_factory=list)
    error: HintError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class HintSummary:
    total: int = 0
    hinted: int = 0
    records: int = 0
    failed: int = 0


def decode_names(
    names: Iterable[str],
    table: RefLookup,
    *,
    interval: bool = False,
    on_error: str = "skip",
    max_name_length: int = MAX_NAME_LENGTH_DEFAULT,
) -> Iterator[HintResult]:
    """Decode the hint block of each name, in order.

    With `on_error="skip"` a failed name is yielded with `error` set and no
    records, so the caller proceeds without hints for it. With `"abort"` the
    HintError propagates.
    """
    if on_error not in ON_ERROR_POLICIES:
        raise ValueError(f"Invalid on_error '{on_error}'. Expected 'skip' or 'abort'.")
    decode = decode_interval if interval else decode_point
    for name in names:
        start = find_hint(name)
        if start is None:
            yield HintResult(name, None)
            continue
        try:
            records = decode(name, start, table, max_name_length=max_name_length)
        except HintError as e:
            if on_error == "abort":
                logger.error("Hint parsing error in read %s: %s", name, e)
                raise
            logger.warning("Ignoring hints for read %s: %s", name, e)
            yield HintResult(name, start, [], e)
            continue
        yield HintResult(name, start, records)


def summarize(results: Iterable[HintResult]) -> HintSummary:
    total = hinted = records = failed = 0
    for r in results:
        total += 1
        if r.offset is not None:
            hinted += 1
        if r.error is not None:
            failed += 1
        records += len(r.records)
    return HintSummary(total=total, hinted=hinted, records=records, failed=failed)

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TextIO

from rich.table import Table
from rich.text import Text

from readhints.core.batch import HintResult, HintSummary

POINT_COLUMNS = ("read", "ref_id", "ref_off", "strand", "length", "5p_off")
INTERVAL_COLUMNS = ("read", "ref_id", "left", "right", "length", "hit_length", "5p_off")


def _columns(interval: bool) -> Sequence[str]:
    return INTERVAL_COLUMNS if interval else POINT_COLUMNS


def hints_table(results: Iterable[HintResult], *, interval: bool = False) -> Table:
    """One row per decoded record; failed reads get a single red error row."""
    columns = _columns(interval)
    table = Table(title="Interval hints" if interval else "Point hints")
    for i, col in enumerate(columns):
        table.add_column(col, justify="left" if i == 0 else "right")
    for r in results:
        if r.error is not None:
            table.add_row(r.name, Text(f"{r.error.kind}: {r.error}", style="red"))
            continue
        for rec in r.records:
            table.add_row(r.name, *(str(v) for v in rec.as_row()))
    return table


def write_tsv(results: Iterable[HintResult], out: TextIO, *, interval: bool = False) -> None:
    out.write("\t".join(_columns(interval)) + "\n")
    for r in results:
        for rec in r.records:
            out.write("\t".join([r.name, *(str(v) for v in rec.as_row())]) + "\n")


def summary_text(summary: HintSummary) -> Text:
    text = Text()
    text.append(f"{summary.total} reads", style="bold")
    text.append(f"  {summary.hinted} hinted  {summary.records} records  ")
    text.append(f"{summary.failed} failed", style="red" if summary.failed else "green")
    return text

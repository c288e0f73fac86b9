from __future__ import annotations

import gzip
import sys
from collections.abc import Iterable, Iterator
from typing import IO


def _name_token(header: str) -> str | None:
    parts = header.split()
    return parts[0] if parts else None


def iter_read_names(lines: Iterable[str]) -> Iterator[str]:
    """Yield read names from FASTQ, FASTA or one-name-per-line text.

    The format is picked from the first non-blank line: `@` means FASTQ
    (4-line records), `>` means FASTA, anything else is a plain list. Only the
    first whitespace-delimited token of each name is kept.
    """
    it = iter(lines)
    first = None
    for line in it:
        if line.strip():
            first = line.rstrip("\r\n")
            break
    if first is None:
        return

    if first.startswith("@"):
        name = _name_token(first[1:])
        if name:
            yield name
        # skip sequence, '+' and quality lines; blank lines are not counted
        body = (line for line in it if line.strip())
        for i, line in enumerate(body):
            if i % 4 == 3 and line.startswith("@"):
                name = _name_token(line[1:])
                if name:
                    yield name
    elif first.startswith(">"):
        name = _name_token(first[1:])
        if name:
            yield name
        for line in it:
            if line.startswith(">"):
                name = _name_token(line[1:])
                if name:
                    yield name
    else:
        name = _name_token(first)
        if name:
            yield name
        for line in it:
            name = _name_token(line)
            if name:
                yield name


def open_reads(path: str) -> IO[str]:
    """Open a reads file for text reading; `-` is stdin, `.gz` is gunzipped.

    Undecodable bytes become U+FFFD so a stray byte in one name cannot stop a run.
    """
    if path == "-":
        return sys.stdin
    if path.endswith(".gz"):
        return gzip.open(path, "rt", encoding="utf-8", errors="replace")
    return open(path, encoding="utf-8", errors="replace")  # noqa: SIM115

"""Reference name -> id tables used to resolve hint records."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

import yaml

FASTA_SUFFIXES = {".fa", ".fasta", ".fna"}
YAML_SUFFIXES = {".yaml", ".yml"}


class ReferenceTableError(Exception):
    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class ReferenceTable(Mapping[str, int]):
    """Read-only, exact-match (case-sensitive) reference name lookup."""

    def __init__(self, ids: Mapping[str, int]) -> None:
        self._ids = dict(ids)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> ReferenceTable:
        """Number references 0..n-1 in the given order."""
        errors: list[str] = []
        ids: dict[str, int] = {}
        for name in names:
            if name in ids:
                errors.append(f"duplicate reference name: {name}")
                continue
            ids[name] = len(ids)
        if errors:
            raise ReferenceTableError(errors)
        return cls(ids)

    @classmethod
    def from_mapping(cls, data: Mapping[Any, Any]) -> ReferenceTable:
        errors: list[str] = []
        ids: dict[str, int] = {}
        for name, ref_id in data.items():
            # bool is an int subclass but never a valid id
            if not isinstance(ref_id, int) or isinstance(ref_id, bool):
                errors.append(f"references[{name}] must be an integer id")
                continue
            ids[str(name)] = ref_id
        if errors:
            raise ReferenceTableError(errors)
        return cls(ids)

    def find(self, name: str) -> int | None:
        return self._ids.get(name)

    def names(self) -> list[str]:
        return list(self._ids)

    def __getitem__(self, name: str) -> int:
        return self._ids[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"ReferenceTable({len(self._ids)} references)"


def parse_reference_yaml(text: str) -> ReferenceTable:
    """Accepts a mapping of name -> id, a list of names, or either under `references`."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ReferenceTableError([f"YAML parse error: {e}"]) from None
    if isinstance(data, dict) and "references" in data:
        data = data["references"]
    if isinstance(data, dict):
        return ReferenceTable.from_mapping(data)
    if isinstance(data, list):
        bad = [i for i, n in enumerate(data) if not isinstance(n, str)]
        if bad:
            raise ReferenceTableError([f"references[{i}] must be a string" for i in bad])
        return ReferenceTable.from_names(data)
    raise ReferenceTableError(["references must be a mapping of name -> id or a list of names"])


def _first_tokens(lines: Iterable[str], *, marker: str | None = None) -> Iterator[str]:
    for line in lines:
        line = line.strip()
        if not line:
            continue
        if marker is not None:
            if not line.startswith(marker):
                continue
            line = line[len(marker) :]
        parts = line.split()
        if parts:
            yield parts[0]


def load_reference_table(path: str | Path) -> ReferenceTable:
    """Load a table from YAML, a samtools .fai index, FASTA headers or a name list."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None
    except UnicodeDecodeError as e:
        raise ReferenceTableError([f"{path} is not valid UTF-8 (byte {e.start})"]) from None

    suffix = p.suffix.lower()
    if suffix in YAML_SUFFIXES:
        return parse_reference_yaml(text)
    lines = text.splitlines()
    if suffix == ".fai":
        # first tab-separated column is the sequence name
        return ReferenceTable.from_names(
            line.split("\t", 1)[0] for line in lines if line.strip()
        )
    if suffix in FASTA_SUFFIXES:
        return ReferenceTable.from_names(_first_tokens(lines, marker=">"))
    return ReferenceTable.from_names(_first_tokens(lines))

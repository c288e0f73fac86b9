from __future__ import annotations

from pathlib import Path

import pytest

from readhints.core.reftable import (
    ReferenceTable,
    ReferenceTableError,
    load_reference_table,
    parse_reference_yaml,
)


def test_from_names_numbers_in_order() -> None:
    t = ReferenceTable.from_names(["chr1", "chr2", "chrM"])
    assert t.find("chr1") == 0 and t.find("chrM") == 2
    assert t.find("chr3") is None
    assert t.find("CHR1") is None
    assert len(t) == 3 and "chr2" in t
    assert t.names() == ["chr1", "chr2", "chrM"]


def test_duplicate_names_rejected() -> None:
    with pytest.raises(ReferenceTableError) as ei:
        ReferenceTable.from_names(["a", "b", "a"])
    assert any("duplicate" in e for e in ei.value.errors)


def test_from_mapping_requires_int_ids() -> None:
    t = ReferenceTable.from_mapping({"chr1": 4, "chr2": -1})
    assert t["chr2"] == -1
    with pytest.raises(ReferenceTableError) as ei:
        ReferenceTable.from_mapping({"chr1": "x", "chr2": True})
    assert len(ei.value.errors) == 2


def test_parse_yaml_forms() -> None:
    assert parse_reference_yaml("chr1: 3\nchr2: 9\n").find("chr2") == 9
    assert parse_reference_yaml("- chr1\n- chr2\n").find("chr2") == 1
    assert parse_reference_yaml("references:\n  chrX: 22\n").find("chrX") == 22
    with pytest.raises(ReferenceTableError):
        parse_reference_yaml("just a string")
    with pytest.raises(ReferenceTableError):
        parse_reference_yaml("- 1\n- chr2\n")
    with pytest.raises(ReferenceTableError):
        parse_reference_yaml("a: [unclosed")


def test_load_fai(tmp_path: Path) -> None:
    p = tmp_path / "ref.fa.fai"
    p.write_text("chr1\t248956422\t112\t70\t71\nchr2\t242193529\t252513167\t70\t71\n")
    t = load_reference_table(p)
    assert t.find("chr1") == 0 and t.find("chr2") == 1


def test_load_fasta_headers(tmp_path: Path) -> None:
    p = tmp_path / "ref.fasta"
    p.write_text(">chr1 Homo sapiens chromosome 1\nACGT\nACGT\n>chr2\nTTTT\n")
    t = load_reference_table(p)
    assert t.names() == ["chr1", "chr2"]


def test_load_name_list_and_yaml(tmp_path: Path) -> None:
    p = tmp_path / "names.txt"
    p.write_text("chrA\n\nchrB extra\n")
    assert load_reference_table(p).names() == ["chrA", "chrB"]
    y = tmp_path / "refs.yml"
    y.write_text("chrA: 10\n")
    assert load_reference_table(y).find("chrA") == 10


def test_load_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_reference_table(tmp_path / "missing.fai")


def test_load_non_utf8(tmp_path: Path) -> None:
    p = tmp_path / "names.txt"
    p.write_bytes(b"chr1\n\xffchr2\n")
    with pytest.raises(ReferenceTableError) as ei:
        load_reference_table(p)
    assert "not valid UTF-8" in ei.value.errors[0]

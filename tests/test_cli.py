from __future__ import annotations

from pathlib import Path

import pytest

import readhints.core.config as config
from readhints.cli import main


@pytest.fixture(autouse=True)
def _no_user_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "get_user_config_path", lambda: tmp_path / "absent.yaml")


def _write(tmp_path: Path) -> tuple[Path, Path]:
    refs = tmp_path / "refs.fai"
    refs.write_text("chr1\t100\t0\t60\t61\nchr2\t100\t0\t60\t61\n")
    reads = tmp_path / "reads.fq"
    reads.write_text(
        "@r1!h!!chr2!7!+!20!0\nACGT\n+\nIIII\n"
        "@r2!h!!chr9!7!+!20!0\nACGT\n+\nIIII\n"
        "@r3\nACGT\n+\nIIII\n"
    )
    return refs, reads


def test_tsv_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    refs, reads = _write(tmp_path)
    rc = main([str(reads), "--refs", str(refs), "--format", "tsv"])
    assert rc == 0
    out = capsys.readouterr().out.splitlines()
    assert out[1] == "r1!h!!chr2!7!+!20!0\t1\t7\t+\t20\t0"
    assert len(out) == 2


def test_abort_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    refs, reads = _write(tmp_path)
    rc = main([str(reads), "--refs", str(refs), "--on-error", "abort"])
    assert rc == 1
    assert "chr9" in capsys.readouterr().err


def test_missing_files(tmp_path: Path) -> None:
    refs, reads = _write(tmp_path)
    assert main([str(tmp_path / "nope.fq"), "--refs", str(refs)]) == 2
    assert main([str(reads), "--refs", str(tmp_path / "nope.fai")]) == 2
    assert main([str(reads)]) == 2


def test_config_supplies_refs_and_mode(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    refs = tmp_path / "refs.yaml"
    refs.write_text("chr1: 5\n")
    reads = tmp_path / "names.txt"
    reads.write_text("x!h!!chr1!-2!3!4!9\n")
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("mode: interval\nreferences: refs.yaml\n")
    rc = main([str(reads), "--config", str(cfg), "--format", "tsv"])
    assert rc == 0
    out = capsys.readouterr().out.splitlines()
    assert out[1] == "x!h!!chr1!-2!3!4!9\t5\t-2\t3\t6\t-4\t9"


def test_bad_config(tmp_path: Path) -> None:
    refs, reads = _write(tmp_path)
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("mode: sideways\n")
    assert main([str(reads), "--refs", str(refs), "--config", str(cfg)]) == 2


def test_undecodable_read_name_is_replaced(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    refs, reads = _write(tmp_path)
    reads.write_bytes(b"@r\xe91!h!!chr1!1!+!2!0\nA\n+\nI\n")
    rc = main([str(reads), "--refs", str(refs), "--format", "tsv"])
    assert rc == 0
    out = capsys.readouterr().out.splitlines()
    assert out[1] == "r\ufffd1!h!!chr1!1!+!2!0\t0\t1\t+\t2\t0"


def test_undecodable_reference_table(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    refs, reads = _write(tmp_path)
    refs.write_bytes(b"\xff\xfe\x00chr")
    assert main([str(reads), "--refs", str(refs)]) == 2
    assert "invalid reference table" in capsys.readouterr().err

from __future__ import annotations

import argparse
import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

from readhints.core.batch import ON_ERROR_POLICIES, decode_names, summarize
from readhints.core.config import (
    ConfigError,
    HintConfig,
    load_config_file,
    load_user_config,
)
from readhints.core.errors import HintError
from readhints.core.reads import iter_read_names, open_reads
from readhints.core.reftable import ReferenceTableError, load_reference_table
from readhints.render import hints_table, summary_text, write_tsv

logger = logging.getLogger("readhints")


def _setup_logging(verbose: bool, console: Console) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="readhints", description="Decode alignment hints embedded in read names"
    )
    parser.add_argument("input", nargs="?", default="-", help="FASTQ/FASTA/names (- for stdin)")
    parser.add_argument("--refs", help="Reference table (.yaml, .fai, FASTA or name list)")
    parser.add_argument("--interval", action="store_true", help="Decode interval hints")
    parser.add_argument("--on-error", choices=ON_ERROR_POLICIES, help="Policy for malformed hints")
    parser.add_argument("--config", help="Config file (default: user config)")
    parser.add_argument("--format", choices=("table", "tsv"), default="table")
    parser.add_argument("--summary", action="store_true", help="Print counts after decoding")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    err_console = Console(stderr=True)
    _setup_logging(args.verbose, err_console)

    try:
        cfg = load_config_file(args.config) if args.config else load_user_config()
    except FileNotFoundError:
        print(f"readhints: file not found: {args.config}", file=sys.stderr)
        return 2
    except ConfigError as e:
        print(f"readhints: invalid config: {e}", file=sys.stderr)
        return 2

    refs = args.refs or (str(cfg.references) if cfg.references else None)
    if refs is None:
        print("readhints: no reference table (use --refs or set 'references')", file=sys.stderr)
        return 2
    if args.input != "-" and not os.path.exists(args.input):
        print(f"readhints: file not found: {args.input}", file=sys.stderr)
        return 2
    try:
        table = load_reference_table(refs)
    except FileNotFoundError:
        print(f"readhints: file not found: {refs}", file=sys.stderr)
        return 2
    except ReferenceTableError as e:
        print(f"readhints: invalid reference table: {e}", file=sys.stderr)
        return 2

    cfg = HintConfig(
        mode="interval" if args.interval else cfg.mode,
        on_error=args.on_error or cfg.on_error,
        max_name_length=cfg.max_name_length,
        references=cfg.references,
    )
    logger.debug("Loaded %s from %s", table, refs)

    fh = open_reads(args.input)
    try:
        results = list(
            decode_names(
                iter_read_names(fh),
                table,
                interval=cfg.interval,
                on_error=cfg.on_error,
                max_name_length=cfg.max_name_length,
            )
        )
    except HintError as e:
        print(f"readhints: {e}", file=sys.stderr)
        return 1
    except UnicodeDecodeError:
        print(f"readhints: {args.input} is not valid UTF-8", file=sys.stderr)
        return 2
    finally:
        if fh is not sys.stdin:
            fh.close()

    if args.format == "tsv":
        write_tsv(results, sys.stdout, interval=cfg.interval)
    else:
        Console().print(hints_table(results, interval=cfg.interval))
    if args.summary:
        err_console.print(summary_text(summarize(results)))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

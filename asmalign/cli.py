"""
asmalign – command-line interface
=================================

Usage
-----
::

    python -m asmalign.cli SOURCE [OPTIONS]

Options
-------
--output, -o          Output file path (default: stdout).
--in-place, -i        Rewrite SOURCE with the formatted text.
--check               Report whether SOURCE would change; write nothing.
--format, -f          Output format: ``text`` (default) or ``json``.
--tab-size N          Alignment unit for every tabstop (default 4).
--comment-prefix C    Rewrite every comment prefix to ``;`` or ``*``.
--no-label-colon      Emit standalone labels without a trailing colon.
--no-collapse         Keep single-byte move runs as they are.
--verbose, -v         Enable DEBUG logging.

Exit status is 0 on success, 1 when ``--check`` finds a file that would be
reformatted and 2 on usage or I/O errors.

Examples
--------
::

    python -m asmalign.cli boot.s
    python -m asmalign.cli boot.s -i --tab-size 8
    python -m asmalign.cli boot.s --check
    cat boot.s | python -m asmalign.cli - --comment-prefix ';' -o out.s
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .models import COMMENT_PREFIXES, FormatOptions, FormatResult
from .pipeline.format_pipeline import AsmFormatter

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="asmalign",
        description="asmalign – realign and tidy 68000 assembly source",
    )
    p.add_argument("source", help="Assembly source file to format ('-' for stdin)")
    p.add_argument(
        "--output", "-o",
        default="-",
        metavar="FILE",
        help="Output file (default: stdout)",
    )
    p.add_argument(
        "--in-place", "-i",
        action="store_true",
        help="Overwrite SOURCE with the formatted text",
    )
    p.add_argument(
        "--check",
        action="store_true",
        help="Exit with status 1 if SOURCE would be reformatted; write nothing",
    )
    p.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Output format: aligned source text (default) or parsed records as JSON",
    )
    p.add_argument(
        "--tab-size",
        type=int,
        default=4,
        metavar="N",
        help="Alignment unit for every tabstop (default: 4)",
    )
    p.add_argument(
        "--comment-prefix",
        choices=list(COMMENT_PREFIXES),
        default=None,
        metavar="C",
        help="Rewrite every comment prefix to C (';' or '*')",
    )
    p.add_argument(
        "--no-label-colon",
        action="store_true",
        help="Emit standalone labels without a trailing colon",
    )
    p.add_argument(
        "--no-collapse",
        action="store_true",
        help="Do not merge runs of single-byte literal moves",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return p


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def _render_output(result: FormatResult, fmt: str) -> str:
    if fmt == "json":
        return json.dumps(result.to_dict(), indent=2) + "\n"
    return result.text


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.in_place and args.source == "-":
        print("error: --in-place needs a file, not stdin", file=sys.stderr)
        return 2

    try:
        options = FormatOptions(
            tab_size=args.tab_size,
            comment_prefix=args.comment_prefix,
            label_colon=not args.no_label_colon,
            collapse_moves=not args.no_collapse,
        )
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        source_text = _read_source(args.source)
    except OSError as exc:
        logger.error("Failed to read %s: %s", args.source, exc)
        print(f"error: cannot read {args.source}: {exc}", file=sys.stderr)
        return 2

    name = "<stdin>" if args.source == "-" else args.source
    result = AsmFormatter(options).format_text(source_text, source_name=name)

    # ------------------------------------------------------------------
    # Check mode
    # ------------------------------------------------------------------
    if args.check:
        if result.text != source_text:
            print(f"would reformat {name}", file=sys.stderr)
            return 1
        return 0

    output_text = _render_output(result, args.format)
    destination = args.source if args.in_place else args.output

    if destination == "-":
        sys.stdout.write(output_text)
        return 0

    try:
        Path(destination).write_text(output_text, encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to write %s: %s", destination, exc)
        print(f"error: cannot write {destination}: {exc}", file=sys.stderr)
        return 2
    print(f"Output written to {destination}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())

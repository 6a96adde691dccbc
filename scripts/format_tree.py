"""
format_tree.py
==============
Reformat every assembly source file found under one or more directories.

Files are rewritten in place; with ``--check`` nothing is written and the
script exits with status 1 if any file would change.

Usage
-----
    python scripts/format_tree.py \\
        --roots src/boot src/kernel \\
        --suffixes .s .asm .i \\
        --tab-size 8
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterator, List

# Allow running from the repo root without installing the package
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from asmalign import AsmFormatter, FormatOptions  # noqa: E402


def _iter_sources(roots: List[str], suffixes: List[str]) -> Iterator[Path]:
    wanted = {s.lower() for s in suffixes}
    for root in roots:
        for path in sorted(Path(root).rglob("*")):
            if path.is_file() and path.suffix.lower() in wanted:
                yield path


def format_tree(
    roots: List[str],
    suffixes: List[str],
    options: FormatOptions,
    check: bool,
) -> int:
    """Format every matching file; return the number that changed (or would)."""
    formatter = AsmFormatter(options)
    changed = 0
    for path in _iter_sources(roots, suffixes):
        original = path.read_text(encoding="utf-8", errors="replace")
        result = formatter.format_text(original, source_name=str(path))
        if result.text == original:
            continue
        changed += 1
        if check:
            print(f"  would reformat {path}")
        else:
            path.write_text(result.text, encoding="utf-8")
            print(f"  reformatted {path} ({result.groups_collapsed} move-groups collapsed)")
    return changed


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Reformat every assembly file under the given directories"
    )
    parser.add_argument("--roots", nargs="+", required=True, metavar="DIR")
    parser.add_argument(
        "--suffixes", nargs="+", default=[".s", ".asm", ".i"], metavar="EXT"
    )
    parser.add_argument("--tab-size", type=int, default=4, metavar="N")
    parser.add_argument("--check", action="store_true")
    args = parser.parse_args()

    changed = format_tree(
        roots=args.roots,
        suffixes=args.suffixes,
        options=FormatOptions(tab_size=args.tab_size),
        check=args.check,
    )
    print(f"\n{changed} file(s) {'would change' if args.check else 'reformatted'}")
    if args.check and changed:
        sys.exit(1)


if __name__ == "__main__":
    main()

"""
AsmFormatter
============

Orchestrates the formatting pipeline over a whole file held in memory.

Pipeline stages:

1. :class:`~asmalign.parser.line_classifier.LineClassifier`
   – Classify each raw line into a line record.
2. :class:`~asmalign.passes.normalise.NormalisePass`
   – Label colons, comment prefixes, collapsible flags.
3. :class:`~asmalign.passes.move_group.MoveGroupCollapsePass`
   – Merge 2- and 4-line byte-move runs (skipped when
   ``collapse_moves`` is off).
4. :func:`~asmalign.output.column_aligner.measure` /
   :func:`~asmalign.output.column_aligner.render`
   – Compute the file-wide tabstops and re-emit every line.

Each stage runs to completion before the next one starts.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from ..models import FormatOptions, FormatResult, Line
from ..output.column_aligner import measure, render
from ..parser.line_classifier import LineClassifier
from ..passes.move_group import MoveGroupCollapsePass
from ..passes.normalise import NormalisePass

logger = logging.getLogger(__name__)


class AsmFormatter:
    """
    High-level facade for reformatting assembly source.

    Parameters
    ----------
    options:
        Formatting constants.  Defaults to :class:`FormatOptions()`.
    """

    def __init__(self, options: Optional[FormatOptions] = None) -> None:
        self.options = options if options is not None else FormatOptions()
        self._classifier = LineClassifier()

    # ------------------------------------------------------------------
    # Primary API
    # ------------------------------------------------------------------

    def format_lines(
        self,
        lines: Iterable[str],
        source_name: str = "<inline>",
    ) -> FormatResult:
        """
        Reformat a sequence of source lines (terminators already stripped).

        Returns
        -------
        FormatResult
            Aligned text lines plus the records and tabstops behind them.
        """
        raw = list(lines)
        records = self.classify_lines(raw)

        collapsed = 0
        if self.options.collapse_moves:
            collapser = MoveGroupCollapsePass()
            records = collapser.run(records)
            collapsed = collapser.groups_collapsed

        tabstops = measure(records, self.options.tab_size)
        output = render(records, tabstops)

        logger.info(
            "Formatted %s: %d lines in, %d lines out, %d move-groups collapsed",
            source_name,
            len(raw),
            len(output),
            collapsed,
        )
        return FormatResult(
            lines=output,
            records=records,
            tabstops=tabstops,
            groups_collapsed=collapsed,
            source_name=source_name,
        )

    def format_text(self, source: str, source_name: str = "<inline>") -> FormatResult:
        """Reformat source supplied as a **string**."""
        return self.format_lines(source.splitlines(), source_name=source_name)

    def format_file(self, file_path: str) -> FormatResult:
        """
        Reformat an assembly source **file**.  The file is not modified.

        Raises
        ------
        OSError
            When the file cannot be read.
        """
        logger.debug("Reading file: %s", file_path)
        source = Path(file_path).read_text(encoding="utf-8", errors="replace")
        return self.format_text(source, source_name=str(file_path))

    def classify_lines(self, lines: Iterable[str]) -> List[Line]:
        """Classify and normalise *lines* without collapsing or aligning."""
        records = self._classifier.classify_all(lines)
        return NormalisePass(
            label_colon=self.options.label_colon,
            comment_prefix=self.options.comment_prefix,
        ).run(records)

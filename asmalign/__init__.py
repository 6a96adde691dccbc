"""
asmalign
========

A source-line reclassifier and column aligner for 68000 assembly.

Every line is classified (code, comment, label, blank or unknown), normalised,
runs of single-byte literal moves are merged into word/long moves, and the
file is re-emitted with columns aligned to tabstops computed from all of its
code lines.  Lines that match no grammar are echoed unchanged.

Quick start
-----------
>>> from asmalign import AsmFormatter
>>> result = AsmFormatter().format_text("foo:  move.b #'A',(A5)+\\n  move.b #'B',(A5)+\\n")
>>> result.lines
["foo:    MOVE.W  #'AB',(A5)+"]
"""

from .models import (
    BlankLine,
    CodeLine,
    CommentLine,
    FormatOptions,
    FormatResult,
    LabelLine,
    Size,
    Tabstops,
    UnknownLine,
)
from .output.column_aligner import ColumnAligner
from .parser.line_classifier import LineClassifier
from .pipeline.format_pipeline import AsmFormatter

__version__ = "0.1.0"
__all__ = [
    "AsmFormatter",
    "BlankLine",
    "CodeLine",
    "ColumnAligner",
    "CommentLine",
    "FormatOptions",
    "FormatResult",
    "LabelLine",
    "LineClassifier",
    "Size",
    "Tabstops",
    "UnknownLine",
]

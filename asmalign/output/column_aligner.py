"""
ColumnAligner
=============

Two-pass column layout for a whole file.

Pass 1, :func:`measure`, looks at every :class:`~asmalign.models.CodeLine`
and finds the widest label field (label plus colon), the widest mnemonic
field (instruction plus ``.X`` size suffix) and the widest operand list.
Each width is rounded *strictly* up to the next multiple of the tab size, so
at least one space always separates adjacent fields, and the three results
are stacked into cumulative column boundaries::

    LABEL:  MOVE.L  #'WXYZ',(A5)+   ; comment
    ^       ^       ^               ^
    0       instr   arguments       comment

Pass 2, :func:`render`, rebuilds every line against those boundaries.

Full-line comments are re-indented to whichever of column 0, the instruction
column or the comment column lies nearest their original indentation (ties go
to the lower column).  A comment indented at least as deep as the file's mean
code indentation is never pulled back to column 0.
"""
from __future__ import annotations

import logging
from typing import List

from ..models import (
    BlankLine,
    CodeLine,
    CommentLine,
    LabelLine,
    Line,
    Tabstops,
    UnknownLine,
)

logger = logging.getLogger(__name__)

DEFAULT_TAB_SIZE = 4


def snap(width: int, tab_size: int = DEFAULT_TAB_SIZE) -> int:
    """Round *width* up to the next multiple of *tab_size* (always > *width*)."""
    return (width // tab_size + 1) * tab_size


# ---------------------------------------------------------------------------
# Pass 1 – measurement
# ---------------------------------------------------------------------------


def measure(lines: List[Line], tab_size: int = DEFAULT_TAB_SIZE) -> Tabstops:
    """
    Compute the file-wide tabstops from the code lines of *lines*.

    Parameters
    ----------
    lines:
        Fully transformed line records.
    tab_size:
        Alignment unit.

    Returns
    -------
    Tabstops
    """
    label_width = 0
    mnemonic_width = 0
    args_width = 0
    leading: List[int] = []

    for line in lines:
        if not isinstance(line, CodeLine):
            continue
        label_width = max(label_width, len(line.label_text()))
        mnemonic_width = max(mnemonic_width, len(line.mnemonic_text()))
        if line.args:
            args_width = max(args_width, len(line.args))
        leading.append(line.leading_ws)

    instruction = snap(label_width, tab_size)
    arguments = instruction + snap(mnemonic_width, tab_size)
    comment = arguments + snap(args_width, tab_size)
    original = sum(leading) / len(leading) if leading else None

    logger.debug(
        "Measured widths label=%d mnemonic=%d args=%d -> tabstops %d/%d/%d",
        label_width,
        mnemonic_width,
        args_width,
        instruction,
        arguments,
        comment,
    )
    return Tabstops(
        instruction=instruction,
        arguments=arguments,
        comment=comment,
        original_instruction=original,
        leading_widths=frozenset(leading),
    )


# ---------------------------------------------------------------------------
# Pass 2 – composition
# ---------------------------------------------------------------------------


def render(lines: List[Line], tabstops: Tabstops) -> List[str]:
    """Recompose every record of *lines* as text aligned to *tabstops*."""
    return [render_line(line, tabstops) for line in lines]


def render_line(line: Line, tabstops: Tabstops) -> str:
    if isinstance(line, CodeLine):
        return _render_code(line, tabstops)
    if isinstance(line, CommentLine):
        return _render_comment(line, tabstops)
    if isinstance(line, LabelLine):
        return _render_label(line, tabstops)
    if isinstance(line, UnknownLine):
        return line.text
    if isinstance(line, BlankLine):
        return ""
    raise TypeError(f"Not a line record: {line!r}")


def _render_code(line: CodeLine, tabstops: Tabstops) -> str:
    out = line.label_text()
    out = _pad(out, tabstops.instruction) + line.mnemonic_text()
    if line.args:
        out = _pad(out, tabstops.arguments) + line.args
    if line.has_comment:
        out = _pad(out, tabstops.comment) + (line.comment_prefix or "") + (line.comment or "")
    return out


def _render_comment(line: CommentLine, tabstops: Tabstops) -> str:
    indent = comment_indent(line.leading_ws, tabstops)
    text = f" {line.text}" if line.text else ""
    return " " * indent + line.prefix + text


def _render_label(line: LabelLine, tabstops: Tabstops) -> str:
    out = line.name + (":" if line.has_colon else "")
    if line.prefix is None and line.comment is None:
        return out
    # The comment column is measured from code lines only; a long label
    # still needs one separating space.
    column = max(tabstops.comment, len(out) + 1)
    return _pad(out, column) + (line.prefix or "") + (line.comment or "")


def comment_indent(leading_ws: int, tabstops: Tabstops) -> int:
    """Column a full-line comment with *leading_ws* indentation moves to."""
    candidates = [0, tabstops.instruction, tabstops.comment]
    if tabstops.original_instruction is not None and leading_ws >= tabstops.original_instruction:
        candidates = candidates[1:]
    return min(candidates, key=lambda column: (abs(column - leading_ws), column))


def _pad(text: str, column: int) -> str:
    gap = column - len(text)
    if gap < 0:
        logger.debug("Field overruns column %d, padding clamped: %r", column, text)
        return text
    return text + " " * gap


# ---------------------------------------------------------------------------
# Facade
# ---------------------------------------------------------------------------


class ColumnAligner:
    """
    Measures and renders in one call.

    Parameters
    ----------
    tab_size:
        Alignment unit for every tabstop.
    """

    def __init__(self, tab_size: int = DEFAULT_TAB_SIZE) -> None:
        self.tab_size = tab_size

    def align(self, lines: List[Line]) -> List[str]:
        """Return the aligned text of *lines*; *lines* is not modified."""
        return render(lines, measure(lines, self.tab_size))

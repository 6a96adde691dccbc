"""
NormalisePass
=============

Per-line semantic edits applied before alignment.

Currently performs:
  * Flagging of *collapsible* code lines: ``MOVE.B #'c',(A5)+``, a single
    character immediate moved through an auto-incrementing pointer.  The flag
    is set only when the operand text matches that shape in full, so the
    move-group pass can rely on it.
  * Optional rewrite of every existing comment prefix to one character.
  * Forcing the colon on standalone labels to a single policy value.

Records are mutated in place; blank and unknown lines are left alone.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional

from ..models import CodeLine, CommentLine, LabelLine, Line, Size
from ..pipeline.mnemonics import MOVE_MNEMONIC

logger = logging.getLogger(__name__)

# Group 1 is the single literal character.
COLLAPSIBLE_ARGS_RE = re.compile(r"#'([^'])',\(A5\)\+", re.IGNORECASE)


def is_collapsible(line: Line) -> bool:
    """True when *line* is a byte move of one literal character into ``(A5)+``."""
    return (
        isinstance(line, CodeLine)
        and line.instruction == MOVE_MNEMONIC
        and line.size is Size.BYTE
        and line.args is not None
        and COLLAPSIBLE_ARGS_RE.fullmatch(line.args) is not None
    )


class NormalisePass:
    """
    Applies the colon, comment-prefix and collapsibility normalisations.

    Parameters
    ----------
    label_colon:
        Colon policy for standalone labels.
    comment_prefix:
        Prefix character to rewrite comments to, or ``None`` to keep them.
    """

    def __init__(self, label_colon: bool = True, comment_prefix: Optional[str] = None) -> None:
        self.label_colon = label_colon
        self.comment_prefix = comment_prefix

    def run(self, lines: List[Line]) -> List[Line]:
        """
        Normalise every record of *lines* in place.

        Returns
        -------
        List[Line]
            The same list object, for chaining.
        """
        flagged = 0
        for line in lines:
            self.normalise(line)
            if isinstance(line, CodeLine) and line.collapsible:
                flagged += 1
        logger.debug("Normalised %d lines (%d collapsible)", len(lines), flagged)
        return lines

    def normalise(self, line: Line) -> None:
        if isinstance(line, CodeLine):
            line.collapsible = is_collapsible(line)
            if self.comment_prefix and line.comment_prefix:
                line.comment_prefix = self.comment_prefix

        elif isinstance(line, CommentLine):
            if self.comment_prefix:
                line.prefix = self.comment_prefix

        elif isinstance(line, LabelLine):
            line.has_colon = self.label_colon
            if self.comment_prefix and line.prefix:
                line.prefix = self.comment_prefix

"""
MoveGroupCollapsePass
=====================

Merges runs of single-byte literal moves into one wider move.

Writing sequential bytes through an auto-incrementing pointer::

    MOVE.B  #'W',(A5)+
    MOVE.B  #'X',(A5)+
    MOVE.B  #'Y',(A5)+
    MOVE.B  #'Z',(A5)+

is equivalent to one long-word immediate move::

    MOVE.L  #'WXYZ',(A5)+

Grouping rules:
  * A *move-group* is a maximal run of consecutive lines flagged
    ``collapsible`` by :class:`~asmalign.passes.normalise.NormalisePass`.
    Any other line, blank lines included, ends the run.
  * A collapsible line carrying its own label starts a new run, so a branch
    target is never merged away.
  * Runs of exactly 2 become one ``.W`` move, runs of exactly 4 one ``.L``
    move.  Runs of any other length are left untouched.

The first member of an accepted run survives with the widened size and the
composed literal; the comments of the other members are dropped.
"""
from __future__ import annotations

import logging
from typing import List

from ..models import CodeLine, Line, Size
from ..pipeline.mnemonics import GROUP_SIZES
from .normalise import COLLAPSIBLE_ARGS_RE

logger = logging.getLogger(__name__)


class MoveGroupCollapsePass:
    """Collapses 2- and 4-line move-groups.  Builds a fresh list."""

    def __init__(self) -> None:
        #: Number of groups merged by the last :meth:`run`.
        self.groups_collapsed = 0

    def run(self, lines: List[Line]) -> List[Line]:
        """
        Collapse move-groups in *lines*.

        Parameters
        ----------
        lines:
            Normalised line records.

        Returns
        -------
        List[Line]
            A new list; shorter than *lines* when any group was merged.
        """
        self.groups_collapsed = 0
        result: List[Line] = []
        pending: List[CodeLine] = []

        for line in lines:
            if isinstance(line, CodeLine) and line.collapsible:
                if line.label and pending:
                    self._flush(pending, result)
                    pending = []
                pending.append(line)
                continue

            self._flush(pending, result)
            pending = []
            result.append(line)

        self._flush(pending, result)

        logger.debug(
            "Collapsed %d move-groups (%d -> %d lines)",
            self.groups_collapsed,
            len(lines),
            len(result),
        )
        return result

    # ------------------------------------------------------------------

    def _flush(self, group: List[CodeLine], result: List[Line]) -> None:
        target = GROUP_SIZES.get(len(group))
        if target is None or not self._merge(group, Size(target)):
            result.extend(group)
            return
        result.append(group[0])
        self.groups_collapsed += 1

    @staticmethod
    def _merge(group: List[CodeLine], size: Size) -> bool:
        """
        Fold *group* into its first member.  Returns False, leaving every
        member untouched, when the first member has no literal to grow.
        """
        first = group[0]
        head = COLLAPSIBLE_ARGS_RE.fullmatch(first.args or "")
        if head is None:
            logger.warning("Move-group head has no literal operand, not merging: %r", first)
            return False

        chars: List[str] = []
        for member in group:
            match = COLLAPSIBLE_ARGS_RE.fullmatch(member.args or "")
            if match is None:
                logger.warning("Skipping move-group member without a literal: %r", member)
                continue
            chars.append(match.group(1))
            if member is not first and member.has_comment:
                logger.debug("Dropping comment of merged line: %r", member.comment)

        args = first.args or ""
        first.args = args[: head.start(1)] + "".join(chars) + args[head.end(1):]
        first.size = size
        first.collapsible = False
        return True

"""
LineClassifier
==============

Turns one raw source line into a tagged line record
(:mod:`asmalign.models`).

Grammars are tried in a fixed order, cheapest and most specific first, and
every grammar is anchored to the whole line:

+---+-------------------------------------------+----------------------------+
| # | Condition                                 | Result                     |
+===+===========================================+============================+
| 1 | Nothing but whitespace                    | :class:`BlankLine`         |
+---+-------------------------------------------+----------------------------+
| 2 | First non-blank character is ``;``/``*``  | :class:`CommentLine`       |
+---+-------------------------------------------+----------------------------+
| 3 | No whitespace anywhere (column-0 token)   | :class:`LabelLine`         |
+---+-------------------------------------------+----------------------------+
| 4 | ``[label[:]]  RTS|NOP|END…  [;comment]``  | :class:`CodeLine`          |
+---+-------------------------------------------+----------------------------+
| 5 | ``label[:]  [;comment]``                  | :class:`LabelLine`         |
+---+-------------------------------------------+----------------------------+
| 6 | ``[label[:]]  OP[.S]  ARGS  [comment]``   | :class:`CodeLine`          |
+---+-------------------------------------------+----------------------------+
| 7 | Anything else                             | :class:`UnknownLine`       |
+---+-------------------------------------------+----------------------------+

Operands are comma-separated tokens, each optionally prefixed by ``#`` and
one of ``$``/``%``, or a single-quoted string literal.  A line whose operands
fall outside those character classes is *not* guessed at; it becomes an
:class:`UnknownLine` and is echoed unchanged.
"""
from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Iterable, List, Optional

from ..models import BlankLine, CodeLine, CommentLine, LabelLine, Line, Size, UnknownLine
from ..pipeline.mnemonics import NO_OPERAND_MNEMONICS

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Grammars
# ---------------------------------------------------------------------------

_LABEL = r"(?P<label>[.@]?\w+)?(?P<colon>:)?"

_OPERAND = r"(?:#?[$%]?[\w.()+\-*/<>&|!~^]+|#?'[^']+')"

_NO_OPERAND_RE = re.compile(
    _LABEL
    + r"(?P<ws1>\s+)"
    r"(?P<instruction>[A-Za-z]+)"
    r"(?:(?P<ws3>\s*)(?P<prefix>[;*])(?P<comment>.*))?"
)

_LABEL_COMMENT_RE = re.compile(
    r"(?P<label>[.@]?\w+)(?P<colon>:)?"
    r"(?:\s*(?P<prefix>[;*])(?P<comment>.*))?"
)

_CODE_RE = re.compile(
    _LABEL
    + r"(?P<ws1>\s+)"
    r"(?P<instruction>[A-Za-z]+)(?:\.(?P<size>[SBWLsbwl]))?"
    r"(?P<ws2>\s+)"
    r"(?P<args>" + _OPERAND + r"(?:," + _OPERAND + r")*)"
    r"(?:(?P<ws3>\s+)(?P<prefix>[;*])?(?P<comment>.*))?"
)

_COMMENT_PREFIXES = (";", "*")


class LineClassifier:
    """
    Stateless classifier converting raw source text into line records.

    :meth:`classify` is total: every input produces exactly one record.
    """

    def classify(self, raw: str) -> Line:
        """
        Classify a single source line (line terminator already stripped).

        Parameters
        ----------
        raw:
            The line as read from the file.

        Returns
        -------
        Line
            One of :class:`BlankLine`, :class:`CommentLine`,
            :class:`LabelLine`, :class:`CodeLine` or :class:`UnknownLine`.
        """
        line = raw.rstrip()
        stripped = line.lstrip()

        if not stripped:
            return BlankLine()

        if stripped.startswith(_COMMENT_PREFIXES):
            return CommentLine(
                orig_length=len(line),
                leading_ws=len(line) - len(stripped),
                prefix=stripped[0],
                text=stripped[1:].strip(),
            )

        if not any(ch.isspace() for ch in line):
            has_colon = line.endswith(":")
            return LabelLine(
                orig_length=len(line),
                name=line[:-1] if has_colon else line,
                has_colon=has_colon,
            )

        match = _NO_OPERAND_RE.fullmatch(line)
        if match and match.group("instruction").upper() in NO_OPERAND_MNEMONICS:
            return self._code_from_match(line, match)

        match = _LABEL_COMMENT_RE.fullmatch(line)
        if match:
            return LabelLine(
                orig_length=len(line),
                name=match.group("label"),
                has_colon=match.group("colon") is not None,
                prefix=match.group("prefix"),
                comment=match.group("comment"),
            )

        match = _CODE_RE.fullmatch(line)
        if match:
            return self._code_from_match(line, match)

        return UnknownLine(orig_length=len(line), text=line)

    def classify_all(self, lines: Iterable[str]) -> List[Line]:
        """Classify every line, preserving order and count."""
        records = [self.classify(raw) for raw in lines]
        if logger.isEnabledFor(logging.DEBUG):
            counts = Counter(r.kind for r in records)
            logger.debug("Classified %d lines: %s", len(records), dict(counts))
        return records

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _code_from_match(line: str, match: "re.Match[str]") -> Line:
        groups = match.groupdict()
        instruction: Optional[str] = groups.get("instruction")
        if not instruction:
            logger.warning("Code match without an instruction, keeping verbatim: %r", line)
            return UnknownLine(orig_length=len(line), text=line)

        ws3 = groups.get("ws3")
        return CodeLine(
            orig_length=len(line),
            label=groups.get("label"),
            has_colon=groups.get("colon") is not None,
            leading_ws=len(groups.get("ws1") or ""),
            instruction=instruction.upper(),
            size=Size.from_suffix(groups.get("size")),
            medial_ws=len(groups.get("ws2") or ""),
            args=groups.get("args"),
            trailing_ws=len(ws3) if ws3 is not None else None,
            comment_prefix=groups.get("prefix"),
            comment=groups.get("comment"),
        )


_default = LineClassifier()


def classify(raw: str) -> Line:
    """Module-level shortcut for :meth:`LineClassifier.classify`."""
    return _default.classify(raw)

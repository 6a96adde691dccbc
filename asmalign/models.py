"""
Core data models for the assembly aligner.

One record per source line, in file order.  Records are created by
:class:`~asmalign.parser.line_classifier.LineClassifier`, mutated in place by
:class:`~asmalign.passes.normalise.NormalisePass` (flags and prefixes only),
merged by :class:`~asmalign.passes.move_group.MoveGroupCollapsePass` and read
by :mod:`asmalign.output.column_aligner`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Union


# ---------------------------------------------------------------------------
# Operand size
# ---------------------------------------------------------------------------


class Size(Enum):
    """Operand-size suffix of an instruction (``.S`` / ``.B`` / ``.W`` / ``.L``)."""

    SHORT = "S"
    BYTE = "B"
    WORD = "W"
    LONG = "L"
    NONE = ""

    @classmethod
    def from_suffix(cls, suffix: Optional[str]) -> "Size":
        if not suffix:
            return cls.NONE
        try:
            return cls(suffix.upper())
        except ValueError:
            return cls.NONE

    @property
    def suffix(self) -> str:
        """Rendered suffix text, e.g. ``".W"``; empty for :attr:`NONE`."""
        return f".{self.value}" if self.value else ""


# ---------------------------------------------------------------------------
# Line records
# ---------------------------------------------------------------------------

LINE_KINDS = {
    "BLANK",    # Empty / whitespace-only line
    "COMMENT",  # Full-line comment
    "LABEL",    # Label, optionally followed by a comment
    "CODE",     # Instruction line
    "UNKNOWN",  # Matched no grammar; echoed verbatim
}


@dataclass
class BlankLine:
    kind = "BLANK"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind}


@dataclass
class CommentLine:
    """A full-line comment (``; text`` or ``* text``)."""

    kind = "COMMENT"

    orig_length: int
    leading_ws: int
    prefix: str
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "leading_ws": self.leading_ws,
            "prefix": self.prefix,
            "text": self.text,
        }


@dataclass
class LabelLine:
    """A line holding only a label, optionally followed by a comment."""

    kind = "LABEL"

    orig_length: int
    name: str
    has_colon: bool = False
    prefix: Optional[str] = None
    comment: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "name": self.name,
            "has_colon": self.has_colon,
            "prefix": self.prefix,
            "comment": self.comment,
        }


@dataclass
class CodeLine:
    """
    An instruction line broken into its fields.

    Whitespace widths (``leading_ws``, ``medial_ws``, ``trailing_ws``) are the
    widths found in the source; the aligner only reads ``leading_ws``.
    """

    kind = "CODE"

    orig_length: int
    instruction: str
    label: Optional[str] = None
    has_colon: bool = False
    leading_ws: int = 0
    size: Size = Size.NONE
    medial_ws: int = 0
    args: Optional[str] = None
    trailing_ws: Optional[int] = None
    comment_prefix: Optional[str] = None
    comment: Optional[str] = None
    collapsible: bool = False

    @property
    def has_comment(self) -> bool:
        return self.comment is not None or self.comment_prefix is not None

    def label_text(self) -> str:
        if not self.label:
            return ":" if self.has_colon else ""
        return self.label + (":" if self.has_colon else "")

    def mnemonic_text(self) -> str:
        return self.instruction + self.size.suffix

    def __repr__(self) -> str:
        return (
            f"CodeLine(label={self.label!r}, instruction={self.mnemonic_text()!r}, "
            f"args={self.args!r}, comment={self.comment!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "label": self.label,
            "has_colon": self.has_colon,
            "leading_ws": self.leading_ws,
            "instruction": self.instruction,
            "size": self.size.name,
            "args": self.args,
            "comment_prefix": self.comment_prefix,
            "comment": self.comment,
            "collapsible": self.collapsible,
        }


@dataclass
class UnknownLine:
    """A line no grammar recognised.  ``text`` is emitted unchanged."""

    kind = "UNKNOWN"

    orig_length: int
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "text": self.text}


Line = Union[BlankLine, CommentLine, LabelLine, CodeLine, UnknownLine]


# ---------------------------------------------------------------------------
# Tabstops
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Tabstops:
    """
    Cumulative column boundaries computed from a whole file.

    ``instruction <= arguments <= comment`` always holds.
    ``original_instruction`` is the mean source indentation of code lines
    (``None`` when the file has no code lines); ``leading_widths`` is the set
    of distinct source indentations it was computed from.
    """

    instruction: int
    arguments: int
    comment: int
    original_instruction: Optional[float] = None
    leading_widths: FrozenSet[int] = frozenset()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "instruction": self.instruction,
            "arguments": self.arguments,
            "comment": self.comment,
            "original_instruction": self.original_instruction,
        }


# ---------------------------------------------------------------------------
# Options and results
# ---------------------------------------------------------------------------

COMMENT_PREFIXES = (";", "*")


@dataclass
class FormatOptions:
    """
    Fixed formatting constants for one run.

    Parameters
    ----------
    tab_size:
        Alignment unit every tabstop is snapped to.
    comment_prefix:
        When set, every existing comment prefix is rewritten to this
        character.  ``None`` leaves prefixes untouched.
    label_colon:
        Whether standalone labels are emitted with a trailing colon.
    collapse_moves:
        Whether runs of single-byte moves are merged.
    """

    tab_size: int = 4
    comment_prefix: Optional[str] = None
    label_colon: bool = True
    collapse_moves: bool = True

    def __post_init__(self) -> None:
        if self.tab_size < 1:
            raise ValueError(f"tab_size must be at least 1, got {self.tab_size}")
        if self.comment_prefix is not None and self.comment_prefix not in COMMENT_PREFIXES:
            raise ValueError(
                f"comment_prefix must be one of {COMMENT_PREFIXES}, "
                f"got {self.comment_prefix!r}"
            )


@dataclass
class FormatResult:
    """Output of one formatter run over a file or text."""

    lines: List[str]
    records: List[Line]
    tabstops: Tabstops
    groups_collapsed: int = 0
    source_name: str = "<inline>"
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "\n".join(self.lines) + "\n" if self.lines else ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_file": self.source_name,
            "tabstops": self.tabstops.to_dict(),
            "groups_collapsed": self.groups_collapsed,
            "records": [r.to_dict() for r in self.records],
        }

"""
Mnemonic tables for the 68000-family assembly dialect.

Used by :class:`~asmalign.parser.line_classifier.LineClassifier` to recognise
instructions that take no operands, and by
:class:`~asmalign.passes.normalise.NormalisePass` to spot byte moves.
"""
from __future__ import annotations

# Instructions and directives that never take operands.  A line holding one
# of these may carry only a label and a prefixed comment.
NO_OPERAND_MNEMONICS: frozenset[str] = frozenset(
    {
        # ── Returns ──────────────────────────────────────────────────────
        "RTS", "RTE", "RTR",
        # ── Halt / processor control ─────────────────────────────────────
        "ILLEGAL", "RESET", "NOP", "TRAPV",
        # ── Directives ───────────────────────────────────────────────────
        "END", "ENDC", "ENDIF", "ENDM", "EVEN", "MEXIT",
    }
)

# The move mnemonic whose byte-sized immediate form is collapsible.
MOVE_MNEMONIC = "MOVE"

# Number of collapsible byte moves merged into each wider move.
GROUP_SIZES = {2: "W", 4: "L"}

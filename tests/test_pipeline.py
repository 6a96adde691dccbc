"""
Integration tests for the full pipeline:
  LineClassifier → NormalisePass → MoveGroupCollapsePass → ColumnAligner

These tests drive AsmFormatter end to end, using inline sources and the
fixture files.
"""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from asmalign import AsmFormatter, FormatOptions
from asmalign.models import CodeLine, CommentLine, LabelLine, Size, UnknownLine

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def formatter():
    return AsmFormatter()


# ─────────────────────────────────────────────────────────────────────────────
# Reference scenarios
# ─────────────────────────────────────────────────────────────────────────────


class TestScenarios:
    def test_pair_collapses_to_word(self, formatter):
        result = formatter.format_lines(["foo:  move.b #'A',(A5)+", "  move.b #'B',(A5)+"])
        assert len(result.lines) == 1
        (record,) = result.records
        assert record.size is Size.WORD
        assert "'AB'" in record.args
        assert result.lines == ["foo:    MOVE.W  #'AB',(A5)+"]

    def test_indented_rts(self, formatter):
        (record,) = formatter.classify_lines(["  rts"])
        assert isinstance(record, CodeLine)
        assert record.instruction == "RTS"
        assert record.args is None
        assert record.size is Size.NONE

    def test_comment(self, formatter):
        (record,) = formatter.classify_lines(["; a comment"])
        assert isinstance(record, CommentLine)
        assert record.prefix == ";"
        assert record.text == "a comment"

    def test_bare_label_colon_policy(self):
        (forced,) = AsmFormatter().classify_lines(["LOOP"])
        (plain,) = AsmFormatter(FormatOptions(label_colon=False)).classify_lines(["LOOP"])
        assert isinstance(plain, LabelLine)
        assert plain.name == forced.name == "LOOP"
        assert plain.has_colon is False
        assert forced.has_colon is True

    def test_four_collapse_to_long(self, formatter):
        source = "\n".join(f"  move.b #'{c}',(A5)+" for c in "WXYZ")
        result = formatter.format_text(source)
        (record,) = result.records
        assert record.size is Size.LONG
        assert record.args == "#'WXYZ',(A5)+"
        assert result.groups_collapsed == 1


# ─────────────────────────────────────────────────────────────────────────────
# Laws
# ─────────────────────────────────────────────────────────────────────────────


class TestLaws:
    @pytest.mark.parametrize("count, expected", [(1, 1), (2, 1), (3, 3), (4, 1), (5, 5), (8, 8)])
    def test_collapse_count(self, formatter, count, expected):
        lines = [f"  move.b #'{chr(ord('a') + i)}',(A5)+" for i in range(count)]
        assert len(formatter.format_lines(lines).lines) == expected

    def test_unknown_round_trip(self, formatter):
        lines = ['  dc.b "quoted"   ', "  jmp [a0]", "weird line, with stuff"]
        result = formatter.format_lines(lines)
        assert all(isinstance(r, UnknownLine) for r in result.records)
        assert result.lines == [line.rstrip() for line in lines]

    def test_line_count_preserved_without_groups(self, formatter):
        lines = ["", "; c", "L", "  rts", "  ???", "  move.b #'a',(A5)+"]
        assert len(formatter.format_lines(lines).lines) == len(lines)

    def test_tabstops_monotonic(self, formatter):
        result = formatter.format_file(str(FIXTURES / "demo.s"))
        stops = result.tabstops
        assert stops.instruction <= stops.arguments <= stops.comment

    @pytest.mark.parametrize("tab_size", [2, 4, 8])
    def test_idempotent(self, tab_size):
        formatter = AsmFormatter(FormatOptions(tab_size=tab_size))
        first = formatter.format_file(str(FIXTURES / "demo.s"))
        second = formatter.format_lines(first.lines)
        assert second.lines == first.lines

    def test_idempotent_with_comment_rewrite(self):
        formatter = AsmFormatter(FormatOptions(comment_prefix="*"))
        first = formatter.format_file(str(FIXTURES / "demo.s"))
        assert formatter.format_text(first.text).text == first.text


# ─────────────────────────────────────────────────────────────────────────────
# Options
# ─────────────────────────────────────────────────────────────────────────────


class TestOptions:
    def test_collapse_disabled(self):
        formatter = AsmFormatter(FormatOptions(collapse_moves=False))
        result = formatter.format_lines(["  move.b #'A',(A5)+", "  move.b #'B',(A5)+"])
        assert len(result.lines) == 2
        assert result.groups_collapsed == 0

    def test_tab_size_changes_columns(self):
        source = "x: rts\n  lea buf,a0"
        narrow = AsmFormatter(FormatOptions(tab_size=4)).format_text(source)
        wide = AsmFormatter(FormatOptions(tab_size=8)).format_text(source)
        assert narrow.lines[1] == "    LEA buf,a0"
        assert wide.lines[1] == "        LEA     buf,a0"

    def test_comment_prefix_rewrite(self):
        formatter = AsmFormatter(FormatOptions(comment_prefix=";"))
        result = formatter.format_text("* banner\n  rts * done")
        assert result.lines[0] == "; banner"
        assert result.lines[1].endswith("; done")

    @pytest.mark.parametrize(
        "kwargs", [{"tab_size": 0}, {"tab_size": -4}, {"comment_prefix": "#"}]
    )
    def test_invalid_options(self, kwargs):
        with pytest.raises(ValueError):
            FormatOptions(**kwargs)


# ─────────────────────────────────────────────────────────────────────────────
# Fixture file
# ─────────────────────────────────────────────────────────────────────────────


class TestFixture:
    def test_demo_matches_expected(self, formatter):
        result = formatter.format_file(str(FIXTURES / "demo.s"))
        expected = (FIXTURES / "demo_expected.s").read_text(encoding="utf-8")
        assert result.text == expected

    def test_demo_statistics(self, formatter):
        result = formatter.format_file(str(FIXTURES / "demo.s"))
        assert result.groups_collapsed == 2
        assert len(result.lines) == 15
        assert (result.tabstops.instruction, result.tabstops.arguments, result.tabstops.comment) == (8, 16, 32)

    def test_expected_is_fixed_point(self, formatter):
        expected = (FIXTURES / "demo_expected.s").read_text(encoding="utf-8")
        assert formatter.format_text(expected).text == expected

    def test_missing_file_raises(self, formatter, tmp_path):
        with pytest.raises(OSError):
            formatter.format_file(str(tmp_path / "nope.s"))

    def test_json_dump(self, formatter):
        data = formatter.format_file(str(FIXTURES / "demo.s")).to_dict()
        kinds = [r["kind"] for r in data["records"]]
        assert kinds.count("UNKNOWN") == 1
        assert data["tabstops"]["comment"] == 32
        assert data["records"][3]["size"] == "WORD"

    def test_inline_source(self, formatter):
        source = textwrap.dedent("""\
        start
        \tmoveq #0,d0 ; clear
        .l:\taddq.w #1,d0
        \tbra.s .l
        """)
        result = formatter.format_text(source)
        assert result.lines == [
            "start:",
            "    MOVEQ   #0,d0   ; clear",
            ".l: ADDQ.W  #1,d0",
            "    BRA.S   .l",
        ]

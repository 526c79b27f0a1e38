"""Tests for segment extraction, grammar parsers and formatters."""

import pytest

from kreedz_anticheat.grammars import (
    NO_DATA,
    compile_marker,
    extract_pattern_segment,
    format_gokz,
    format_kztimer,
    load_grammar,
    parse_gokz,
    parse_kztimer,
    parse_nothing,
)
from kreedz_anticheat.models import JumpInput


class TestExtractPatternSegment:
    def test_no_marker(self):
        assert extract_pattern_segment("banned for macro usage") is None

    def test_empty(self):
        assert extract_pattern_segment("") is None

    def test_marker_at_end(self):
        assert extract_pattern_segment("Bhops: 3, Scroll pattern: 3/1* 2/0") == "3/1* 2/0"

    def test_stops_at_comma(self):
        text = "Scroll pattern: 3/1* 2/0, Avg speed: 300"
        assert extract_pattern_segment(text) == "3/1* 2/0"

    def test_trailing_comma(self):
        assert extract_pattern_segment("Scroll pattern: 3/1*,") == "3/1*"

    def test_stops_at_line_end(self):
        text = "Bhops: 3\nScroll pattern: [1-0] 2-2\nSpeed: 290"
        assert extract_pattern_segment(text) == "[1-0] 2-2"

    def test_marker_is_case_sensitive(self):
        assert extract_pattern_segment("scroll pattern: 3/1*") is None

    def test_custom_marker(self):
        pattern = compile_marker("Pattern (x): ")
        assert extract_pattern_segment("Pattern (x): 1/1", pattern) == "1/1"


class TestParseGokz:
    def test_basic(self):
        assert parse_gokz("3/1* 2/0 4/2*") == [
            JumpInput(3, 1, True),
            JumpInput(2, 0, False),
            JumpInput(4, 2, True),
        ]

    def test_zero_input_jump(self):
        assert parse_gokz("0/0") == [JumpInput(0, 0, False)]

    def test_extra_whitespace(self):
        assert parse_gokz("  1/2   3/4* ") == [JumpInput(1, 2, False), JumpInput(3, 4, True)]

    def test_malformed_tokens_dropped(self):
        assert parse_gokz("3/1* x/2 4 -1/2 2/0") == [JumpInput(3, 1, True), JumpInput(2, 0, False)]

    def test_empty_segment(self):
        assert parse_gokz("") == []

    def test_no_data_literal(self):
        assert parse_gokz(NO_DATA) == []

    def test_oversized_count_dropped(self):
        segment = "3/1* " + "9" * 5000 + "/0 2/0"
        assert parse_gokz(segment) == [JumpInput(3, 1, True), JumpInput(2, 0, False)]

    def test_largest_count_kept(self):
        assert parse_gokz("999999999/0 1234567890/0") == [JumpInput(999999999, 0, False)]

    def test_kztimer_text_yields_nothing(self):
        assert parse_gokz("[3-1] 2-0") == []


class TestParseKztimer:
    def test_basic(self):
        assert parse_kztimer("[3-1] 2-0 [4-2]") == [
            JumpInput(3, 1, True),
            JumpInput(2, 0, False),
            JumpInput(4, 2, True),
        ]

    def test_unbalanced_brackets_dropped(self):
        assert parse_kztimer("[3-1 2-0] 1-1") == [JumpInput(1, 1, False)]

    def test_malformed_tokens_dropped(self):
        assert parse_kztimer("[a-1] 2- 5-5") == [JumpInput(5, 5, False)]

    def test_oversized_count_dropped(self):
        segment = "[3-1] 0-" + "9" * 5000 + " 2-0"
        assert parse_kztimer(segment) == [JumpInput(3, 1, True), JumpInput(2, 0, False)]

    def test_no_data_literal(self):
        assert parse_kztimer(NO_DATA) == []


class TestParseNothing:
    def test_always_empty(self):
        assert parse_nothing("3/1* 2/0") == []


class TestFormatters:
    @pytest.fixture
    def jumps(self):
        return [JumpInput(3, 1, True), JumpInput(2, 0, False), JumpInput(0, 0, False)]

    def test_gokz(self, jumps):
        assert format_gokz(jumps) == "3/1* 2/0 0/0"

    def test_kztimer(self, jumps):
        assert format_kztimer(jumps) == "[3-1] 2-0 0-0"

    def test_empty(self):
        assert format_gokz([]) == NO_DATA
        assert format_kztimer([]) == NO_DATA

    def test_gokz_reparses(self, jumps):
        assert parse_gokz(format_gokz(jumps)) == jumps

    def test_kztimer_reparses(self, jumps):
        assert parse_kztimer(format_kztimer(jumps)) == jumps


class TestLoadGrammar:
    def test_colon_separator(self):
        assert load_grammar("kreedz_anticheat.grammars:parse_gokz") is parse_gokz

    def test_dot_separator(self):
        assert load_grammar("kreedz_anticheat.grammars.parse_kztimer") is parse_kztimer

    def test_not_callable(self):
        with pytest.raises(TypeError, match="not callable"):
            load_grammar("kreedz_anticheat.grammars:NO_DATA")

    def test_missing_module(self):
        with pytest.raises(ImportError):
            load_grammar("kreedz_anticheat.nonexistent:parse")

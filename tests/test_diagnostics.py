"""Тесты трассы ошибок с кареткой."""

import pytest

from occ.diagnostics import DiagnosticsIndexError, create_trace, locate
from occ.errors import ExpressionExpected


class TestCreateTrace:

    def test_caret_under_character(self):
        assert create_trace("abc", 1) == "abc\n ^"

    def test_first_character(self):
        assert create_trace("abc", 0) == "abc\n^"

    def test_second_line_resets_column(self):
        """Колонка считается заново после каждого перевода строки."""
        assert create_trace("ab\ncd", 3) == "cd\n^"
        assert create_trace("ab\ncd", 4) == "cd\n ^"

    def test_index_on_newline_points_past_line_end(self):
        assert create_trace("ab\ncd", 2) == "ab\n  ^"

    def test_long_prefix_is_truncated(self):
        line = "x" * 20 + "Y" + "z" * 5
        expected = "..." + "x" * 15 + "Yzzzzz" + "\n" + " " * 18 + "^"
        assert create_trace(line, 20) == expected

    def test_prefix_of_18_is_kept(self):
        line = "x" * 18 + "Y"
        assert create_trace(line, 18) == line + "\n" + " " * 18 + "^"

    def test_long_suffix_is_truncated(self):
        line = "Y" + "z" * 25
        assert create_trace(line, 0) == "Y" + "z" * 15 + "...\n^"

    def test_suffix_of_19_is_kept(self):
        line = "Y" + "z" * 18
        assert create_trace(line, 0) == line + "\n^"

    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_missing_index_is_internal_failure(self, index):
        with pytest.raises(DiagnosticsIndexError):
            create_trace("abc", index)


class TestLocate:

    def test_line_and_column_are_one_based(self):
        assert locate("abc", 0) == (1, 1)
        assert locate("ab\ncd\nef", 7) == (3, 2)


class TestSyntaxErrorFormatting:

    def test_message_and_trace(self):
        err = ExpressionExpected("Expression expected", source="ab\n{}", index=4)

        assert err.line == 2
        assert err.column == 2
        assert err.index == 4
        assert str(err) == "Expression expected\n{}\n ^"

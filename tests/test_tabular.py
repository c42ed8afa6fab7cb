"""
Tests for the tabular text parser.
"""

from wiremcp.analysis.tabular import iter_rows


class TestIterRows:
    """Tests for iter_rows."""

    def test_splits_on_tabs(self):
        """Each line becomes one list of fields."""
        rows = list(iter_rows("a\tb\tc\nd\te\tf\n"))
        assert rows == [["a", "b", "c"], ["d", "e", "f"]]

    def test_skips_blank_lines(self):
        """Blank and whitespace-only lines are not rows."""
        rows = list(iter_rows("\n   \na\tb\n\n\t\t\t\n"))
        assert rows == [["a", "b"]]

    def test_pads_short_rows(self):
        """Short rows are padded with empty strings up to width."""
        rows = list(iter_rows("only\n", width=3))
        assert rows == [["only", "", ""]]

    def test_long_rows_pass_through(self):
        """Rows wider than expected are not truncated or rejected."""
        rows = list(iter_rows("a\tb\tc\td\n", width=2))
        assert rows == [["a", "b", "c", "d"]]

    def test_keeps_leading_empty_field(self):
        """A leading tab yields an empty first field."""
        rows = list(iter_rows("\tUSER\tftpuser\t\t1\n", width=5))
        assert rows == [["", "USER", "ftpuser", "", "1"]]

    def test_strips_carriage_returns(self):
        """Windows line endings do not leak into the last field."""
        rows = list(iter_rows("a\tb\r\nc\td\r\n"))
        assert rows == [["a", "b"], ["c", "d"]]

    def test_is_lazy(self):
        """iter_rows returns an iterator, not a list."""
        rows = iter_rows("a\nb\n")
        assert next(rows) == ["a"]
        assert next(rows) == ["b"]

    def test_custom_separator(self):
        """A different field separator can be used."""
        assert list(iter_rows("a,b\n", separator=",")) == [["a", "b"]]

"""
Tests for line reconstruction.
"""
import pytest

from statement_parser.core.lines import (
    PlainText, PositionedTokens, reconstruct_lines, resolve_page, split_text_lines
)
from statement_parser.models.schema import TextToken


def tok(text, x, y):
    return TextToken(text=text, x=x, y=y)


class TestReconstructLines:
    """Grouping positioned tokens into visual lines."""

    def test_empty_input(self):
        assert reconstruct_lines([]) == []

    def test_blank_tokens_only(self):
        assert reconstruct_lines([tok("  ", 10, 700), tok("", 20, 700)]) == []

    def test_orders_top_to_bottom_and_left_to_right(self):
        tokens = [
            tok("48,000.00", 400, 680),
            tok("Statement", 50, 760),
            tok("15-03-24", 50, 680),
            tok("ATM-CASH", 120, 680.8),
            tok("WITHDRAWAL", 200, 679.5),
            tok("2,000.00", 320, 680),
        ]

        assert reconstruct_lines(tokens) == [
            "Statement",
            "15-03-24 ATM-CASH WITHDRAWAL 2,000.00 48,000.00",
        ]

    def test_tolerance_is_exclusive(self):
        tokens = [tok("upper", 10, 700.0), tok("lower", 10, 698.0)]
        assert reconstruct_lines(tokens) == ["upper", "lower"]

    def test_custom_tolerance(self):
        tokens = [tok("left", 10, 700.0), tok("right", 80, 697.0)]
        assert reconstruct_lines(tokens, tolerance=5.0) == ["left right"]


class TestResolvePage:
    """Both input modes produce the same downstream shape."""

    def test_positioned_tokens_header_uses_top_lines(self):
        tokens = [tok(f"line{i}", 10, 800 - i * 20) for i in range(15)]

        page = resolve_page(PositionedTokens(tokens), header_line_count=10)

        assert len(page.lines) == 15
        assert page.header_text == " ".join(f"line{i}" for i in range(10))

    def test_plain_text_keeps_whole_text_for_header(self):
        text = "HDFC Bank\n\n  Account No: 1234567890  \n15-03-24 ATM 100.00\n"

        page = resolve_page(PlainText(text))

        assert page.lines == ["HDFC Bank", "Account No: 1234567890", "15-03-24 ATM 100.00"]
        assert page.header_text == text

    def test_unknown_source(self):
        with pytest.raises(TypeError):
            resolve_page(["not", "a", "source"])

    def test_split_text_lines_handles_crlf(self):
        assert split_text_lines("a\r\nb\r\n\r\n c ") == ["a", "b", "c"]

"""
Tests for transaction segmentation.
"""
import pytest

from statement_parser.core.segmenter import Segment, match_transaction_start, segment_lines


class TestMatchTransactionStart:

    @pytest.mark.parametrize("line, date, remainder", [
        ("15-03-24 ATM-CASH WITHDRAWAL 2,000.00", "15-03-24", "ATM-CASH WITHDRAWAL 2,000.00"),
        ("01-02-2024 123456 NEFT TRANSFER 1,000.00", "01-02-2024", "123456 NEFT TRANSFER 1,000.00"),
        ("5/3/2024 POS PURCHASE 99.00", "5/3/2024", "POS PURCHASE 99.00"),
        ("  1/12/24   UPI PAYMENT 10.00  ", "1/12/24", "UPI PAYMENT 10.00"),
        ("31-12/2023 MIXED SEPARATORS 5.00", "31-12/2023", "MIXED SEPARATORS 5.00"),
    ])
    def test_date_is_captured_and_stripped(self, line, date, remainder):
        segment = match_transaction_start(line)
        assert segment == Segment(date=date, remainder=remainder)

    def test_short_line_is_discarded(self):
        assert match_transaction_start("1-1-24 X") is None

    def test_date_must_lead(self):
        assert match_transaction_start("Opening 01-02-2024 balance 100.00") is None

    def test_non_date_line(self):
        assert match_transaction_start("Page 1 of 3 continued") is None

    def test_three_digit_day_is_not_a_date(self):
        assert match_transaction_start("123-01-2024 SOMETHING 1.00") is None


class TestSegmentLines:

    LINES = [
        "HDFC Bank Statement",
        "Date Narration Chq No Debit Credit Balance",
        "01-02-2024 UPI/P2A/ABC 500.00 9,500.00",
        "   PAYMENT   TO  XYZ  ",
        "02-02-2024 ATM 100.00 9,400.00",
        "Page 1 of 2",
    ]

    def test_continuation_lines_dropped_by_default(self):
        segments = segment_lines(self.LINES)

        assert segments == [
            Segment("01-02-2024", "UPI/P2A/ABC 500.00 9,500.00"),
            Segment("02-02-2024", "ATM 100.00 9,400.00"),
        ]

    def test_continuation_lines_merged_when_enabled(self):
        segments = segment_lines(self.LINES, merge_multiline=True)

        assert segments == [
            Segment("01-02-2024", "UPI/P2A/ABC 500.00 9,500.00 PAYMENT TO XYZ"),
            Segment("02-02-2024", "ATM 100.00 9,400.00"),
        ]

    def test_short_date_line_counts_as_continuation(self):
        lines = ["01-02-2024 SALARY 5,000.00", "1-1-24 X", "03-02-2024 ATM 10.00"]

        segments = segment_lines(lines, merge_multiline=True)

        assert segments[0].remainder == "SALARY 5,000.00 1-1-24 X"
        assert len(segments) == 2

    def test_no_lines(self):
        assert segment_lines([]) == []
        assert segment_lines([], merge_multiline=True) == []

"""日付バケット化のユニットテスト."""

import pytest

from backend.aggregation.bucket import bucket_date


class TestDayBucket:
    """day / None は入力をそのまま返す."""

    def test_day_mode_returns_date_unchanged(self):
        assert bucket_date("2024-01-15", "day") == "2024-01-15"

    def test_none_mode_returns_date_unchanged(self):
        assert bucket_date("2024-01-15") == "2024-01-15"

    def test_day_mode_does_not_parse(self):
        """day は解析しないため不正な文字列もそのまま返る."""
        assert bucket_date("not-a-date", "day") == "not-a-date"


class TestMonthBucket:
    def test_month(self):
        assert bucket_date("2024-01-15", "month") == "2024-01"

    def test_month_is_zero_padded(self):
        assert bucket_date("2024-9-05", "month") == "2024-09"

    def test_december(self):
        assert bucket_date("2023-12-31", "month") == "2023-12"


class TestQuarterBucket:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2024-01-15", "2024-Q1"),
            ("2024-03-31", "2024-Q1"),
            ("2024-04-01", "2024-Q2"),
            ("2024-09-30", "2024-Q3"),
            ("2024-12-01", "2024-Q4"),
        ],
    )
    def test_quarter(self, value, expected):
        assert bucket_date(value, "quarter") == expected


class TestWeekBucket:
    """年初からの通算日による週キー（ISO週番号ではない）."""

    def test_first_day_of_year_is_week_1(self):
        assert bucket_date("2024-01-01", "week") == "2024-W1"

    def test_seventh_day_is_still_week_1(self):
        assert bucket_date("2024-01-07", "week") == "2024-W1"

    def test_eighth_day_starts_week_2(self):
        assert bucket_date("2024-01-08", "week") == "2024-W2"

    def test_leap_year_last_day_is_week_53(self):
        """2024 はうるう年で 12/31 は通算366日目."""
        assert bucket_date("2024-12-31", "week") == "2024-W53"

    def test_not_iso_week_numbering(self):
        """2021-01-01 は ISO では 2020-W53 だが、ここでは年初の W1."""
        assert bucket_date("2021-01-01", "week") == "2021-W1"

    def test_week_after_february_in_leap_year(self):
        """2024-03-01 は通算61日目 → (60 // 7) + 1 = 9."""
        assert bucket_date("2024-03-01", "week") == "2024-W9"


class TestErrors:
    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown date bucket"):
            bucket_date("2024-01-01", "year")

    def test_malformed_date(self):
        with pytest.raises(ValueError):
            bucket_date("2024/01/01", "month")

    def test_impossible_calendar_date_for_week(self):
        with pytest.raises(ValueError):
            bucket_date("2023-02-30", "week")

"""Test release date parsing and formatting"""

from datetime import date

import pytest

from spotify_web.core.exceptions import FormatError, ReleaseDateFormatError
from spotify_web.objectmodel.enums import ReleaseDatePrecision
from spotify_web.serialization.dates import (
    apply_release_date,
    format_release_date,
    infer_release_date_precision,
    parse_release_date,
)


class TestReleaseDates:
    """Test precision-aware release dates"""

    @pytest.mark.parametrize("value, precision, expected", [
        ("1981", ReleaseDatePrecision.YEAR, date(1981, 1, 1)),
        ("1981-12", ReleaseDatePrecision.MONTH, date(1981, 12, 1)),
        ("1981-12-15", ReleaseDatePrecision.DAY, date(1981, 12, 15)),
    ])
    def test_parse(self, value, precision, expected):
        """Test each precision expands to the first day of its period"""
        assert parse_release_date(value, precision) == expected

    @pytest.mark.parametrize("value, precision", [
        ("1981-12", ReleaseDatePrecision.YEAR),
        ("1981", ReleaseDatePrecision.DAY),
        ("81-12-15", ReleaseDatePrecision.DAY),
        ("1981-13", ReleaseDatePrecision.MONTH),
        ("2021-02-30", ReleaseDatePrecision.DAY),
    ])
    def test_parse_mismatch(self, value, precision):
        """Test strings not matching their precision are rejected"""
        with pytest.raises(ReleaseDateFormatError) as exc_info:
            parse_release_date(value, precision)
        assert exc_info.value.details["value"] == value

    def test_release_date_error_is_format_error(self):
        """Test the error belongs to the format error family"""
        with pytest.raises(FormatError):
            parse_release_date("soon", ReleaseDatePrecision.YEAR)

    @pytest.mark.parametrize("precision, expected", [
        (ReleaseDatePrecision.YEAR, "1981"),
        (ReleaseDatePrecision.MONTH, "1981-12"),
        (ReleaseDatePrecision.DAY, "1981-12-15"),
    ])
    def test_format_truncates(self, precision, expected):
        """Test formatting drops components finer than the precision"""
        assert format_release_date(date(1981, 12, 15), precision) == expected

    def test_format_parse_format_is_stable(self):
        """Test format(parse(format(d))) == format(d) for every precision"""
        for precision in ReleaseDatePrecision:
            text = format_release_date(date(2004, 7, 9), precision)
            assert format_release_date(parse_release_date(text, precision), precision) == text

    def test_infer_precision(self):
        """Test precision is implied by the string length"""
        assert infer_release_date_precision("2004") is ReleaseDatePrecision.YEAR
        assert infer_release_date_precision("2004-07") is ReleaseDatePrecision.MONTH
        assert infer_release_date_precision("2004-07-09") is ReleaseDatePrecision.DAY
        with pytest.raises(ReleaseDateFormatError):
            infer_release_date_precision("04")

    def test_apply_release_date_without_precision(self):
        """Test missing precision is inferred when slots are applied"""
        fields = apply_release_date({"release_date": "2004-07"})
        assert fields == {
            "release_date": date(2004, 7, 1),
            "release_date_precision": ReleaseDatePrecision.MONTH,
        }

    def test_apply_release_date_without_date(self):
        """Test slots are untouched when no date was read"""
        fields = {"release_date_precision": ReleaseDatePrecision.YEAR}
        assert apply_release_date(fields) == {"release_date_precision": ReleaseDatePrecision.YEAR}

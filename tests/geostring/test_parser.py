"""
Tests for the coordinate parser.
"""

import pytest

import geostring
from geostring import parse, try_parse
from geostring.errors import CoordinateRangeError, CoordinateSyntaxError, GeoStringError
from geostring.parser import CoordinateParser


LAT_DMS = 40 + 26 / 60 + 46 / 3600
LON_DMS = 79 + 58 / 60 + 56 / 3600


VALID_CASES = [
    # Single values
    ("15", 15),
    ("1E5", 100000.0),
    ("1e-5", 0.00001),
    ("-15", -15),
    ("+15", 15),
    ("1.5", 1.5),
    ("-1.5", -1.5),
    ("15°", 15),
    ("15.5°", 15.5),
    ("15 N", 15),
    ("15 S", -15),
    ("15 e", 15),
    ("15 w", -15),
    ("1.5 S", -1.5),
    ("40:26", 40 + 26 / 60),
    ("40:26:46", LAT_DMS),
    ("40:26:46.302", 40 + 26 / 60 + 46.302 / 3600),
    ("-40:26:46", -LAT_DMS),
    ("40:26:46 S", -LAT_DMS),
    ("40° 26' 46\" N", LAT_DMS),
    ("40°26'46\"S", -LAT_DMS),
    ("40° 26′ 46″ W", -LAT_DMS),
    ("40° 26.5' N", 40 + 26.5 / 60),
    ("40° 26' N", 40 + 26 / 60),
    ("40° 26' 46.5\" N", 40 + 26 / 60 + 46.5 / 3600),
    ("-40° 26' 46\"", -LAT_DMS),
    ("40°26'46\"", LAT_DMS),
    # Pairs
    ("40, 79", (40, 79)),
    ("40 79", (40, 79)),
    ("40,79", (40, 79)),
    ("-40 -79", (-40, -79)),
    ("40.4738, -79.553", (40.4738, -79.553)),
    ("40.4738 -79.553", (40.4738, -79.553)),
    ("40.4738° -79.553°", (40.4738, -79.553)),
    ("40.4738°, 79.553°", (40.4738, 79.553)),
    ("40.4738° N, 79.553° W", (40.4738, -79.553)),
    ("40.4738 S 79.553 E", (-40.4738, 79.553)),
    ("79.553 W 40.4738 N", (-79.553, 40.4738)),
    ("40° 79°", (40, 79)),
    ("40° -79°", (40, -79)),
    ("40°26'46\"N 79°58'56\"W", (LAT_DMS, -LON_DMS)),
    ("40°26'46\"N, 79°58'56\"W", (LAT_DMS, -LON_DMS)),
    ("40° 26' 46\" N 79° 58' 56\" W", (LAT_DMS, -LON_DMS)),
    ("40° 26' 46\" S, 79° 58' 56\" E", (-LAT_DMS, LON_DMS)),
    ("79° 58' 56\" W 40° 26' 46\" N", (-LON_DMS, LAT_DMS)),
    ("40° 26.767' N 79° 58.933' W", (40 + 26.767 / 60, -(79 + 58.933 / 60))),
    ("40:26:46 79:58:56", (LAT_DMS, LON_DMS)),
    ("40:26:46, -79:58:56", (LAT_DMS, -LON_DMS)),
    ("40:26:46N 79:58:56W", (LAT_DMS, -LON_DMS)),
    ("40:26 -79:58", (40 + 26 / 60, -(79 + 58 / 60))),
]


class TestCoordinateParser:

    def setup_method(self):
        self.parser = CoordinateParser()

    @pytest.mark.parametrize("text,expected", VALID_CASES)
    def test_valid_values(self, text, expected):
        result = self.parser.parse(text)

        if isinstance(expected, tuple):
            assert isinstance(result, tuple)
            assert result == pytest.approx(expected)
        else:
            assert not isinstance(result, tuple)
            assert result == pytest.approx(expected)

    def test_integer_result_is_int(self):
        """Integral literals keep integer semantics"""
        for text in ("15", "15°", "15 N", "-15", "15 W"):
            result = self.parser.parse(text)
            assert isinstance(result, int), text

        x, y = self.parser.parse("40 79")
        assert isinstance(x, int)
        assert isinstance(y, int)

    def test_float_result_is_float(self):
        for text in ("15.0", "1E5", "40:26", "40° 26'"):
            assert isinstance(self.parser.parse(text), float), text

    def test_minutes_and_seconds_at_sixty_accepted(self):
        assert self.parser.parse("10° 60' N") == pytest.approx(11)
        assert self.parser.parse("10° 0' 60\" N") == pytest.approx(10 + 1 / 60)
        assert self.parser.parse("10:60:60") == pytest.approx(11 + 1 / 60)

    def test_latitude_bounds(self):
        assert self.parser.parse("90 N") == 90
        assert self.parser.parse("90 S") == -90

    def test_longitude_bounds(self):
        assert self.parser.parse("180 E") == 180
        assert self.parser.parse("180 W") == -180

    def test_signed_values_are_not_range_checked(self):
        assert self.parser.parse("200") == 200
        assert self.parser.parse("-200.5") == -200.5

    def test_parser_is_reusable(self):
        """State from a previous parse must not leak into the next one"""
        assert self.parser.parse("40:26:46") == pytest.approx(LAT_DMS)
        assert self.parser.parse("40° 26' 46\" N") == pytest.approx(LAT_DMS)
        assert self.parser.parse("15 W") == -15
        assert self.parser.parse("-15") == -15
        with pytest.raises(CoordinateSyntaxError):
            self.parser.parse("15 N 16 N")
        assert self.parser.parse("15 N 16 E") == (15, 16)


class TestRangeErrors:

    def setup_method(self):
        self.parser = CoordinateParser()

    @pytest.mark.parametrize("text", [
        "10° 70' N",
        "10° 61'",
        "10:61",
        "10:61:00",
        "10° 60.5' N",
    ])
    def test_minutes_out_of_range(self, text):
        with pytest.raises(CoordinateRangeError) as exc_info:
            self.parser.parse(text)

        error = exc_info.value
        assert error.component == "Minutes"
        assert error.high == 60
        assert error.low is None
        assert str(error) == f'[Range Error] Error: Minutes greater than 60 in value "{text}"'

    @pytest.mark.parametrize("text", [
        "10° 10' 61\" N",
        "10:10:61",
        "10° 10' 60.01\"",
    ])
    def test_seconds_out_of_range(self, text):
        with pytest.raises(CoordinateRangeError) as exc_info:
            self.parser.parse(text)

        assert exc_info.value.component == "Seconds"
        assert exc_info.value.high == 60

    @pytest.mark.parametrize("text,bound", [
        ("91 N", 90),
        ("90.5 S", 90),
        ("90° 0' 1\" N", 90),
        ("181 E", 180),
        ("180.0001 W", 180),
        ("10 N 181 W", 180),
        ("10 E 91 S", 90),
    ])
    def test_degrees_out_of_range(self, text, bound):
        with pytest.raises(CoordinateRangeError) as exc_info:
            self.parser.parse(text)

        error = exc_info.value
        assert error.component == "Degrees"
        assert error.high == bound
        assert error.low == -bound
        assert f"out of range -{bound} to {bound}" in str(error)
        assert error.input_value == text


class TestSyntaxErrors:

    def setup_method(self):
        self.parser = CoordinateParser()

    def test_empty_string(self):
        with pytest.raises(CoordinateSyntaxError) as exc_info:
            self.parser.parse("")

        error = exc_info.value
        assert error.expected == "integer or float"
        assert error.found is None
        assert error.position == -1
        assert str(error) == (
            '[Syntax Error] line 0, col -1: Error: Expected integer or float, '
            'got end of string. in value ""'
        )

    def test_trailing_tokens(self):
        with pytest.raises(CoordinateSyntaxError) as exc_info:
            self.parser.parse("40, 79, 80")

        error = exc_info.value
        assert error.expected == "end of string"
        assert error.found == ","
        assert error.position == 6
        assert str(error) == (
            '[Syntax Error] line 0, col 6: Error: Expected end of string, '
            'got "," in value "40, 79, 80"'
        )

    def test_unknown_text(self):
        with pytest.raises(CoordinateSyntaxError) as exc_info:
            self.parser.parse("abc")

        assert exc_info.value.found == "a"
        assert exc_info.value.position == 0

    def test_cardinal_on_second_value_only(self):
        """A pair whose first value has no letter cannot use one on the second"""
        with pytest.raises(CoordinateSyntaxError) as exc_info:
            self.parser.parse("40 79 W")

        assert exc_info.value.expected == "end of string"
        assert exc_info.value.found == "W"

    def test_missing_second_cardinal(self):
        with pytest.raises(CoordinateSyntaxError) as exc_info:
            self.parser.parse("40 N 79")

        assert exc_info.value.expected == "longitude direction (E or W)"
        assert exc_info.value.found is None

    def test_same_cardinal_category_twice(self):
        with pytest.raises(CoordinateSyntaxError) as exc_info:
            self.parser.parse("40 N, 79 S")

        assert exc_info.value.expected == "longitude direction (E or W)"
        assert exc_info.value.found == "S"
        assert exc_info.value.position == 9

    def test_sign_with_cardinal_pair(self):
        """Once the first value used a letter, the second cannot be signed"""
        with pytest.raises(CoordinateSyntaxError) as exc_info:
            self.parser.parse("40 N, -79 W")

        assert exc_info.value.expected == "integer or float"
        assert exc_info.value.found == "-"

    def test_sign_and_cardinal_on_same_value(self):
        with pytest.raises(CoordinateSyntaxError):
            self.parser.parse("-40 N")

    def test_colon_mode_requires_colon_on_second_value(self):
        with pytest.raises(CoordinateSyntaxError) as exc_info:
            self.parser.parse("40:26:46, 79")

        assert exc_info.value.expected == "colon"

    def test_colon_mode_requires_integer_minutes(self):
        with pytest.raises(CoordinateSyntaxError) as exc_info:
            self.parser.parse("40:26.5")

        assert exc_info.value.expected == "integer"
        assert exc_info.value.found == 26.5

    def test_float_degrees_with_degree_symbol_require_symbol_on_pair(self):
        with pytest.raises(CoordinateSyntaxError) as exc_info:
            self.parser.parse("40.4738°, 79")

        assert exc_info.value.expected == "degree symbol"
        assert exc_info.value.found is None

    def test_missing_seconds_symbol(self):
        with pytest.raises(CoordinateSyntaxError) as exc_info:
            self.parser.parse("40° 26' 46 N")

        assert exc_info.value.expected == "second symbol"
        assert exc_info.value.found == "N"

    def test_position_is_byte_offset(self):
        with pytest.raises(CoordinateSyntaxError) as exc_info:
            self.parser.parse("40° 26' 46\" N x")

        assert exc_info.value.position == 15

    @pytest.mark.parametrize("text,position", [
        ("9" * 5000, 0),
        ("40 " + "9" * 5000, 3),
    ])
    def test_overlong_integer_literal(self, text, position):
        """Digit strings past the int conversion limit are rejected as syntax errors"""
        with pytest.raises(CoordinateSyntaxError) as exc_info:
            self.parser.parse(text)

        error = exc_info.value
        assert error.expected == "integer"
        assert error.position == position
        assert error.input_value == text

    def test_errors_share_base_class(self):
        with pytest.raises(GeoStringError):
            self.parser.parse("N")
        with pytest.raises(ValueError):
            self.parser.parse("91 N")


class TestTryParse:

    def test_success(self):
        result = try_parse("40° 26' 46\" N")
        assert result.ok
        assert result.error is None
        assert result.unwrap() == pytest.approx(LAT_DMS)

    def test_range_error(self):
        result = try_parse("10° 70' N")
        assert not result.ok
        assert result.value is None
        assert isinstance(result.error, CoordinateRangeError)
        with pytest.raises(CoordinateRangeError):
            result.unwrap()

    def test_syntax_error(self):
        result = CoordinateParser().try_parse("40 N 79")
        assert not result.ok
        assert isinstance(result.error, CoordinateSyntaxError)

    def test_overlong_integer_literal(self):
        result = try_parse("9" * 5000)
        assert not result.ok
        assert result.value is None
        assert isinstance(result.error, CoordinateSyntaxError)
        assert result.error.position == 0


def test_module_level_parse():
    assert parse("15") == 15
    assert parse("40°26'46\"N 79°58'56\"W") == pytest.approx((LAT_DMS, -LON_DMS))


def test_package_version():
    assert isinstance(geostring.__version__, str)
    assert geostring.__version__

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from binclock.converter import (
    binary_to_digit,
    date_to_digit_matrix,
    digit_to_binary,
    is_valid_matrix,
    matrix_to_digits,
    time_to_digit_matrix,
)
from binclock.core.errors import InvalidDigitError

# 2024-10-27 03:33:20 UTC
REFERENCE_TIMESTAMP = 1730000000


def test_digit_to_binary_known_values():
    assert digit_to_binary(0) == [0, 0, 0, 0]
    assert digit_to_binary(1) == [0, 0, 0, 1]
    assert digit_to_binary(8) == [1, 0, 0, 0]
    assert digit_to_binary(9) == [1, 0, 0, 1]


@pytest.mark.parametrize("digit", range(10))
def test_digit_to_binary_is_big_endian_and_four_wide(digit):
    column = digit_to_binary(digit)
    assert len(column) == 4
    assert int("".join(map(str, column)), 2) == digit
    assert binary_to_digit(column) == digit


@pytest.mark.parametrize("value", [-1, 10, 16, 255])
def test_digit_to_binary_rejects_out_of_range(value):
    with pytest.raises(InvalidDigitError) as exc_info:
        digit_to_binary(value)
    assert exc_info.value.details["digit"] == value


@pytest.mark.parametrize("value", [1.0, "3", True, None])
def test_digit_to_binary_rejects_non_integers(value):
    with pytest.raises(InvalidDigitError):
        digit_to_binary(value)


def test_time_matrix_for_quarter_to_eleven(quarter_to_eleven):
    assert time_to_digit_matrix(quarter_to_eleven) == [
        digit_to_binary(1),
        digit_to_binary(0),
        digit_to_binary(4),
        digit_to_binary(5),
    ]


def test_date_matrix_for_27_october(quarter_to_eleven):
    assert date_to_digit_matrix(quarter_to_eleven) == [
        digit_to_binary(2),
        digit_to_binary(7),
        digit_to_binary(1),
        digit_to_binary(0),
    ]


def test_matrices_are_four_by_four_for_now():
    now = datetime.now()
    for matrix in (time_to_digit_matrix(now), date_to_digit_matrix(now)):
        assert len(matrix) == 4
        assert all(len(column) == 4 for column in matrix)
        assert is_valid_matrix(matrix)


def test_midnight_and_last_minute():
    assert matrix_to_digits(time_to_digit_matrix(datetime(2024, 1, 1, 0, 0))) == [0, 0, 0, 0]
    assert matrix_to_digits(time_to_digit_matrix(datetime(2024, 12, 31, 23, 59))) == [2, 3, 5, 9]
    assert matrix_to_digits(date_to_digit_matrix(datetime(2024, 12, 31, 23, 59))) == [3, 1, 1, 2]


def test_aware_instant_is_converted_into_zone():
    instant = datetime.fromtimestamp(REFERENCE_TIMESTAMP, tz=timezone.utc)

    assert matrix_to_digits(time_to_digit_matrix(instant, timezone.utc)) == [0, 3, 3, 3]
    # Paris left summer time an hour and a half earlier: UTC+1
    assert matrix_to_digits(time_to_digit_matrix(instant, "Europe/Paris")) == [0, 4, 3, 3]


def test_zone_can_move_the_date_back():
    instant = datetime.fromtimestamp(REFERENCE_TIMESTAMP, tz=timezone.utc)
    zone = ZoneInfo("America/Los_Angeles")

    assert matrix_to_digits(time_to_digit_matrix(instant, zone)) == [2, 0, 3, 3]
    assert matrix_to_digits(date_to_digit_matrix(instant, zone)) == [2, 6, 1, 0]


def test_naive_instant_is_wall_time_in_zone(quarter_to_eleven):
    assert time_to_digit_matrix(quarter_to_eleven, "Asia/Tokyo") == time_to_digit_matrix(
        quarter_to_eleven
    )


def test_same_instant_always_gives_same_matrix(quarter_to_eleven):
    first = time_to_digit_matrix(quarter_to_eleven, "UTC")
    second = time_to_digit_matrix(quarter_to_eleven, "UTC")
    assert first == second
    assert first is not second


def test_is_valid_matrix_rejects_bad_shapes():
    assert not is_valid_matrix([[0, 0, 0, 0]] * 3)
    assert not is_valid_matrix([[0, 0, 0]] * 4)
    assert not is_valid_matrix([[0, 0, 0, 2]] * 4)

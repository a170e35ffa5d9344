"""Time and date to binary digit matrices.

Each decimal digit of HH:MM (or DD/MM) becomes a 4-bit column, most
significant bit first. Four columns make a digit matrix:

    10:45 -> [[0,0,0,1], [0,0,0,0], [0,1,0,0], [0,1,0,1]]

All functions here are pure and safe to call from any thread.
"""

from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo

from .core.errors import InvalidDigitError

BITS_PER_DIGIT = 4
DIGITS_PER_MATRIX = 4

DigitColumn = list[int]
DigitMatrix = list[DigitColumn]


def digit_to_binary(digit: int) -> DigitColumn:
    """Convert a single decimal digit into its 4-bit big-endian column.

    Args:
        digit: Decimal digit in 0-9

    Returns:
        List of four bits, most significant first

    Raises:
        InvalidDigitError: If digit is not an int in 0-9
    """
    if isinstance(digit, bool) or not isinstance(digit, int) or not 0 <= digit <= 9:
        raise InvalidDigitError(
            "Digit must be an integer in 0-9", details={"digit": digit}
        )
    return [(digit >> shift) & 1 for shift in range(BITS_PER_DIGIT - 1, -1, -1)]


def binary_to_digit(column: DigitColumn) -> int:
    """Read a 4-bit big-endian column back into its integer value."""
    value = 0
    for bit in column:
        value = (value << 1) | bit
    return value


def matrix_to_digits(matrix: DigitMatrix) -> list[int]:
    """Decode every column of a digit matrix."""
    return [binary_to_digit(column) for column in matrix]


def _localize(instant: datetime, zone: tzinfo | str | None) -> datetime:
    """Express an instant as wall time in the requested zone.

    Aware instants are converted; naive instants are taken as wall time
    already in the zone. Without a zone the instant's own wall time is used.
    """
    if zone is None:
        return instant
    if isinstance(zone, str):
        zone = ZoneInfo(zone)
    if instant.tzinfo is None:
        return instant.replace(tzinfo=zone)
    return instant.astimezone(zone)


def _pair_to_matrix(first: int, second: int) -> DigitMatrix:
    digits = [first // 10, first % 10, second // 10, second % 10]
    return [digit_to_binary(d) for d in digits]


def time_to_digit_matrix(instant: datetime, zone: tzinfo | str | None = None) -> DigitMatrix:
    """Convert an instant to its H1 H2 M1 M2 binary layers.

    Args:
        instant: Point in time
        zone: tzinfo or IANA zone name used to read the wall clock

    Returns:
        Four 4-bit columns: hour tens, hour units, minute tens, minute units
    """
    local = _localize(instant, zone)
    return _pair_to_matrix(local.hour, local.minute)


def date_to_digit_matrix(instant: datetime, zone: tzinfo | str | None = None) -> DigitMatrix:
    """Convert an instant to its D1 D2 M1 M2 binary layers.

    Args:
        instant: Point in time
        zone: tzinfo or IANA zone name used to read the calendar

    Returns:
        Four 4-bit columns: day tens, day units, month tens, month units
    """
    local = _localize(instant, zone)
    return _pair_to_matrix(local.day, local.month)


def is_valid_matrix(matrix: DigitMatrix) -> bool:
    """Check the 4 columns x 4 bits shape and that every entry is 0 or 1."""
    if len(matrix) != DIGITS_PER_MATRIX:
        return False
    return all(
        len(column) == BITS_PER_DIGIT and all(bit in (0, 1) for bit in column)
        for column in matrix
    )

"""Binary clock widget.

Renders the time (and optionally the date) as a binary bitmap:
- Each decimal digit becomes a 4-bit column
- Columns are drawn as line graphs, dot grids or bar charts
- Per-size styles are persisted and editable
"""

__version__ = "1.0.0"

from .converter import (
    binary_to_digit,
    date_to_digit_matrix,
    digit_to_binary,
    time_to_digit_matrix,
)

__all__ = [
    "binary_to_digit",
    "date_to_digit_matrix",
    "digit_to_binary",
    "time_to_digit_matrix",
]

"""
Input validation and normalization.

Turns raw text from the user into non-negative integer quantities.
"""

import re

INVALID_QUANTITY_MESSAGE = "Please enter a valid non-negative integer"

_DIGITS = re.compile(r"[0-9]+")


class InvalidQuantityError(ValueError):
    """Raised when text input is not empty and not a plain digit string."""
    def __init__(self, field: str, value: str):
        super().__init__(INVALID_QUANTITY_MESSAGE)
        self.field = field
        self.value = value


def is_valid_input(text: str) -> bool:
    """True for empty/whitespace-only text or ASCII digits only.

    Signs, decimal points and thousands separators are rejected, as are
    digit strings longer than the interpreter will convert to int.
    """
    try:
        parse_input(text)
    except InvalidQuantityError:
        return False
    return True


def parse_input(text: str, field: str = "value") -> int:
    """Parse text into a quantity; empty text means 0.

    Raises:
        InvalidQuantityError: If the text is not empty and not plain
            digits, or has more digits than int() accepts
    """
    stripped = text.strip()
    if stripped == "":
        return 0
    if _DIGITS.fullmatch(stripped) is None:
        raise InvalidQuantityError(field, text)

    try:
        return int(stripped)
    except ValueError:
        # int() refuses digit strings past sys.get_int_max_str_digits()
        raise InvalidQuantityError(field, text)

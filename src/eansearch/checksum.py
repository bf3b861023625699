"""Offline check digit validation for EAN/UPC/GTIN codes and ISBN-10.

The API client's ``verify_checksum`` asks the remote service; these helpers
do the same arithmetic locally without a network round trip.
"""

import re

EAN_LENGTHS = (8, 12, 13, 14)

# ASCII digits only
_DIGITS = re.compile(r"[0-9]+")
_ISBN10 = re.compile(r"[0-9]{9}[0-9X]")


def compute_check_digit(body: str) -> int:
    """
    Compute the GS1 modulo-10 check digit for a code without its check digit.

    Digits are weighted 3, 1, 3, ... starting from the rightmost one.

    Args:
        body: The digits preceding the check digit

    Returns:
        The check digit (0-9)

    Raises:
        ValueError: If body is empty or contains non-digits

    Example:
        >>> compute_check_digit("509975044222")
        7
    """
    if not _DIGITS.fullmatch(body):
        raise ValueError(f"Not a digit string: {body!r}")

    total = 0
    for position, char in enumerate(reversed(body)):
        weight = 3 if position % 2 == 0 else 1
        total += int(char) * weight
    return (10 - total % 10) % 10


def is_valid_ean(code: str) -> bool:
    """
    Check an EAN-8, UPC-A, EAN-13 or GTIN-14 code.

    Example:
        >>> is_valid_ean("5099750442227")
        True
        >>> is_valid_ean("5099750442228")
        False
    """
    code = code.strip()
    if len(code) not in EAN_LENGTHS or not _DIGITS.fullmatch(code):
        return False
    return compute_check_digit(code[:-1]) == int(code[-1])


def is_valid_isbn10(isbn: str) -> bool:
    """
    Check an ISBN-10 (weighted modulo 11, ``X`` stands for 10).

    Hyphens and spaces are ignored.

    Example:
        >>> is_valid_isbn10("1119578884")
        True
    """
    isbn = isbn.replace("-", "").replace(" ", "").upper()
    if not _ISBN10.fullmatch(isbn):
        return False

    total = 0
    for weight, char in zip(range(10, 0, -1), isbn):
        value = 10 if char == "X" else int(char)
        total += weight * value
    return total % 11 == 0


def isbn10_to_isbn13(isbn: str) -> str:
    """
    Convert an ISBN-10 to its 978-prefixed ISBN-13.

    Raises:
        ValueError: If isbn is not a valid ISBN-10

    Example:
        >>> isbn10_to_isbn13("1119578884")
        '9781119578888'
    """
    if not is_valid_isbn10(isbn):
        raise ValueError(f"Invalid ISBN-10: {isbn!r}")

    body = "978" + isbn.replace("-", "").replace(" ", "")[:9]
    return body + str(compute_check_digit(body))

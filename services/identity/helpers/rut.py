"""
RUT (Rol Único Tributario) normalization, validation and formatting for Chile.

Student and guardian records store identifiers in normalized form
("12345678-5"); forms and rosters display them formatted ("12.345.678-5").
Every function here is total over its input: invalid identifiers degrade to
an empty string, ``False`` or a pass-through value instead of raising.
"""

import re
from typing import Any

# Anything that is not part of a RUT after uppercasing
_NON_RUT_CHARS = re.compile(r"[^0-9K]")

# Normalized RUT: digits body + hyphen + single DV
RUT_PATTERN = re.compile(r"^([0-9]+)-([0-9K])$", re.IGNORECASE)

_BODY_PATTERN = re.compile(r"[0-9]+")


def normalize_rut(rut: Any) -> str:
    """
    Normalize a RUT to canonical format: <body>-<DV>

    Normalization steps:
    1. Coerce to string (None becomes empty)
    2. Uppercase and drop every character other than digits and K
    3. Take the last character as DV and the rest as body
    4. Strip leading zeros from the body

    Args:
        rut: RUT in any format (with/without dots, hyphens, spaces)

    Returns:
        Normalized RUT like "12345678-5", or "" when nothing usable remains

    Examples:
        >>> normalize_rut("12.345.678-5")
        '12345678-5'
        >>> normalize_rut("  1.000.005-k ")
        '1000005-K'
        >>> normalize_rut("0012345678-5")
        '12345678-5'
        >>> normalize_rut("invalid")
        ''
    """
    raw = _NON_RUT_CHARS.sub("", str(rut if rut is not None else "").upper())
    if not raw:
        return ""

    dv = raw[-1]
    body = raw[:-1].lstrip("0")

    if not body or not dv:
        return ""

    return f"{body}-{dv}"


def compute_check_digit(body: str) -> str:
    """
    Compute the DV of a RUT body using the Chilean módulo 11 algorithm.

    1. Multiply each digit (from right to left) by sequence 2,3,4,5,6,7,2,3,4...
    2. Sum all products
    3. Calculate 11 - (sum % 11)
    4. If result is 11, DV is 0; if 10, DV is K; otherwise DV is the result

    Args:
        body: RUT body, ASCII digits only

    Returns:
        DV character ('0'-'9' or 'K')

    Raises:
        ValueError: If body is empty or contains anything but ASCII digits

    Examples:
        >>> compute_check_digit("12345678")
        '5'
        >>> compute_check_digit("1000005")
        'K'
    """
    if not isinstance(body, str) or not _BODY_PATTERN.fullmatch(body):
        raise ValueError(f"RUT body must be a non-empty string of digits, got {body!r}")

    total = 0
    multiplier = 2

    for digit in reversed(body):
        total += int(digit) * multiplier
        multiplier = 2 if multiplier == 7 else multiplier + 1

    remainder = 11 - (total % 11)

    if remainder == 11:
        return "0"
    if remainder == 10:
        return "K"
    return str(remainder)


def validate_rut(rut: Any) -> bool:
    """
    Validate a RUT using módulo 11 algorithm.

    The input is normalized first; the normalized value is discarded.

    Args:
        rut: RUT in any format

    Returns:
        True if the declared DV matches the computed one

    Examples:
        >>> validate_rut("12.345.678-5")
        True
        >>> validate_rut("12345678-K")
        False
        >>> validate_rut("")
        False
    """
    match = RUT_PATTERN.match(normalize_rut(rut))
    if not match:
        return False

    body, dv = match.groups()
    return compute_check_digit(body) == dv.upper()


def format_rut(rut: Any) -> str:
    """
    Format a RUT for display: thousands separators and DV suffix.

    Input that does not normalize to <digits>-<DV> is returned in its
    normalized form, unformatted.

    Args:
        rut: RUT in any format

    Returns:
        Formatted RUT like "12.345.678-5"

    Examples:
        >>> format_rut("123456785")
        '12.345.678-5'
        >>> format_rut("123-4")
        '123-4'
        >>> format_rut("K12-3")
        'K12-3'
    """
    normalized = normalize_rut(rut)
    match = RUT_PATTERN.match(normalized)
    if not match:
        return normalized

    body, dv = match.groups()

    # Group digits in threes from the right
    reversed_body = body[::-1]
    groups = [reversed_body[i:i + 3] for i in range(0, len(reversed_body), 3)]
    grouped = ".".join(groups)[::-1]

    return f"{grouped}-{dv.upper()}"

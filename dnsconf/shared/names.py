"""
Domain name helpers shared by the hosts database and resolver config.

Names are validated with dnspython's text parser, which enforces the
label (63 octet) and total (255 octet) limits of RFC 1035.
"""

import random
from typing import Sequence, TypeVar

import dns.exception
import dns.name


T = TypeVar("T")


def is_name(name: str) -> bool:
    """
    Check whether a string is a syntactically valid domain name.

    Args:
        name: Candidate name, with or without a trailing dot

    Returns:
        True if dnspython can parse the name, False otherwise
    """
    if not name:
        return False

    try:
        dns.name.from_text(name)

    except (dns.exception.DNSException, UnicodeError, ValueError):
        return False

    return True


def fqdn(name: str) -> str:
    if name.endswith("."):
        return name

    return f"{name}."


def trim_fqdn(name: str) -> str:
    if name.endswith(".") and len(name) > 1:
        return name[:-1]

    return name


def random_item(items: Sequence[T]) -> T:
    return random.choice(items)


def parse_u8(text: str) -> int:
    """
    Parse a strict decimal integer in the range 0-255.

    Raises:
        ValueError: If text is empty, contains non-digits, or is out of range
    """
    if not text or not text.isascii() or not text.isdigit():
        raise ValueError(f"Invalid integer: {text!r}")

    value = int(text)
    if value > 0xFF:
        raise ValueError(f"Integer out of range: {value}")

    return value

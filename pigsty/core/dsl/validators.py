"""
Value Classifiers
=================

Predicates over literal tokens shared by the field catalog (syntax pass) and
the value encoder (build pass).
"""

import string
from typing import Optional

DIGITS = frozenset(string.digits)
HEX_DIGITS = frozenset(string.hexdigits)
HEX_PREFIX = "0x"

IPV4_SYMBOLS = frozenset(
    {
        "north-american-ip",
        "south-american-ip",
        "asian-ip",
        "european-ip",
        "user-defined-ip",
    }
)

IP_VERSION_4 = 4

# widest field is 32 bits, so no accepted decimal needs more digits
MAX_DECIMAL_DIGITS = 10
MAX_OCTET_DIGITS = 3


def is_decimal(token: str) -> bool:
    return bool(token) and all(char in DIGITS for char in token)


def is_hex(token: str) -> bool:
    digits = token[len(HEX_PREFIX):]
    return token.startswith(HEX_PREFIX) and bool(digits) and all(char in HEX_DIGITS for char in digits)


def parse_number(token: str) -> Optional[int]:
    """Decode a decimal or ``0x`` hexadecimal literal, or None for anything else."""
    if is_decimal(token):
        if len(token.lstrip("0")) > MAX_DECIMAL_DIGITS:
            return None
        return int(token, 10)
    if is_hex(token):
        return int(token[len(HEX_PREFIX):], 16)
    return None


def is_ipv4_symbol(token: str) -> bool:
    return token in IPV4_SYMBOLS


def is_ipv4_address(token: str) -> bool:
    """Dotted quad with every group in [0, 255], or one of the symbolic IP classes."""
    if is_ipv4_symbol(token):
        return True
    groups = token.split(".")
    if len(groups) != 4:
        return False
    return all(
        is_decimal(group) and len(group.lstrip("0")) <= MAX_OCTET_DIGITS and int(group) <= 255
        for group in groups
    )


def is_quoted_string(token: str) -> bool:
    return len(token) >= 2 and token[0] == '"' and token[-1] == '"'


def fits_bits(token: str, bits: int) -> bool:
    """True for a decimal/hex literal whose value lies in [0, 2**bits - 1]."""
    value = parse_number(token)
    return value is not None and 0 <= value <= (1 << bits) - 1


def is_ip_version(token: str) -> bool:
    """Only IPv4 is accepted as a version literal."""
    return parse_number(token) == IP_VERSION_4

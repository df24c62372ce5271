"""
Value Encoder
=============

Classifies a literal token and encodes it into the bytes stored in a field
configuration.

Classification order: decimal integer, hexadecimal integer, IPv4 address or
symbolic IP class, quoted string. Integers are stored in the narrowest of 1, 2
or 4 bytes that holds the value, in network byte order. Symbolic IP classes
are kept as their literal text. Strings lose their surrounding quotes only;
escape sequences are kept as written.
"""

from typing import NamedTuple, Union

from pigsty.models.schemas import ValueKind

from .validators import is_ipv4_address, is_ipv4_symbol, is_quoted_string, parse_number

_INTEGER_WIDTHS = (1, 2, 4)


class EncodedValue(NamedTuple):
    kind: ValueKind
    value: Union[int, str]
    data: bytes


def classify_value(token: str) -> ValueKind:
    """
    Work out which value class a literal belongs to.

    Raises:
        ValueError: If the token matches no value class
    """
    if parse_number(token) is not None:
        return ValueKind.INTEGER
    if is_ipv4_symbol(token):
        return ValueKind.IPV4_SYMBOL
    if is_ipv4_address(token):
        return ValueKind.IPV4_ADDRESS
    if is_quoted_string(token):
        return ValueKind.STRING
    raise ValueError(f"Unclassifiable value literal: {token!r}")


def encode_integer(value: int) -> bytes:
    for width in _INTEGER_WIDTHS:
        if value < 1 << (8 * width):
            return value.to_bytes(width, "big")
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def encode_ipv4(token: str) -> bytes:
    """Four raw octets of a dotted quad."""
    return bytes(int(group) for group in token.split("."))


def strip_quotes(token: str) -> str:
    return token[1:-1]


def encode_value(token: str) -> EncodedValue:
    """Classify and encode a literal token."""
    kind = classify_value(token)

    if kind is ValueKind.INTEGER:
        number = parse_number(token)
        return EncodedValue(kind, number, encode_integer(number))
    if kind is ValueKind.IPV4_SYMBOL:
        return EncodedValue(kind, token, token.encode("ascii"))
    if kind is ValueKind.IPV4_ADDRESS:
        return EncodedValue(kind, token, encode_ipv4(token))

    text = strip_quotes(token)
    return EncodedValue(kind, text, text.encode("utf-8"))

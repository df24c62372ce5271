"""
Field Catalog
=============

Fixed table of signature field labels, their stable indices and the value
check applied to each one. The table is built once at import and never
mutated; every pass of the compiler shares it.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from .validators import fits_bits, is_ip_version, is_ipv4_address, is_quoted_string


class FieldIndex(IntEnum):
    """Stable field identities, in catalog order."""
    IP_VERSION = 0
    IP_IHL = 1
    IP_TOS = 2
    IP_TLEN = 3
    IP_ID = 4
    IP_FLAGS = 5
    IP_OFFSET = 6
    IP_TTL = 7
    IP_PROTOCOL = 8
    IP_CHECKSUM = 9
    IP_SRC = 10
    IP_DST = 11
    IP_PAYLOAD = 12
    TCP_SRC = 13
    TCP_DST = 14
    TCP_SEQNO = 15
    TCP_ACKNO = 16
    TCP_SIZE = 17
    TCP_RESERV = 18
    TCP_URG = 19
    TCP_ACK = 20
    TCP_PSH = 21
    TCP_RST = 22
    TCP_SYN = 23
    TCP_FIN = 24
    TCP_WSIZE = 25
    TCP_CHECKSUM = 26
    TCP_URGP = 27
    TCP_PAYLOAD = 28
    UDP_SRC = 29
    UDP_DST = 30
    UDP_SIZE = 31
    UDP_CHECKSUM = 32
    UDP_PAYLOAD = 33
    ICMP_TYPE = 34
    ICMP_CODE = 35
    ICMP_CHECKSUM = 36
    ICMP_PAYLOAD = 37
    SIGNATURE = 38


class FieldKind(str, Enum):
    """Value shapes a field accepts."""
    IP_VERSION = "ip-version"
    U1 = "u1"
    U3 = "u3"
    U4 = "u4"
    U6 = "u6"
    U8 = "u8"
    U13 = "u13"
    U16 = "u16"
    U32 = "u32"
    IPV4 = "ipv4"
    STRING = "string"


class Layer(str, Enum):
    IP = "ip"
    TCP = "tcp"
    UDP = "udp"
    ICMP = "icmp"
    META = "meta"


TRANSPORT_LAYERS = frozenset({Layer.TCP, Layer.UDP, Layer.ICMP})

_BIT_WIDTHS: Dict[FieldKind, int] = {
    FieldKind.U1: 1,
    FieldKind.U3: 3,
    FieldKind.U4: 4,
    FieldKind.U6: 6,
    FieldKind.U8: 8,
    FieldKind.U13: 13,
    FieldKind.U16: 16,
    FieldKind.U32: 32,
}

_KIND_CHECKS: Dict[FieldKind, Callable[[str], bool]] = {
    FieldKind.IP_VERSION: is_ip_version,
    FieldKind.IPV4: is_ipv4_address,
    FieldKind.STRING: is_quoted_string,
}


@dataclass(frozen=True)
class FieldDescriptor:
    """Catalog row: label, stable index and value kind of one field."""
    label: str
    index: FieldIndex
    kind: FieldKind

    @property
    def layer(self) -> Layer:
        prefix = self.label.split(".", 1)[0]
        return Layer(prefix) if "." in self.label else Layer.META

    @property
    def bits(self) -> Optional[int]:
        """Bit width for numeric fields."""
        return _BIT_WIDTHS.get(self.kind)

    @property
    def is_transport(self) -> bool:
        return self.layer in TRANSPORT_LAYERS

    def accepts(self, token: str) -> bool:
        """Run this field's value check over a literal token."""
        bits = self.bits
        if bits is not None:
            return fits_bits(token, bits)
        return _KIND_CHECKS[self.kind](token)


SIGNATURE_FIELDS: Tuple[FieldDescriptor, ...] = (
    FieldDescriptor("ip.version", FieldIndex.IP_VERSION, FieldKind.IP_VERSION),
    FieldDescriptor("ip.ihl", FieldIndex.IP_IHL, FieldKind.U4),
    FieldDescriptor("ip.tos", FieldIndex.IP_TOS, FieldKind.U8),
    FieldDescriptor("ip.tlen", FieldIndex.IP_TLEN, FieldKind.U16),
    FieldDescriptor("ip.id", FieldIndex.IP_ID, FieldKind.U16),
    FieldDescriptor("ip.flags", FieldIndex.IP_FLAGS, FieldKind.U3),
    FieldDescriptor("ip.offset", FieldIndex.IP_OFFSET, FieldKind.U13),
    FieldDescriptor("ip.ttl", FieldIndex.IP_TTL, FieldKind.U8),
    FieldDescriptor("ip.protocol", FieldIndex.IP_PROTOCOL, FieldKind.U8),
    FieldDescriptor("ip.checksum", FieldIndex.IP_CHECKSUM, FieldKind.U16),
    FieldDescriptor("ip.src", FieldIndex.IP_SRC, FieldKind.IPV4),
    FieldDescriptor("ip.dst", FieldIndex.IP_DST, FieldKind.IPV4),
    FieldDescriptor("ip.payload", FieldIndex.IP_PAYLOAD, FieldKind.STRING),
    FieldDescriptor("tcp.src", FieldIndex.TCP_SRC, FieldKind.U16),
    FieldDescriptor("tcp.dst", FieldIndex.TCP_DST, FieldKind.U16),
    FieldDescriptor("tcp.seqno", FieldIndex.TCP_SEQNO, FieldKind.U32),
    FieldDescriptor("tcp.ackno", FieldIndex.TCP_ACKNO, FieldKind.U32),
    FieldDescriptor("tcp.size", FieldIndex.TCP_SIZE, FieldKind.U4),
    FieldDescriptor("tcp.reserv", FieldIndex.TCP_RESERV, FieldKind.U6),
    FieldDescriptor("tcp.urg", FieldIndex.TCP_URG, FieldKind.U1),
    FieldDescriptor("tcp.ack", FieldIndex.TCP_ACK, FieldKind.U1),
    FieldDescriptor("tcp.psh", FieldIndex.TCP_PSH, FieldKind.U1),
    FieldDescriptor("tcp.rst", FieldIndex.TCP_RST, FieldKind.U1),
    FieldDescriptor("tcp.syn", FieldIndex.TCP_SYN, FieldKind.U1),
    FieldDescriptor("tcp.fin", FieldIndex.TCP_FIN, FieldKind.U1),
    FieldDescriptor("tcp.wsize", FieldIndex.TCP_WSIZE, FieldKind.U16),
    FieldDescriptor("tcp.checksum", FieldIndex.TCP_CHECKSUM, FieldKind.U16),
    FieldDescriptor("tcp.urgp", FieldIndex.TCP_URGP, FieldKind.U16),
    FieldDescriptor("tcp.payload", FieldIndex.TCP_PAYLOAD, FieldKind.STRING),
    FieldDescriptor("udp.src", FieldIndex.UDP_SRC, FieldKind.U16),
    FieldDescriptor("udp.dst", FieldIndex.UDP_DST, FieldKind.U16),
    FieldDescriptor("udp.size", FieldIndex.UDP_SIZE, FieldKind.U16),
    FieldDescriptor("udp.checksum", FieldIndex.UDP_CHECKSUM, FieldKind.U16),
    FieldDescriptor("udp.payload", FieldIndex.UDP_PAYLOAD, FieldKind.STRING),
    FieldDescriptor("icmp.type", FieldIndex.ICMP_TYPE, FieldKind.U8),
    FieldDescriptor("icmp.code", FieldIndex.ICMP_CODE, FieldKind.U8),
    FieldDescriptor("icmp.checksum", FieldIndex.ICMP_CHECKSUM, FieldKind.U16),
    FieldDescriptor("icmp.payload", FieldIndex.ICMP_PAYLOAD, FieldKind.STRING),
    FieldDescriptor("signature", FieldIndex.SIGNATURE, FieldKind.STRING),
)

FIELDS_BY_LABEL: Mapping[str, FieldDescriptor] = MappingProxyType(
    {descriptor.label: descriptor for descriptor in SIGNATURE_FIELDS}
)

SIGNATURE_LABEL = "signature"


def get_field(label: str) -> Optional[FieldDescriptor]:
    """Look up a catalog row by label."""
    return FIELDS_BY_LABEL.get(label)


def get_field_by_index(index: int) -> FieldDescriptor:
    return SIGNATURE_FIELDS[index]


def get_field_index(label: str) -> int:
    """Catalog index of a label, or -1 when the label is unknown."""
    descriptor = FIELDS_BY_LABEL.get(label)
    return -1 if descriptor is None else int(descriptor.index)


def transport_fields() -> List[FieldDescriptor]:
    return [descriptor for descriptor in SIGNATURE_FIELDS if descriptor.is_transport]

"""
Required-Field Validator
========================

Cross-field checks over a fully built store. Entries are checked in store
order and the first failing entry fails the whole document.

For every entry:
1. ``ip.version`` must be present.
2. Only version 4 has a rule set; the IPv6 rule set is a stub that always fails.
3. IPv4 entries must declare ``ip.src``, ``ip.dst`` and ``ip.protocol``.
4. Without ``ip.protocol`` no TCP, UDP or ICMP field may be declared. When a
   protocol is declared its value is not checked against the transport fields.
"""

from typing import Callable, Dict, Tuple

from pigsty.config.logging import get_logger
from pigsty.models.schemas import SignatureEntry, SignatureStore

from .errors import SemanticErrorKind, SignatureSemanticError
from .fields import FieldIndex, get_field_by_index, transport_fields

logger = get_logger(__name__)

IPV4_REQUIRED_FIELDS: Tuple[FieldIndex, ...] = (
    FieldIndex.IP_SRC,
    FieldIndex.IP_DST,
    FieldIndex.IP_PROTOCOL,
)

TRANSPORT_FIELD_INDEXES = frozenset(descriptor.index for descriptor in transport_fields())


def _check_ipv4(entry: SignatureEntry) -> None:
    for index in IPV4_REQUIRED_FIELDS:
        if not entry.has_field(index):
            label = get_field_by_index(index).label
            raise SignatureSemanticError(
                SemanticErrorKind.MISSING_REQUIRED_FIELD,
                f"Field \"{label}\" is required",
                signature=entry.name,
                field=label,
            )


def _check_ipv6(entry: SignatureEntry) -> None:
    # IPv6 signatures are not supported yet
    raise SignatureSemanticError(
        SemanticErrorKind.UNSUPPORTED_IP_VERSION,
        "IPv6 signatures are not supported",
        signature=entry.name,
        field="ip.version",
    )


_VERSION_CHECKS: Dict[int, Callable[[SignatureEntry], None]] = {
    4: _check_ipv4,
    6: _check_ipv6,
}


def _check_transport_layer(entry: SignatureEntry) -> None:
    if entry.has_field(FieldIndex.IP_PROTOCOL):
        # any declared protocol number is accepted
        return

    for conf in entry.fields:
        if conf.index in TRANSPORT_FIELD_INDEXES:
            raise SignatureSemanticError(
                SemanticErrorKind.TRANSPORT_FIELDS_WITHOUT_PROTOCOL,
                "tcp/udp/icmp fields informed in a non tcp, udp or icmp packet",
                signature=entry.name,
                field=conf.label,
            )


def check_entry(entry: SignatureEntry) -> None:
    """
    Run the required-field rules over one entry.

    Raises:
        SignatureSemanticError: On the first rule the entry breaks
    """
    version = entry.get_field(FieldIndex.IP_VERSION)
    if version is None:
        raise SignatureSemanticError(
            SemanticErrorKind.MISSING_IP_VERSION,
            "ip.version missing",
            signature=entry.name,
            field="ip.version",
        )

    version_check = _VERSION_CHECKS.get(version.value)
    if version_check is None:
        raise SignatureSemanticError(
            SemanticErrorKind.UNSUPPORTED_IP_VERSION,
            f"Unsupported IP version {version.value}",
            signature=entry.name,
            field="ip.version",
        )
    version_check(entry)
    _check_transport_layer(entry)


def validate_required_fields(store: SignatureStore) -> None:
    """Check every entry of a built store, in order."""
    for entry in store:
        check_entry(entry)
    logger.debug("Required fields verified", entries=len(store))

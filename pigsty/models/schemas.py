"""
Pydantic Models and Schemas
===========================

Core data models for compiled signature documents: encoded field
configurations, named signature entries, the ordered entry store and the
result of a load operation.
"""

from typing import Optional, List, Dict, Any, Iterator, Tuple, Union
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


# Enums
class ValueKind(str, Enum):
    """Encoded value classes."""
    INTEGER = "integer"
    IPV4_ADDRESS = "ipv4-address"
    IPV4_SYMBOL = "ipv4-symbol"
    STRING = "string"


# Signature Models
class FieldConfiguration(BaseModel):
    """One field's encoded value within a signature entry."""
    index: int = Field(..., ge=0, description="Stable field index from the field catalog")
    label: str = Field(..., description="Field label, e.g. ip.ttl")
    kind: ValueKind = Field(..., description="Class of the encoded value")
    value: Union[int, str] = Field(..., description="Decoded value: number, address or text")
    data: bytes = Field(..., description="Encoded bytes handed to the packet engine")

    model_config = ConfigDict(frozen=True)

    @property
    def size(self) -> int:
        """Encoded value length in bytes."""
        return len(self.data)


class SignatureEntry(BaseModel):
    """A named, fully validated packet template."""
    name: str = Field(..., description="Signature name, unique within a document")
    fields: List[FieldConfiguration] = Field(
        default_factory=list, description="Field configurations in declaration order"
    )

    model_config = ConfigDict(frozen=True)

    def get_field(self, index: int) -> Optional[FieldConfiguration]:
        """Return the configuration for a field index, if declared."""
        for conf in self.fields:
            if conf.index == index:
                return conf
        return None

    def has_field(self, index: int) -> bool:
        return self.get_field(index) is not None

    def iter_wire_fields(self) -> Iterator[Tuple[int, bytes, int]]:
        """Yield (field index, encoded bytes, byte length) in declaration order."""
        for conf in self.fields:
            yield conf.index, conf.data, conf.size


class SignatureStore(BaseModel):
    """
    Ordered collection of signature entries.

    Entries keep their declaration order and are addressable by name. The
    store owns its entries; ``release`` drops all of them at once.
    """
    entries: List[SignatureEntry] = Field(default_factory=list, description="Entries in declaration order")

    _by_name: Dict[str, SignatureEntry] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        for entry in self.entries:
            if entry.name in self._by_name:
                raise ValueError(f"Signature '{entry.name}' is declared more than once")
            self._by_name[entry.name] = entry

    def add(self, entry: SignatureEntry) -> SignatureEntry:
        """Append a fully built entry."""
        if entry.name in self._by_name:
            raise ValueError(f"Signature '{entry.name}' is declared more than once")
        self.entries.append(entry)
        self._by_name[entry.name] = entry
        return entry

    def get(self, name: str) -> Optional[SignatureEntry]:
        return self._by_name.get(name)

    def names(self) -> List[str]:
        return [entry.name for entry in self.entries]

    def tail(self) -> Optional[SignatureEntry]:
        return self.entries[-1] if self.entries else None

    def release(self) -> None:
        """Drop every entry held by the store."""
        self.entries.clear()
        self._by_name.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[SignatureEntry]:  # type: ignore[override]
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


# Loading Results
class LoadResult(BaseModel):
    """Result of a signature document load."""
    success: bool = Field(..., description="Whether the document compiled")
    store: Optional[SignatureStore] = Field(None, description="Compiled signature entries")
    errors: List[str] = Field(default_factory=list, description="Diagnostics for the failure")
    processing_time: Optional[float] = Field(None, description="Load time in seconds")

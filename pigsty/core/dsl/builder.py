"""
Semantic Builder
================

Second pass over a syntax-checked signature document. Each ``[ ... ]`` block
becomes a named SignatureEntry whose field configurations follow declaration
order. The ``signature`` field names the entry and is not stored as a
configuration.
"""

from typing import Any, List, Optional, Tuple

from pigsty.config.logging import get_logger
from pigsty.models.schemas import FieldConfiguration, SignatureEntry, SignatureStore

from .encoder import encode_value, strip_quotes
from .errors import SemanticErrorKind, SignatureSemanticError
from .fields import FieldDescriptor, FieldIndex, get_field
from .tokenizer import Token, Tokenizer

logger = get_logger(__name__)

FieldToken = Tuple[FieldDescriptor, Token]


def read_entry_fields(tokenizer: Tokenizer) -> Optional[Tuple[Token, List[FieldToken]]]:
    """
    Collect the (field, value token) pairs of the next entry.

    Only valid on input that already passed the syntax compiler.

    Returns:
        The opening bracket token and the pairs in declaration order, or
        None when the document has no more entries
    """
    opening = tokenizer.next_token()
    if opening.is_end:
        return None

    pairs: List[FieldToken] = []
    while True:
        label = tokenizer.next_token()
        tokenizer.next_token()  # =
        value = tokenizer.next_token()
        pairs.append((get_field(label.text), value))
        if tokenizer.next_token().text == "]":
            return opening, pairs


class SemanticBuilder:
    """Builds named signature entries from a syntax-checked document."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(component="builder")  # structlog.BoundLoggerBase

    def build(self, buffer: str, store: SignatureStore) -> SignatureStore:
        """
        Append every entry of the document to ``store``.

        Args:
            buffer: Document text that passed the syntax compiler
            store: Store under construction

        Returns:
            The same store

        Raises:
            SignatureSemanticError: On a missing or redeclared signature name
        """
        tokenizer = Tokenizer(buffer)
        while True:
            block = read_entry_fields(tokenizer)
            if block is None:
                break
            opening, pairs = block
            store.add(self.build_entry(opening, pairs, store))
        return store

    def build_entry(self, opening: Token, pairs: List[FieldToken], store: SignatureStore) -> SignatureEntry:
        name = self._resolve_name(opening, pairs, store)

        fields: List[FieldConfiguration] = []
        for descriptor, token in pairs:
            if descriptor.index == FieldIndex.SIGNATURE:
                continue
            encoded = encode_value(token.text)
            fields.append(
                FieldConfiguration(
                    index=descriptor.index,
                    label=descriptor.label,
                    kind=encoded.kind,
                    value=encoded.value,
                    data=encoded.data,
                )
            )

        entry = SignatureEntry(name=name, fields=fields)
        self.logger.debug("Signature entry built", signature=name, fields=len(fields))
        return entry

    def _resolve_name(self, opening: Token, pairs: List[FieldToken], store: SignatureStore) -> str:
        for descriptor, token in pairs:
            if descriptor.index != FieldIndex.SIGNATURE:
                continue
            name = strip_quotes(token.text)
            if name in store:
                raise SignatureSemanticError(
                    SemanticErrorKind.SIGNATURE_REDECLARED,
                    f"Packet signature \"{name}\" redeclared",
                    signature=name,
                    line=token.line,
                    column=token.column,
                )
            return name

        raise SignatureSemanticError(
            SemanticErrorKind.MISSING_SIGNATURE_FIELD,
            "Signature field missing",
            field="signature",
            line=opening.line,
            column=opening.column,
        )

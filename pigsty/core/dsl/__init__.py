"""
Signature DSL Module
====================

Pigsty signature document loading, validation, and encoding.

Components:
- tokenizer: Token scanning with comment and quoted-string handling
- fields: Field catalog (labels, stable indices, value kinds)
- validators: Literal classifiers and bit-width checks
- encoder: Literal to byte encoding
- compiler: Syntax pass
- builder: Entry construction pass
- required_fields: Cross-field checks over built entries
- loader: File and text entry points
"""

from .errors import (
    SemanticErrorKind,
    SignatureError,
    SignatureIOError,
    SignatureSemanticError,
    SignatureSyntaxError,
    SyntaxErrorKind,
)
from .fields import FieldIndex, SIGNATURE_FIELDS, get_field_index
from .loader import (
    SignatureLoader,
    get_signature_schema_info,
    get_supported_fields,
    load_signatures,
    parse_signatures,
    validate_signature_syntax,
)
from .validators import is_ipv4_address

__all__ = [
    "FieldIndex",
    "SIGNATURE_FIELDS",
    "SemanticErrorKind",
    "SignatureError",
    "SignatureIOError",
    "SignatureLoader",
    "SignatureSemanticError",
    "SignatureSyntaxError",
    "SyntaxErrorKind",
    "get_field_index",
    "get_signature_schema_info",
    "get_supported_fields",
    "is_ipv4_address",
    "load_signatures",
    "parse_signatures",
    "validate_signature_syntax",
]

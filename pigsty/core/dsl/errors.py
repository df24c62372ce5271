"""
Signature Errors
================

Exceptions raised while loading a signature document. Every stage raises on
the first problem it finds; the loader turns the exception into a console
diagnostic and discards the whole document.
"""

from enum import Enum
from typing import Optional


class SyntaxErrorKind(str, Enum):
    """Grammar and value-shape failures found by the syntax pass."""
    MISSING_OPEN_BRACKET = "missing-open-bracket"
    UNKNOWN_FIELD = "unknown-field"
    DUPLICATE_FIELD = "duplicate-field"
    EXPECTED_EQUALS = "expected-equals"
    INVALID_VALUE = "invalid-value"
    EXPECTED_SEPARATOR_OR_CLOSE = "expected-separator-or-close"
    UNEXPECTED_END_OF_INPUT = "unexpected-end-of-input"


class SemanticErrorKind(str, Enum):
    """Failures found while building entries or checking required fields."""
    MISSING_SIGNATURE_FIELD = "missing-signature-field"
    SIGNATURE_REDECLARED = "signature-redeclared"
    MISSING_IP_VERSION = "missing-ip-version"
    UNSUPPORTED_IP_VERSION = "unsupported-ip-version"
    MISSING_REQUIRED_FIELD = "missing-required-field"
    TRANSPORT_FIELDS_WITHOUT_PROTOCOL = "transport-fields-without-protocol"


class SignatureError(Exception):
    """Base class for signature loading failures."""

    stage = "load"

    def __init__(
        self,
        message: str,
        *,
        signature: Optional[str] = None,
        field: Optional[str] = None,
        token: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.signature = signature
        self.field = field
        self.token = token
        self.line = line
        self.column = column

    def context(self) -> dict:
        """Diagnostic key/values that are known for this error."""
        values = {
            "signature": self.signature,
            "field": self.field,
            "token": self.token,
            "line": self.line,
            "column": self.column,
        }
        return {key: value for key, value in values.items() if value is not None}

    def __str__(self) -> str:
        if self.line is not None:
            return f"{self.message} (line {self.line}, column {self.column})"
        return self.message


class SignatureIOError(SignatureError):
    """Raised when the signature file cannot be read."""

    stage = "io"


class SignatureSyntaxError(SignatureError):
    """Raised by the syntax pass; no entry has been built yet."""

    stage = "syntax"

    def __init__(self, kind: SyntaxErrorKind, message: str, **context) -> None:
        super().__init__(message, **context)
        self.kind = kind


class SignatureSemanticError(SignatureError):
    """Raised by the builder or the required-field validator."""

    stage = "semantic"

    def __init__(self, kind: SemanticErrorKind, message: str, **context) -> None:
        super().__init__(message, **context)
        self.kind = kind

"""
Syntax Compiler
===============

First pass over a signature document. Checks the grammar of every entry and
the shape of every value against the field catalog without building anything,
so the build pass never sees malformed input. The first failing entry aborts
the whole document.
"""

from enum import Enum
from typing import Any, List

from pigsty.config.logging import get_logger

from .errors import SignatureSyntaxError, SyntaxErrorKind
from .fields import SIGNATURE_FIELDS, get_field
from .tokenizer import Token, Tokenizer

logger = get_logger(__name__)


class _State(Enum):
    FIELD_NAME = 1
    EQUALS = 2
    VALUE = 3
    SEPARATOR = 4


def _syntax_error(kind: SyntaxErrorKind, message: str, token: Token, /, **context: Any) -> SignatureSyntaxError:
    return SignatureSyntaxError(kind, message, line=token.line, column=token.column, **context)


class SyntaxCompiler:
    """Grammar and value-shape checker for signature documents."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(component="syntax")  # structlog.BoundLoggerBase

    def compile(self, buffer: str) -> int:
        """
        Check a whole signature document.

        Args:
            buffer: Document text

        Returns:
            Number of entries checked

        Raises:
            SignatureSyntaxError: On the first malformed entry
        """
        tokenizer = Tokenizer(buffer)
        entries = 0
        while self.compile_next_entry(tokenizer):
            entries += 1
        self.logger.debug("Signature syntax verified", entries=entries)
        return entries

    def compile_next_entry(self, tokenizer: Tokenizer) -> bool:
        """
        Check the next ``[ ... ]`` block.

        Returns:
            False when the document has no more entries, True after a valid block
        """
        token = tokenizer.next_token()
        if token.is_end:
            return False
        if token.text != "[":
            raise _syntax_error(
                SyntaxErrorKind.MISSING_OPEN_BRACKET,
                "Signature not well opened, expecting \"[\"",
                token,
                token=token.text,
            )

        seen: List[bool] = [False] * len(SIGNATURE_FIELDS)
        state = _State.FIELD_NAME
        descriptor = None

        while True:
            token = tokenizer.next_token()
            if token.is_end:
                raise _syntax_error(
                    SyntaxErrorKind.UNEXPECTED_END_OF_INPUT,
                    "Signature document ends inside an entry",
                    token,
                )

            if state is _State.FIELD_NAME:
                descriptor = get_field(token.text)
                if descriptor is None:
                    raise _syntax_error(
                        SyntaxErrorKind.UNKNOWN_FIELD,
                        f"Unknown field \"{token.text}\"",
                        token,
                        token=token.text,
                    )
                if seen[descriptor.index]:
                    raise _syntax_error(
                        SyntaxErrorKind.DUPLICATE_FIELD,
                        f"Field \"{descriptor.label}\" redeclared",
                        token,
                        field=descriptor.label,
                    )
                seen[descriptor.index] = True
                state = _State.EQUALS

            elif state is _State.EQUALS:
                if token.text != "=":
                    raise _syntax_error(
                        SyntaxErrorKind.EXPECTED_EQUALS,
                        "Expecting \"=\" token",
                        token,
                        field=descriptor.label,
                        token=token.text,
                    )
                state = _State.VALUE

            elif state is _State.VALUE:
                if not descriptor.accepts(token.text):
                    raise _syntax_error(
                        SyntaxErrorKind.INVALID_VALUE,
                        f"Field \"{descriptor.label}\" has invalid data (\"{token.text}\")",
                        token,
                        field=descriptor.label,
                        token=token.text,
                    )
                state = _State.SEPARATOR

            else:
                if token.text == "]":
                    return True
                if token.text != ",":
                    raise _syntax_error(
                        SyntaxErrorKind.EXPECTED_SEPARATOR_OR_CLOSE,
                        "Missing \",\" or \"]\"",
                        token,
                        token=token.text,
                    )
                state = _State.FIELD_NAME

"""
Unit Tests for Syntax Compiler
==============================

Tests for the grammar and value-shape pass.
"""

import pytest
from unittest.mock import patch

from pigsty.core.dsl.compiler import SyntaxCompiler
from pigsty.core.dsl.errors import SignatureSyntaxError, SyntaxErrorKind

from tests.data.sample_signatures import (
    COMMENT_ONLY_DOCUMENT,
    EMPTY_DOCUMENT,
    MINIMAL_DOCUMENT,
    MULTI_PROTOCOL_DOCUMENT,
    SYNTAX_ERROR_DOCUMENTS,
)
from tests.utils.data_generators import SignatureDataGenerator


@pytest.fixture
def compiler():
    """Create syntax compiler instance."""
    return SyntaxCompiler()


def compile_error(compiler, document) -> SignatureSyntaxError:
    with pytest.raises(SignatureSyntaxError) as exc_info:
        compiler.compile(document)
    return exc_info.value


class TestValidDocuments:
    """Test documents the syntax pass accepts."""

    def test_minimal_document(self, compiler):
        assert compiler.compile(MINIMAL_DOCUMENT) == 1

    def test_multi_protocol_document(self, compiler):
        """Test a commented document with several entries."""
        assert compiler.compile(MULTI_PROTOCOL_DOCUMENT) == 3

    @pytest.mark.parametrize("document", [EMPTY_DOCUMENT, COMMENT_ONLY_DOCUMENT, "  \r\n\t"])
    def test_empty_document(self, compiler, document):
        """Test that a document without entries is valid."""
        assert compiler.compile(document) == 0

    def test_signature_field_is_optional_for_syntax(self, compiler):
        """Test that a missing signature name is left to the build pass."""
        assert compiler.compile("[ip.version=4]") == 1

    def test_same_field_in_different_entries(self, compiler):
        """Test that duplicate detection is per entry."""
        document = "[ip.ttl=1] [ip.ttl=2]"
        assert compiler.compile(document) == 2


class TestSyntaxErrors:
    """Test every syntax failure kind."""

    @pytest.mark.parametrize("kind", list(SyntaxErrorKind))
    def test_error_kinds(self, compiler, kind):
        """Test that each sample document fails with its own kind."""
        error = compile_error(compiler, SYNTAX_ERROR_DOCUMENTS[kind.value])
        assert error.kind is kind
        assert error.stage == "syntax"

    def test_unknown_field_reports_token(self, compiler):
        error = compile_error(compiler, '[signature="t", ip.colour=4]')
        assert error.token == "ip.colour"
        assert "Unknown field" in str(error)

    def test_duplicate_field_reports_label(self, compiler):
        """Test a field repeated inside one entry."""
        error = compile_error(compiler, '[signature="t", ip.ttl=1, ip.ttl=2]')
        assert error.kind is SyntaxErrorKind.DUPLICATE_FIELD
        assert error.field == "ip.ttl"

    def test_invalid_value_reports_field_and_token(self, compiler):
        error = compile_error(compiler, "[ip.flags=8]")
        assert error.kind is SyntaxErrorKind.INVALID_VALUE
        assert error.field == "ip.flags"
        assert error.token == "8"

    def test_ip_version_six_rejected(self, compiler):
        """Test that the version check refuses anything but 4."""
        error = compile_error(compiler, "[ip.version=6]")
        assert error.kind is SyntaxErrorKind.INVALID_VALUE
        assert error.field == "ip.version"

    @pytest.mark.parametrize(
        "label,value",
        [
            ("ip.src", "10.0.0"),
            ("ip.dst", '"10.0.0.1"'),
            ("ip.payload", "unquoted"),
            ("tcp.seqno", "4294967296"),
            ("tcp.urg", "2"),
            ("signature", "bare-name"),
        ],
    )
    def test_invalid_values(self, compiler, label, value):
        error = compile_error(compiler, f"[{label}={value}]")
        assert error.kind is SyntaxErrorKind.INVALID_VALUE

    @pytest.mark.parametrize(
        "label,value",
        [
            ("ip.ttl", "9" * 5000),
            ("ip.src", "1.1.1." + "1" * 5000),
        ],
    )
    def test_oversized_decimal_literals(self, compiler, label, value):
        """Test that very long decimal literals are rejected as invalid values."""
        error = compile_error(compiler, f"[{label}={value}]")
        assert error.kind is SyntaxErrorKind.INVALID_VALUE
        assert error.field == label

    def test_empty_entry(self, compiler):
        """Test that [] is rejected since an entry needs a field."""
        error = compile_error(compiler, "[]")
        assert error.kind is SyntaxErrorKind.UNKNOWN_FIELD

    def test_missing_value(self, compiler):
        error = compile_error(compiler, "[ip.ttl=,ip.tos=1]")
        assert error.kind is SyntaxErrorKind.INVALID_VALUE

    def test_comment_glued_to_separator_is_not_skipped(self, compiler):
        """Test that # right after a comma is read as a field name."""
        error = compile_error(compiler, "[ip.ttl=1,#note\nip.tos=1]")
        assert error.kind is SyntaxErrorKind.UNKNOWN_FIELD
        assert error.token == "#note"

    def test_error_location(self, compiler):
        """Test that errors point at the offending token."""
        error = compile_error(compiler, "[ip.ttl=1,\n   ip.bogus=2]")
        assert (error.line, error.column) == (2, 4)
        assert "line 2" in str(error)

    def test_first_failure_stops_compilation(self, compiler):
        """Test that entries after a failing one are never checked."""
        document = (
            SignatureDataGenerator.generate_minimal_ipv4("a")
            + "[ip.colour=1]\n"
            + "[ip.ttl=999]\n"
        )
        with patch.object(compiler, "compile_next_entry", wraps=compiler.compile_next_entry) as spy:
            error = compile_error(compiler, document)
        assert error.kind is SyntaxErrorKind.UNKNOWN_FIELD
        assert spy.call_count == 2

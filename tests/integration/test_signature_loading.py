"""
Integration Tests for Signature File Loading
============================================

Loads signature files from disk through every stage and checks the
all-or-nothing contract end to end.
"""

import pytest
from structlog.testing import capture_logs

from pigsty.core.dsl import load_signatures
from pigsty.core.dsl.fields import FieldIndex

from tests.data.sample_signatures import MULTI_PROTOCOL_DOCUMENT
from tests.utils.assertions import assert_valid_signature_store
from tests.utils.data_generators import SignatureDataGenerator


class TestFileLoading:
    """Test loading documents from the filesystem."""

    def test_load_multi_protocol_file(self, signature_file, test_settings):
        path = signature_file(MULTI_PROTOCOL_DOCUMENT)
        store = load_signatures(path, test_settings)

        assert store is not None
        assert_valid_signature_store(store)
        assert store.names() == ["tcp-syn-scan", "udp dns query", "icmp-echo"]
        assert store.get("icmp-echo").get_field(FieldIndex.ICMP_TYPE).value == 8

    def test_load_accepts_string_path(self, signature_file, test_settings):
        path = signature_file(SignatureDataGenerator.generate_minimal_ipv4("s"))
        store = load_signatures(str(path), test_settings)
        assert store.names() == ["s"]

    def test_empty_file_loads_empty_store(self, signature_file, test_settings):
        store = load_signatures(signature_file(""), test_settings)
        assert store is not None
        assert len(store) == 0

    def test_missing_file(self, tmp_path, test_settings):
        with capture_logs() as logs:
            store = load_signatures(tmp_path / "absent.pigsty", test_settings)

        assert store is None
        errors = [entry for entry in logs if entry["log_level"] == "error"]
        assert len(errors) == 1
        assert errors[0]["stage"] == "io"
        assert "Unable to read signature file" in errors[0]["event"]

    def test_oversized_file(self, signature_file, test_settings):
        settings = test_settings.model_copy(update={"max_signature_file_size": 16})
        path = signature_file(SignatureDataGenerator.generate_minimal_ipv4())
        assert load_signatures(path, settings) is None

    def test_undecodable_file(self, tmp_path, test_settings):
        path = tmp_path / "binary.pigsty"
        path.write_bytes(b"[signature=\"\xff\xfe\"]")
        assert load_signatures(path, test_settings) is None

    def test_alternate_encoding(self, signature_file, test_settings):
        settings = test_settings.model_copy(update={"signature_encoding": "latin-1"})
        document = SignatureDataGenerator.generate_entry(
            "café", SignatureDataGenerator.ipv4_header()
        )
        store = load_signatures(signature_file(document, encoding="latin-1"), settings)
        assert store.names() == ["café"]


class TestAllOrNothing:
    """Test that any failure discards the whole document."""

    @pytest.mark.parametrize(
        "bad_entry",
        [
            "[ip.colour=1]\n",
            '[signature="x", ip.ttl=300]\n',
            SignatureDataGenerator.generate_entry(None, SignatureDataGenerator.ipv4_header()),
            SignatureDataGenerator.generate_entry("tcp-only", (("ip.version", "4"), ("tcp.syn", "1"))),
            SignatureDataGenerator.generate_tcp_syn(),
        ],
    )
    def test_bad_last_entry_discards_good_ones(self, signature_file, test_settings, bad_entry):
        """Test that one bad entry after good ones yields nothing."""
        document = SignatureDataGenerator.generate_document(
            [SignatureDataGenerator.generate_tcp_syn(), SignatureDataGenerator.generate_icmp_echo(), bad_entry]
        )
        assert load_signatures(signature_file(document), test_settings) is None

    def test_oversized_number_returns_none(self, signature_file, test_settings):
        """Test that a huge decimal literal fails the load instead of escaping."""
        document = SignatureDataGenerator.generate_entry_with_field("ip.ttl", "9" * 5000)
        assert load_signatures(signature_file(document), test_settings) is None

    def test_diagnostic_points_at_file_location(self, signature_file, test_settings):
        document = SignatureDataGenerator.generate_minimal_ipv4() + "[ ip.ttl = 1, ip.ttl = 2 ]\n"
        with capture_logs() as logs:
            load_signatures(signature_file(document), test_settings)

        errors = [entry for entry in logs if entry["log_level"] == "error"]
        assert errors[0]["kind"] == "duplicate-field"
        assert errors[0]["line"] == 2

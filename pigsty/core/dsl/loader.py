"""
Signature Loader
================

Entry point for loading signature documents. Runs the syntax compiler, the
semantic builder and the required-field validator over a document and hands
back the compiled store. Loading is all or nothing: on any failure a
diagnostic is logged and nothing is returned.
"""

from typing import Dict, List, Any, Optional, Union
from pathlib import Path
import time

from pigsty.config.logging import get_logger
from pigsty.config.settings import Settings, get_settings
from pigsty.models.schemas import LoadResult, SignatureStore, ValueKind

from .builder import SemanticBuilder
from .compiler import SyntaxCompiler
from .errors import SignatureError, SignatureIOError, SignatureSyntaxError
from .fields import SIGNATURE_FIELDS, get_field_by_index
from .required_fields import IPV4_REQUIRED_FIELDS, validate_required_fields
from .store import staged_store

logger = get_logger(__name__)


class SignatureLoader:
    """Loads signature documents through every compiler stage."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.logger: Any = logger.bind(component="loader")  # structlog.BoundLoggerBase
        self.compiler = SyntaxCompiler()
        self.builder = SemanticBuilder()

    def read_file(self, filepath: Union[str, Path]) -> str:
        """
        Read and decode a signature file.

        Raises:
            SignatureIOError: If the file cannot be opened, read or decoded
        """
        path = Path(filepath)
        limit = self.settings.max_signature_file_size
        try:
            if path.stat().st_size > limit:
                raise SignatureIOError(f"Signature file \"{path}\" is larger than {limit} bytes")
            raw = path.read_bytes()
        except OSError as e:
            raise SignatureIOError(f"Unable to read signature file \"{path}\": {e.strerror or e}") from e

        try:
            return raw.decode(self.settings.signature_encoding)
        except UnicodeDecodeError as e:
            raise SignatureIOError(
                f"Unable to decode signature file \"{path}\" as {self.settings.signature_encoding}"
            ) from e

    def compile(self, content: str) -> SignatureStore:
        """
        Run the full pipeline over a document.

        Args:
            content: Document text

        Returns:
            Store holding every entry of the document

        Raises:
            SignatureSyntaxError: If the document is malformed
            SignatureSemanticError: If an entry is incomplete or redeclared
        """
        self.compiler.compile(content)
        with staged_store() as store:
            self.builder.build(content, store)
            validate_required_fields(store)
        self.logger.info("Signatures loaded", entries=len(store))
        return store

    def parse(self, content: str) -> LoadResult:
        """
        Compile an in-memory document.

        Args:
            content: Document text

        Returns:
            LoadResult holding the store or the diagnostic
        """
        start_time = time.time()
        try:
            store = self.compile(content)
        except SignatureError as e:
            self._report(e)
            return LoadResult(
                success=False,
                store=None,
                errors=[str(e)],
                processing_time=time.time() - start_time,
            )

        return LoadResult(
            success=True,
            store=store,
            errors=[],
            processing_time=time.time() - start_time,
        )

    def validate_syntax(self, content: str) -> bool:
        """Run the syntax pass only."""
        try:
            self.compiler.compile(content)
            return True
        except SignatureSyntaxError:
            return False

    def load(self, filepath: Union[str, Path]) -> Optional[SignatureStore]:
        """
        Load a signature file.

        Returns:
            The compiled store, or None after logging a diagnostic
        """
        self.logger.info("Loading signature file", path=str(filepath))
        try:
            content = self.read_file(filepath)
        except SignatureIOError as e:
            self._report(e)
            return None
        return self.parse(content).store

    def _report(self, error: SignatureError) -> None:
        kind = getattr(error, "kind", None)
        self.logger.error(
            error.message,
            stage=error.stage,
            kind=kind.value if kind is not None else None,
            **error.context(),
        )
        if error.stage != "io":
            self.logger.error("Invalid signature detected, fix it and try again")


def parse_signatures(content: str, settings: Optional[Settings] = None) -> LoadResult:
    """
    Compile signature document text.

    Args:
        content: Document text
        settings: Optional settings override

    Returns:
        LoadResult containing the store or errors
    """
    return SignatureLoader(settings).parse(content)


def validate_signature_syntax(content: str) -> bool:
    """
    Check document grammar and value shapes without building entries.

    Args:
        content: Document text

    Returns:
        True if the syntax pass accepts the document
    """
    return SignatureLoader().validate_syntax(content)


def load_signatures(filepath: Union[str, Path], settings: Optional[Settings] = None) -> Optional[SignatureStore]:
    """
    Load a signature file.

    Args:
        filepath: Path of the signature document
        settings: Optional settings override

    Returns:
        The compiled store, or None on any I/O, syntax or semantic failure
    """
    return SignatureLoader(settings).load(filepath)


def get_supported_fields() -> List[str]:
    """
    Get the list of field labels accepted in signature documents.

    Returns:
        Labels in catalog order
    """
    return [descriptor.label for descriptor in SIGNATURE_FIELDS]


def get_signature_schema_info() -> Dict[str, Any]:
    """
    Get signature field catalog information for documentation/tooling.

    Returns:
        Dictionary containing schema information
    """
    return {
        "version": "1.0",
        "fields": [
            {
                "label": descriptor.label,
                "index": int(descriptor.index),
                "layer": descriptor.layer.value,
                "kind": descriptor.kind.value,
                "bits": descriptor.bits,
            }
            for descriptor in SIGNATURE_FIELDS
        ],
        "value_kinds": [kind.value for kind in ValueKind],
        "required_ipv4_fields": ["ip.version"]
        + [get_field_by_index(index).label for index in IPV4_REQUIRED_FIELDS],
        "example_minimal": (
            '[ signature = "syn-probe", ip.version = 4, ip.src = 10.0.0.1,\n'
            "  ip.dst = 10.0.0.2, ip.protocol = 6, tcp.dst = 80, tcp.syn = 1 ]\n"
        ),
    }

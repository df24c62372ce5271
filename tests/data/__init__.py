"""
Test Data Package
================

Sample signature documents for the pigsty signature compiler tests.
"""

from .sample_signatures import (
    MINIMAL_DOCUMENT,
    MULTI_PROTOCOL_DOCUMENT,
    EMPTY_DOCUMENT,
    COMMENT_ONLY_DOCUMENT,
    SYNTAX_ERROR_DOCUMENTS,
)

__all__ = [
    'MINIMAL_DOCUMENT',
    'MULTI_PROTOCOL_DOCUMENT',
    'EMPTY_DOCUMENT',
    'COMMENT_ONLY_DOCUMENT',
    'SYNTAX_ERROR_DOCUMENTS',
]

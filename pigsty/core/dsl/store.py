"""
Entry Store Plumbing
====================

A store under construction belongs to the loader until every stage has
passed. ``staged_store`` hands out such a store and releases it on any
failure, so no partially built document survives an error.
"""

from contextlib import contextmanager
from typing import Iterator

from pigsty.models.schemas import SignatureStore


@contextmanager
def staged_store() -> Iterator[SignatureStore]:
    store = SignatureStore()
    try:
        yield store
    except BaseException:
        store.release()
        raise


__all__ = ["SignatureStore", "staged_store"]

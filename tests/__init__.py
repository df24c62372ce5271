"""
Test Suite
==========

Test suite for the pigsty signature compiler, matching the pigsty/ package
structure.

Test Categories:
- unit: Unit tests for individual compiler stages and models
- integration: Signature files loaded from disk through every stage
"""

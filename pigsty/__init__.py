"""
Pigsty Signature Compiler
=========================

Loader and validator for pigsty packet signature documents: named, declarative
templates that assign values to IPv4, TCP, UDP and ICMP header and payload
fields for a packet crafting/matching engine.

This package provides:
- Tokenizing of the bracketed signature DSL
- Syntax compilation against a fixed field catalog
- Construction of named signature entries with encoded field values
- Cross-field required-field checks
"""

__version__ = "1.0.0"
__author__ = "Pigsty Signature Team"

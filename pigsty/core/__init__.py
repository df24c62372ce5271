"""
Core Business Logic
==================

Core business logic modules for signature document processing.

Modules:
- dsl: Tokenizing, compiling, building and validating signature documents
"""

"""
Data Models
===========

Pydantic data models for compiled signature entries and load results.

Models:
- schemas: Value kinds, field configurations, signature entries, load results
"""

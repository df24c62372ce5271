"""
Configuration Management
=======================

Environment-based configuration using Pydantic Settings.

Components:
- settings: Application settings and signature file options
- logging: Structured logging configuration
"""

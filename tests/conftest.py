"""
Test Configuration
==================

Pytest configuration with fixtures for all test types.
Provides testing settings, signature file writers and loaders.
"""

import pytest
from pathlib import Path
from typing import Callable
from unittest.mock import patch

from pydantic_settings import SettingsConfigDict

# Import application modules
from pigsty.config.settings import Settings
from pigsty.core.dsl.loader import SignatureLoader


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    environment: str = "testing"
    debug: bool = True
    log_level: str = "DEBUG"

    model_config = SettingsConfigDict(env_file=".env.test", env_prefix="PIGSTY_")


@pytest.fixture(scope="session")
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest.fixture(scope="session", autouse=True)
def override_settings(test_settings: TestSettings):
    """Override application settings for testing."""
    with patch("pigsty.core.dsl.loader.get_settings", return_value=test_settings):
        yield test_settings


@pytest.fixture
def signature_file(tmp_path: Path) -> Callable[..., Path]:
    """Write signature document text to a file and return its path."""

    def _write(content: str, name: str = "signatures.pigsty", encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_bytes(content.encode(encoding))
        return path

    return _write


@pytest.fixture
def loader(test_settings: TestSettings) -> SignatureLoader:
    """Signature loader bound to the testing settings."""
    return SignatureLoader(test_settings)


# Pytest configuration
def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on file paths."""
    for item in items:
        # Add markers based on file path
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

"""Root pytest configuration for test discovery and auto-skip behavior.

Test Structure:
    tests/
    ├── safeplay_config/        # Settings loading and validation
    ├── safeplay_identity/      # Identity domain tests (users, credentials)
    │   ├── unit/               # Fast, isolated tests (mocked collaborators)
    │   └── integration/        # Tests against in-memory SQLite via aiosqlite
    └── shared/                 # Shared fixtures and utilities

Environment Variables:
    SKIP_INTEGRATION=1   Skip @pytest.mark.integration tests

Pytest Options:
    --skip-integration   Skip integration tests
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from safeplay_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Optional overrides for local test runs
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.test").exists():
    load_dotenv(CONFIG_DIR / ".env.test")

# Cheapest bcrypt work factor keeps hashing tests fast
os.environ.setdefault("BCRYPT_ROUNDS", "4")


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--skip-integration",
        action="store_true",
        default=False,
        help="Skip tests marked with @pytest.mark.integration",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that verify database/persistence behavior",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests when asked to."""
    skip_integration = config.getoption("--skip-integration") or os.environ.get(
        "SKIP_INTEGRATION",
        "",
    ).lower() in ("1", "true", "yes")

    if not skip_integration:
        return

    skip_marker = pytest.mark.skip(
        reason="Integration test - skipped via --skip-integration or SKIP_INTEGRATION=1",
    )
    for item in items:
        item_markers = {mark.name for mark in item.iter_markers()}
        if "integration" in item_markers:
            item.add_marker(skip_marker)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Make every test read settings from the current environment."""
    clear_settings_cache()
    yield
    clear_settings_cache()

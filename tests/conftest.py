"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or membership service
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("MEMBERSHIP_API_URL", "http://membership.test/api/v1")

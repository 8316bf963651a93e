"""Root conftest — shared test configuration."""

import os

# Settings are cached on first use; pin test values before any import of the app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

"""Root conftest — shared test configuration.

Settings are read (and cached) when biblioteca.main is imported, so the
environment must be fixed here, before any test module imports the app.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")

"""Global test fixtures."""

import os

import logfire

# Set before any test module builds a Config
# This must happen at module load time, not in a fixture
os.environ.setdefault("ARCHIVE_SESSION__SECRET_KEY", "test-secret-for-unit-tests-min-32")
os.environ.setdefault("ARCHIVE_SERVER__ENVIRONMENT", "test")

# instrument_fastapi in create_app needs a configured logfire; keep it local
logfire.configure(send_to_logfire=False, console=False)

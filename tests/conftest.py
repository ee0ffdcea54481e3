"""Test configuration and fixtures."""

import os

import logfire

# Settings are read from the environment; pin the ones tests depend on
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret-that-is-long-enough-for-hs256-keys")

logfire.configure(send_to_logfire=False, console=False)

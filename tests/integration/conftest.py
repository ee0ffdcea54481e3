"""Integration tests need a migrated PostgreSQL (``scripts/run_migrations.py``)."""

import os

import pytest


def pytest_collection_modifyitems(config, items):
    if os.environ.get("LEDGER_INTEGRATION") == "1":
        return

    skip = pytest.mark.skip(reason="set LEDGER_INTEGRATION=1 to run against PostgreSQL")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)

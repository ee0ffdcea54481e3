#!/usr/bin/env python3
"""Purge expired, never-redeemed invites.

Meant to run periodically from cron or a systemd timer. Safe to run more
than once; a second run finds nothing to delete.
"""

import asyncio
import logging
import sys

import logfire

from ledger.application.usecase.invite import CleanupInvitesUseCase
from ledger.config import Settings
from ledger.util.di.container import create_container
from ledger.util.logging import setup_logging
from ledger.util.observability import configure_logfire

logger = logging.getLogger("ledger.scripts.cleanup_invites")


async def run_cleanup() -> int:
    """Run the cleanup use case in its own request scope.

    Returns:
        Number of invites removed
    """
    container = create_container(with_fastapi=False)
    try:
        async with container() as request_container:
            use_case = await request_container.get(CleanupInvitesUseCase)
            response = await use_case.execute()
        return response.removed
    finally:
        await container.close()


def main() -> int:
    """Purge expired invites and report the count."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        removed = asyncio.run(run_cleanup())
    except Exception as e:
        logfire.error(
            "Invite cleanup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    logger.info("Removed %d expired invites", removed)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka

from ledger.util.di import PROVIDERS, get_provider


def create_container(with_fastapi: bool = True) -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically.

    Args:
        with_fastapi: Include FastapiProvider; scripts running outside a
            request cycle pass False

    Returns:
        Configured DI container with production providers
    """
    # Get provider instances - all are instantiated without arguments
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    if with_fastapi:
        provider_instances.append(FastapiProvider())
    return make_async_container(*provider_instances)


def setup_di(app, container: AsyncContainer) -> None:
    """Setup dependency injection for FastAPI.

    Args:
        app: FastAPI application
        container: DI container
    """
    setup_dishka(container, app)

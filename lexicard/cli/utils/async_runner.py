"""Async runner utilities for CLI commands."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from lexicard.config import Settings, settings
from lexicard.dependencies import Services, build_services

T = TypeVar("T")


async def _with_services(action: Callable[[Services], Awaitable[T]], config: Settings) -> T:
    services = build_services(config)
    try:
        return await action(services)
    finally:
        await services.close()


def run_with_services(
    action: Callable[[Services], Awaitable[T]], config: Settings | None = None
) -> T:
    """Build the service graph, run ``action`` against it and shut the browser down."""
    return asyncio.run(_with_services(action, config or settings))

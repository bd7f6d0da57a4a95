"""Concurrency helpers shared by the resolvers."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any


async def gather_all(*aws: Awaitable[Any]) -> list[Any]:
    """Await every awaitable, then raise the first failure in argument order.

    Siblings of a failing awaitable run to completion instead of being left
    behind, so nothing outlives the caller's clients.
    """
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results

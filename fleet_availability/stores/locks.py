"""Per-resource write serialization.

Every writer that persists a blocking record for a resource holds that
resource's lock while it re-checks conflicts and commits, so a
check-then-act race cannot let two overlapping writes through in-process.
"""

import asyncio
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator, Union

from fleet_availability.logging_context import get_request_logger
from fleet_availability.schemas.resource_schema import ResourceType

logger = get_request_logger(__name__)

ResourceKey = tuple[str, str]


class ResourceLockManager:
    """Hands out one asyncio.Lock per (resource_type, resource_id)."""

    def __init__(self) -> None:
        self._locks: dict[ResourceKey, asyncio.Lock] = {}

    def lock_for(self, resource_type: Union[ResourceType, str], resource_id: str) -> asyncio.Lock:
        key = (ResourceType(resource_type).value, resource_id)
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        return self._locks[key]

    @asynccontextmanager
    async def hold(self, *resources: tuple[Union[ResourceType, str], str]) -> AsyncIterator[None]:
        """Acquire the locks for several resources in a stable global order."""
        keys = sorted({(ResourceType(t).value, rid) for t, rid in resources})
        async with AsyncExitStack() as stack:
            for resource_type, resource_id in keys:
                await stack.enter_async_context(self.lock_for(resource_type, resource_id))
            logger.debug("Holding write locks: %s", keys)
            yield

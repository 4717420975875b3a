"""
Once-only schema initialization.

Repositories own their DDL; the SchemaManager runs each repository's
ensure_schema() exactly once per process. Concurrent callers wait on the
same lock and return as soon as the first run has finished.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

SchemaStep = Callable[[], Awaitable[None]]


@dataclass
class SchemaTask:
    """A named schema step. Optional steps degrade their feature on failure."""

    name: str
    run: SchemaStep
    optional: bool = False


class SchemaManager:
    """Runs schema steps once, in order."""

    def __init__(self, tasks: list[SchemaTask]) -> None:
        self._tasks = tasks
        self._lock = asyncio.Lock()
        self._ready = False
        self._degraded: list[str] = []

    @property
    def tasks(self) -> list[SchemaTask]:
        return list(self._tasks)

    @property
    def ready(self) -> bool:
        """Whether initialization has completed."""
        return self._ready

    @property
    def degraded(self) -> list[str]:
        """Names of optional steps that failed."""
        return list(self._degraded)

    async def initialize(self) -> None:
        """
        Run every schema step if that has not happened yet.

        Raises:
            Exception: Whatever a required step raised. The manager stays
                not-ready so a later call retries.
        """
        if self._ready:
            return

        async with self._lock:
            if self._ready:
                return

            self._degraded = []
            for task in self._tasks:
                try:
                    await task.run()
                    logger.info(f"Schema ready: {task.name}")
                except Exception as e:
                    if not task.optional:
                        raise
                    logger.warning(f"Schema step '{task.name}' failed, feature disabled: {e}")
                    self._degraded.append(task.name)

            self._ready = True

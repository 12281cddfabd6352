"""Workspace-wide mutual exclusion for fetch operations."""

import threading
from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import Any, TypeVar

from repocache.core.logger.logger import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class FetchSynchronizer:
    """Serializes clone/open/checkout work against a shared workspace.

    One exclusive lock covers the whole workspace, not individual paths, so
    fetches of different URLs still run one at a time.
    """

    def __init__(self, lock: "threading.Lock | None" = None) -> None:
        """Initialize the synchronizer.

        Args:
            lock: Lock to use. A new one is created if not provided.
        """
        self._lock = lock or threading.Lock()

    @property
    def locked(self) -> bool:
        """Return True while some caller holds the lock."""
        return self._lock.locked()

    @contextmanager
    def hold(self) -> Generator[None, None, None]:
        """Hold the workspace lock for the duration of the block."""
        self._lock.acquire()
        logger.debug("Acquired workspace lock")
        try:
            yield
        finally:
            self._lock.release()
            logger.debug("Released workspace lock")

    def run(self, operation: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Execute an operation while holding the workspace lock.

        Args:
            operation: Callable to execute.
            *args: Positional arguments for the operation.
            **kwargs: Keyword arguments for the operation.

        Returns:
            Result of the operation.
        """
        with self.hold():
            return operation(*args, **kwargs)

"""Thread pool for running tree transformations off the event loop."""

import asyncio
import functools
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


class ConcurrencyManager:
    """
    Runs CPU-bound work (HTML parsing, conversion) in a thread pool.

    Each call runs to completion inside one worker thread, so a document
    tree is never shared between threads and a slow conversion never
    blocks other requests on the event loop.

    Example:
        async with ConcurrencyManager(max_workers=4) as manager:
            result = await manager.run_cpu_bound(pipeline.convert, ctx)
    """

    def __init__(self, max_workers: int = 4) -> None:
        """
        Initialize the concurrency manager.

        Args:
            max_workers: Number of thread pool workers
        """
        self.max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._closed = False

    @property
    def executor(self) -> ThreadPoolExecutor:
        """Get or create the thread pool executor."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.max_workers,
                thread_name_prefix="markscrape-convert-",
            )
        return self._executor

    async def run_cpu_bound(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """
        Run a CPU-bound function in the thread pool.

        Returns:
            The result of the function call

        Raises:
            RuntimeError: The manager has been shut down
        """
        if self._closed:
            raise RuntimeError("ConcurrencyManager has been shut down")
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, functools.partial(func, *args, **kwargs))

    def shutdown(self, wait: bool = True) -> None:
        """Shutdown the thread pool executor."""
        self._closed = True
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None

    async def __aenter__(self) -> "ConcurrencyManager":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.shutdown(wait=True)

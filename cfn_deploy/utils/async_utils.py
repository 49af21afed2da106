"""Asynchronous operation utilities"""

import asyncio
import functools
from typing import Any, Awaitable, Callable, Coroutine, Iterable, List, Optional, TypeVar

T = TypeVar('T')


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run async coroutine in sync context

    Args:
        coro: Coroutine to run

    Returns:
        Coroutine result
    """
    loop = None
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        # No running loop
        pass

    if loop and loop.is_running():
        # Already in async context, create new thread
        import threading

        result = None
        exception = None

        def run_in_thread():
            nonlocal result, exception
            try:
                result = asyncio.run(coro)
            except Exception as e:
                exception = e

        thread = threading.Thread(target=run_in_thread)
        thread.start()
        thread.join()

        if exception:
            raise exception
        return result
    else:
        return asyncio.run(coro)


async def run_blocking(func: Callable[..., T], *args, **kwargs) -> T:
    """
    Run a blocking call in the default executor

    Args:
        func: Blocking callable
        *args: Positional arguments
        **kwargs: Keyword arguments

    Returns:
        Callable result
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))


async def gather_in_completion_order(aws: Iterable[Awaitable[T]],
                                     callback: Optional[Callable[[int, int], None]] = None
                                     ) -> List[Any]:
    """
    Run awaitables concurrently and collect every outcome

    Each awaitable runs as its own task and yields exactly one entry,
    either its result or the exception it raised. Nothing is cancelled
    when one fails; the call returns after all of them have finished.

    Args:
        aws: Awaitables to run
        callback: Progress callback(completed, total)

    Returns:
        Results and exceptions in the order the tasks finished
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    total = len(tasks)
    outcomes: List[Any] = []

    for completed, next_done in enumerate(asyncio.as_completed(tasks), start=1):
        try:
            outcomes.append(await next_done)
        except Exception as e:
            outcomes.append(e)
        if callback:
            callback(completed, total)

    return outcomes

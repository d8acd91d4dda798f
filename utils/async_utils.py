import asyncio
from typing import Any, Coroutine


async def gather_with_semaphore(semaphore: asyncio.Semaphore, *tasks: Coroutine[Any, Any, Any]) -> list[Any]:
    """
    Runs the coroutines concurrently, each holding the shared semaphore while it runs.
    Results come back in the order the coroutines were passed in, regardless of completion order.
    """

    async def sem_task(task: Coroutine[Any, Any, Any]) -> Any:
        async with semaphore:
            return await task

    return await asyncio.gather(*(sem_task(task) for task in tasks))

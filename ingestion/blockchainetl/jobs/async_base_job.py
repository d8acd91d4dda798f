class AsyncBaseJob(object):
    """Template for a job: _start, then _export, and _end always runs even if _export raised."""

    async def run(self) -> None:
        try:
            await self._start()
            await self._export()
        finally:
            await self._end()

    async def _start(self) -> None:
        pass

    async def _export(self) -> None:
        pass

    async def _end(self) -> None:
        pass

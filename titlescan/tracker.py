import asyncio


class CompletionTracker:
    """Counts outstanding units of work and lets one caller wait for zero.

    Every unit is registered before it is scheduled and released exactly once
    when it finishes, whatever the outcome. All calls must come from the
    event loop thread.
    """

    def __init__(self):
        self.outstanding = 0
        self.spawned = 0
        self.completed = 0
        self._idle = asyncio.Event()
        self._idle.set()
        self._tasks = set()

    def add(self):
        self.outstanding += 1
        self.spawned += 1
        self._idle.clear()

    def done(self):
        if self.outstanding <= 0:
            raise RuntimeError("CompletionTracker.done() called with no outstanding units")
        self.outstanding -= 1
        self.completed += 1
        if self.outstanding == 0:
            self._idle.set()

    def spawn(self, coro):
        """Register a unit and run ``coro`` as its own task."""
        self.add()
        task = asyncio.create_task(self._run(coro))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, coro):
        try:
            await coro
        finally:
            self.done()

    async def wait(self):
        await self._idle.wait()

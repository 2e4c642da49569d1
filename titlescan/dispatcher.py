from .tracker import CompletionTracker

BATCH_SIZE = 20


def partition(urls, batch_size=BATCH_SIZE):
    """Yield contiguous, non-overlapping slices of at most ``batch_size`` URLs."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")
    for start in range(0, len(urls), batch_size):
        yield urls[start:start + batch_size]


class BatchDispatcher:
    """Launch one unit per batch and wait for every unit they spawn.

    Batching groups dispatch only. Each batch unit fans out one request per
    URL straight away, so in-flight requests are bounded by the fetcher's
    max_concurrency, not by the batch size.
    """

    def __init__(self, fetcher, batch_size=BATCH_SIZE, tracker=None):
        self.fetcher = fetcher
        self.batch_size = batch_size
        self.tracker = tracker or CompletionTracker()

    async def run(self, urls):
        for batch in partition(urls, self.batch_size):
            self.tracker.spawn(self._dispatch_batch(batch))
        await self.tracker.wait()

    async def _dispatch_batch(self, batch):
        self.fetcher.process_batch(batch, self.tracker)

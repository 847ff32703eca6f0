import time
import unittest
from unittest.mock import AsyncMock, patch

from debridhub.core.batching import chunked, throttled_batches


class TestChunked(unittest.TestCase):
    def test_splits_in_order(self):
        self.assertEqual(chunked([1, 2, 3, 4, 5], 2), [[1, 2], [3, 4], [5]])

    def test_empty(self):
        self.assertEqual(chunked([], 40), [])

    def test_rejects_zero_size(self):
        with self.assertRaises(ValueError):
            chunked([1], 0)


class TestThrottledBatches(unittest.IsolatedAsyncioTestCase):
    async def test_sleeps_only_between_batches(self):
        sleep = AsyncMock()
        with patch("debridhub.core.batching.asyncio.sleep", sleep):
            batches = [b async for b in throttled_batches(list(range(85)), 40, 0.5)]

        self.assertEqual([len(b) for b in batches], [40, 40, 5])
        self.assertEqual(sleep.await_count, 2)
        sleep.assert_awaited_with(0.5)

    async def test_single_batch_never_sleeps(self):
        sleep = AsyncMock()
        with patch("debridhub.core.batching.asyncio.sleep", sleep):
            batches = [b async for b in throttled_batches(["a", "b"], 40, 0.5)]

        self.assertEqual(batches, [["a", "b"]])
        sleep.assert_not_awaited()

    async def test_spacing_measured_after_consumer(self):
        finished = []
        started = []
        async for _ in throttled_batches(list(range(6)), 2, 0.1):
            started.append(time.monotonic())
            finished.append(time.monotonic())

        for i in range(1, len(started)):
            self.assertGreaterEqual(started[i] - finished[i - 1], 0.09)


if __name__ == '__main__':
    unittest.main()

# linkwatch/clock.py
import asyncio


class FakeClock:
    """
    Manual clock with an asyncio-compatible `sleep`. Sleepers wake only when
    `advance()` moves `now` past their deadline, in deadline order.
    """
    def __init__(self, start: float = 0.0):
        self.now = start
        self._waiters = []   # (deadline, seq, future)
        self._seq = 0

    @property
    def pending(self) -> int:
        return sum(1 for _, _, fut in self._waiters if not fut.done())

    async def sleep(self, seconds: float) -> None:
        if seconds <= 0:
            await asyncio.sleep(0)
            return
        fut = asyncio.get_running_loop().create_future()
        self._seq += 1
        self._waiters.append((self.now + seconds, self._seq, fut))
        try:
            await fut
        finally:
            self._waiters = [w for w in self._waiters if w[2] is not fut]

    def advance(self, seconds: float) -> int:
        """Move time forward and wake every sleeper whose deadline has passed."""
        self.now += seconds
        due = sorted(w for w in self._waiters if w[0] <= self.now)
        for _, _, fut in due:
            if not fut.done():
                fut.set_result(None)
        return len(due)

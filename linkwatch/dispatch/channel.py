# linkwatch/dispatch/channel.py
import asyncio

from linkwatch.schemas import ProbeResult


class ResultChannel:
    """
    Unbounded FIFO of ProbeResults with rendezvous sends: `send` only returns once
    a receiver has taken that exact result off the channel. Never closed.
    """

    def __init__(self):
        self._queue: asyncio.Queue = asyncio.Queue()

    def __len__(self) -> int:
        return self._queue.qsize()

    async def send(self, result: ProbeResult) -> None:
        handoff = asyncio.get_running_loop().create_future()
        await self._queue.put((result, handoff))
        await handoff

    async def receive(self) -> ProbeResult:
        result, handoff = await self._queue.get()
        # sender may have been cancelled while parked
        if not handoff.done():
            handoff.set_result(None)
        return result

    def __aiter__(self):
        return self

    async def __anext__(self) -> ProbeResult:
        return await self.receive()

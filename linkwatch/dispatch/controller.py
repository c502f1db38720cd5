# linkwatch/dispatch/controller.py

import asyncio
import logging
from dataclasses import replace
from typing import Callable, Iterable, Optional

from linkwatch.config import Settings
from linkwatch.dispatch.channel import ResultChannel
from linkwatch.dispatch.rules import format_status_line, status_changed, validate_targets
from linkwatch.dispatch.state import PollState
from linkwatch.prober.base import Prober, make_result

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Fans out one probe per target, then consumes results one at a time: print the
    status line, schedule a single delayed reprobe for that target, repeat forever.

    `sleep` is the only source of time, so tests can swap in FakeClock.sleep.
    """

    def __init__(self, prober: Prober, settings: Optional[Settings] = None,
                 sink: Callable[[str], None] = print,
                 sleep=asyncio.sleep):
        self.prober = prober
        self.s = settings or Settings()
        self.sink = sink
        self.sleep = sleep
        self.state: Optional[PollState] = None
        self._tasks: set = set()

    async def run(self, targets: Optional[Iterable[str]] = None):
        targets = validate_targets(self.s.targets if targets is None else targets)
        channel = ResultChannel()
        self.state = PollState(targets=targets)
        logger.info("polling %d targets every %.1fs", len(targets), self.s.interval_s)

        try:
            # -------------------------------
            # Init: one probe per target
            # -------------------------------
            for target in targets:
                self._launch(target, channel, delay=None)

            # -------------------------------
            # Listening: serialized consume + reschedule
            # -------------------------------
            async for result in channel:
                self._consume(result)
                self._launch(result["target"], channel, delay=self.s.interval_s)
        finally:
            tasks = list(self._tasks)
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            self._tasks.clear()
            await self.prober.aclose()

    def _consume(self, result):
        tstate = self.state[result["target"]]
        if not tstate.in_flight:
            raise RuntimeError(f"result for {result['target']} with no probe outstanding")

        tstate.in_flight = False
        tstate.results_consumed += 1
        self.state.results_consumed += 1

        up = bool(result.get("up"))
        if status_changed(tstate.last_up, up):
            tstate.last_changed += 1
            logger.info("%s went %s", result["target"], "up" if up else "down")
        tstate.last_up = up
        if not up and result.get("error"):
            logger.debug("%s unreachable: %s", result["target"], result["error"])

        self.sink(format_status_line(result))

    def _launch(self, target: str, channel: ResultChannel, delay: Optional[float]):
        tstate = self.state[target]
        if tstate.in_flight:
            raise RuntimeError(f"{target} already has a probe outstanding")
        tstate.in_flight = True
        if delay is not None:
            tstate.reprobes_scheduled += 1

        task = asyncio.create_task(self._probe_and_send(target, channel, delay))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _probe_and_send(self, target: str, channel: ResultChannel, delay: Optional[float]):
        if delay is not None:
            await self.sleep(delay)

        self.state[target].probes_sent += 1
        try:
            result = await self.prober.probe_once(target)
            if not isinstance(result, dict):
                raise TypeError(f"probe_once returned {type(result).__name__}, expected a ProbeResult dict")
            result["target"] = target
        except Exception as e:
            logger.exception("prober raised for %s", target)
            result = make_result(target, False, error=f"{type(e).__name__}: {e}")

        await channel.send(result)


def run(targets: Optional[Iterable[str]] = None, interval_s: Optional[float] = None,
        sink: Callable[[str], None] = print, prober: Optional[Prober] = None,
        settings: Optional[Settings] = None):
    """
    Blocking entry point: poll until the process is killed.

    `targets` and `interval_s` override the matching fields of `settings`; the
    caller's Settings object is left untouched.
    """
    overrides = {}
    if targets is not None:
        overrides["targets"] = tuple(targets)
    if interval_s is not None:
        overrides["interval_s"] = interval_s
    s = replace(settings or Settings(), **overrides)

    if prober is None:
        from linkwatch.prober.http_get import HttpProber
        prober = HttpProber.from_settings(s)
    asyncio.run(Dispatcher(prober, s, sink=sink).run())

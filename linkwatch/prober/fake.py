# linkwatch/prober/fake.py
from collections import Counter, deque

from linkwatch.prober.base import Prober, make_result


class FakeProber(Prober):
    """
    script: dict[target] -> list of outcomes returned one per call, where an outcome is
    a bool or a ProbeResult-like dict. When a target's script runs out, `default` is used
    (a bool, or a dict[target] -> bool for per-target defaults; missing targets are down).
    """
    def __init__(self, script=None, default=False):
        self.script = {}
        if script:
            for k, v in script.items():
                self.script[k] = deque(v)
        self.default = default
        self.calls = []
        self.counts = Counter()

    def _default_for(self, target):
        if isinstance(self.default, dict):
            return bool(self.default.get(target, False))
        return bool(self.default)

    async def probe_once(self, target):
        self.calls.append(target)
        self.counts[target] += 1

        dq = self.script.get(target)
        outcome = dq.popleft() if dq else self._default_for(target)
        if isinstance(outcome, dict):
            result = make_result(target, bool(outcome.get("up")))
            result.update(outcome)
            result["target"] = target
            return result
        if outcome:
            return make_result(target, True, status_code=200, rtt_ms=0.0)
        return make_result(target, False, error="ConnectError: scripted failure")

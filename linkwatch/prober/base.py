# linkwatch/prober/base.py
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

from linkwatch.schemas import ProbeResult, Target


def make_result(target: Target, up: bool,
                status_code: Optional[int] = None,
                rtt_ms: Optional[float] = None,
                error: Optional[str] = None) -> ProbeResult:
    return {
        "target": target,
        "up": up,
        "status_code": status_code,
        "rtt_ms": rtt_ms,
        "error": error,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


class Prober(ABC):
    @abstractmethod
    async def probe_once(self, target: Target) -> ProbeResult:
        """Run exactly one reachability check for target and return its ProbeResult.

        Implementations report failures as up=False instead of raising.
        """
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release transport resources held across probes. No-op by default."""
        return None

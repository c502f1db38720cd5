from typing import Optional, TypedDict

Target = str

class _ProbeOutcome(TypedDict):
    target: Target
    up: bool

class ProbeResult(_ProbeOutcome, total=False):
    status_code: Optional[int]   # any response at all counts as up, even 5xx
    rtt_ms: Optional[float]
    error: Optional[str]         # transport error class + message when down
    timestamp: str

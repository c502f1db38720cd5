from dataclasses import dataclass
from typing import Optional

DEFAULT_TARGETS = (
    "http://google.com",
    "http://stackoverflow.com",
    "http://youtube.com",
)

@dataclass
class Settings:
    targets: tuple[str, ...] = DEFAULT_TARGETS
    interval_s: float = 10.0          # wait between a consumed result and the next probe of that target

    # transport knobs; None keeps the httpx default (5s)
    timeout_s: Optional[float] = None
    follow_redirects: bool = True
    user_agent: Optional[str] = None

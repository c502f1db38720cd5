# linkwatch/dispatch/state.py
from dataclasses import dataclass, field
from typing import Optional

@dataclass
class TargetState:
    target: str
    probes_sent: int = 0
    results_consumed: int = 0
    reprobes_scheduled: int = 0
    in_flight: bool = False
    last_up: Optional[bool] = None
    last_changed: int = 0        # number of up/down flips seen

@dataclass
class PollState:
    targets: tuple
    results_consumed: int = 0
    per_target: dict = field(default_factory=dict)

    def __post_init__(self):
        for t in self.targets:
            self.per_target[t] = TargetState(target=t)

    def __getitem__(self, target: str) -> TargetState:
        return self.per_target[target]

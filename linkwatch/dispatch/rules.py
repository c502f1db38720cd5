# linkwatch/dispatch/rules.py
from typing import Iterable, Optional


def format_status_line(result) -> str:
    word = "up" if result.get("up") else "down"
    return f"{result['target']} is {word}!"

def status_changed(previous: Optional[bool], current: bool) -> bool:
    """First sighting is not a change; only an up<->down flip is."""
    if previous is None:
        return False
    return previous != current

def validate_targets(targets: Iterable[str]) -> tuple:
    """
    Freeze the target set. Each target may only have one probe outstanding,
    so duplicates are rejected along with empty sets and empty identifiers.
    """
    frozen = tuple(targets)
    if not frozen:
        raise ValueError("target set is empty")
    seen = set()
    for idx, t in enumerate(frozen):
        if not isinstance(t, str) or not t.strip():
            raise ValueError(f"targets[{idx}] must be a non-empty string, got {t!r}")
        if t in seen:
            raise ValueError(f"duplicate target: {t}")
        seen.add(t)
    return frozen

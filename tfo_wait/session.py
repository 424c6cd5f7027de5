from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Dict

from .config import Settings


class LoopState(enum.Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    UNAUTHORIZED = "unauthorized"
    STOPPED = "stopped"


TERMINAL_STATES = frozenset({LoopState.UNAUTHORIZED, LoopState.STOPPED})

DEFAULT_INTERVALS: Dict[LoopState, int] = {
    LoopState.RUNNING: 30,
    LoopState.COMPLETED: 600,
}


def intervals_from_settings(s: Settings) -> Dict[LoopState, int]:
    return {
        LoopState.RUNNING: s.RUNNING_INTERVAL_S,
        LoopState.COMPLETED: s.COMPLETED_INTERVAL_S,
    }


@dataclass(frozen=True)
class PollSession:
    """Everything the poll loop remembers between cycles.

    ``last_observed_state`` only changes after a transition report went
    through, so it always names the last state the endpoint was told about.
    """

    endpoint_base: str
    auth_token: str
    last_observed_state: str = ""
    interval_seconds: int = DEFAULT_INTERVALS[LoopState.RUNNING]
    state: LoopState = LoopState.RUNNING

    @classmethod
    def from_settings(cls, s: Settings) -> "PollSession":
        return cls(
            endpoint_base=s.TFO_API_URL,
            auth_token=s.TFO_API_LOG_TOKEN,
            interval_seconds=s.RUNNING_INTERVAL_S,
        )

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def evolve(self, **changes) -> "PollSession":
        return replace(self, **changes)


__all__ = [
    "LoopState",
    "TERMINAL_STATES",
    "DEFAULT_INTERVALS",
    "intervals_from_settings",
    "PollSession",
]

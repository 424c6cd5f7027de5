from __future__ import annotations

from typing import Awaitable, Callable

from .session import PollSession

Poster = Callable[[str], Awaitable[None]]


async def report_if_changed(session: PollSession, new_state: str, post: Poster) -> PollSession:
    """Send a transition report when ``new_state`` differs from the last one.

    Returns the session unchanged when there is nothing to report, or a copy
    remembering ``new_state`` once ``post`` succeeded.  Errors from ``post``
    propagate and leave the remembered state alone.  An empty state means the
    endpoint has no work item to show; it is neither reported nor remembered.
    """
    if not new_state or new_state == session.last_observed_state:
        return session
    await post(new_state)
    return session.evolve(last_observed_state=new_state)


__all__ = ["Poster", "report_if_changed"]

from __future__ import annotations

from functools import partial
from typing import Awaitable, Callable, Dict, Optional

import anyio
import httpx
from rich.console import Console
from rich.markup import escape

from .http_client import fetch_status, post_status
from .reporter import report_if_changed
from .session import DEFAULT_INTERVALS, LoopState, PollSession
from .status import OutcomeKind, classify, is_complete

console = Console()

Sleeper = Callable[[float], Awaitable[None]]


def interruptible_sleep(stop: anyio.Event) -> Sleeper:
    """Sleep that returns early as soon as ``stop`` is set."""

    async def sleep(seconds: float) -> None:
        with anyio.move_on_after(seconds):
            await stop.wait()

    return sleep


async def poll_once(
    session: PollSession,
    client: httpx.AsyncClient,
    *,
    intervals: Optional[Dict[LoopState, int]] = None,
    out: Optional[Console] = None,
) -> PollSession:
    """Run one fetch/classify/report cycle and return the next session.

    TransportError and ParseError from the fetch or the report propagate.
    """
    out = out or console
    intervals = intervals or DEFAULT_INTERVALS

    doc = await fetch_status(client, session.endpoint_base)
    outcome = classify(doc)

    if outcome.kind is OutcomeKind.UNAUTHORIZED:
        # token expired; every further call would fail the same way
        out.print(f"status query failed with {escape(outcome.message)}")
        return session.evolve(state=LoopState.UNAUTHORIZED)

    if outcome.kind is OutcomeKind.OTHER_ERROR:
        out.print(f"status query failed with {escape(outcome.message)}")
        return session

    session = await report_if_changed(
        session, outcome.state, partial(post_status, client, session.endpoint_base)
    )
    if is_complete(doc):
        out.print(f"workflow is {escape(outcome.state)}")
        next_state = LoopState.COMPLETED
    else:
        out.print("workflow is still running")
        next_state = LoopState.RUNNING
    return session.evolve(state=next_state, interval_seconds=intervals[next_state])


async def run_poll_loop(
    session: PollSession,
    client: httpx.AsyncClient,
    *,
    sleep: Optional[Sleeper] = None,
    stop: Optional[anyio.Event] = None,
    intervals: Optional[Dict[LoopState, int]] = None,
    exit_on_complete: bool = False,
    out: Optional[Console] = None,
) -> PollSession:
    """
    Poll until a terminal condition and return the final session:
      - UNAUTHORIZED once the endpoint rejects the token
      - STOPPED when ``stop`` is set (checked before each cycle and around the sleep)
      - COMPLETED only when ``exit_on_complete`` is enabled; otherwise a
        completed workflow keeps being polled at the long interval

    There is no iteration cap. Fatal errors propagate to the caller.
    """
    if stop is None:
        stop = anyio.Event()
    if sleep is None:
        sleep = interruptible_sleep(stop)

    while True:
        if stop.is_set():
            return session.evolve(state=LoopState.STOPPED)

        session = await poll_once(session, client, intervals=intervals, out=out)
        if session.is_terminal:
            return session
        if exit_on_complete and session.state is LoopState.COMPLETED:
            return session

        if stop.is_set():
            return session.evolve(state=LoopState.STOPPED)
        await sleep(session.interval_seconds)


__all__ = ["Sleeper", "interruptible_sleep", "poll_once", "run_poll_loop"]

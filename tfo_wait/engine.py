from __future__ import annotations

import signal
from typing import Optional

import anyio
import httpx
from rich.console import Console

from .config import Settings
from .errors import PollError
from .http_client import TFOClient
from .poller import run_poll_loop
from .session import PollSession, intervals_from_settings

console = Console()


async def _watch_signals(stop: anyio.Event, out: Console) -> None:
    with anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM) as signals:
        async for signum in signals:
            out.print(f"[yellow]Received {signal.Signals(signum).name}, stopping[/]")
            stop.set()
            return


async def wait_for_workflow(
    settings: Settings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    handle_signals: bool = True,
    out: Optional[Console] = None,
) -> PollSession:
    """
    Block until the workflow endpoint reaches a terminal condition:
      - open a token-signing client bounded by TIMEOUT_S
      - (optional) turn SIGINT/SIGTERM into a clean stop
      - run the poll loop with the configured intervals

    Returns the final session; PollError propagates unchanged.
    """
    out = out or console
    stop = anyio.Event()
    session = PollSession.from_settings(settings)
    client_kwargs = {"transport": transport} if transport is not None else {}

    async with TFOClient.from_settings(settings, **client_kwargs) as client:
        async with anyio.create_task_group() as tg:
            if handle_signals:
                tg.start_soon(_watch_signals, stop, out)
            try:
                return await run_poll_loop(
                    session,
                    client,
                    stop=stop,
                    intervals=intervals_from_settings(settings),
                    exit_on_complete=settings.EXIT_ON_COMPLETE,
                    out=out,
                )
            except PollError as exc:
                # re-raised outside the task group so callers see it unwrapped
                failure = exc
            finally:
                tg.cancel_scope.cancel()
    raise failure


__all__ = ["wait_for_workflow"]

from __future__ import annotations
from typing import Optional
import anyio
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from .config import Settings
from .engine import wait_for_workflow
from .errors import PollError
from .http_client import status_url

app = typer.Typer()
console = Console()

@app.command()
def wait(
    timeout: float = typer.Option(None, min=0.1, help="Per-request timeout in seconds"),
    running_interval: int = typer.Option(None, min=1, help="Seconds between polls while the workflow runs"),
    completed_interval: int = typer.Option(None, min=1, help="Seconds between polls once the workflow completed"),
    exit_on_complete: Optional[bool] = typer.Option(
        None, "--exit-on-complete/--keep-polling", help="Stop as soon as the workflow completes"
    ),
):
    """Wait for the workflow behind $TFO_API_URL, reporting every state change."""
    try:
        s = Settings()
    except ValidationError as exc:
        for err in exc.errors():
            field = ".".join(str(p) for p in err["loc"])
            if err["type"] == "missing":
                console.print(f"[bold red]${field} is not set")
            else:
                console.print(f"[bold red]${field}: {escape(err['msg'])}")
        raise typer.Exit(code=1)
    if timeout is not None:
        s.TIMEOUT_S = timeout
    if running_interval is not None:
        s.RUNNING_INTERVAL_S = running_interval
    if completed_interval is not None:
        s.COMPLETED_INTERVAL_S = completed_interval
    if exit_on_complete is not None:
        s.EXIT_ON_COMPLETE = exit_on_complete
    console.rule("[bold cyan]TFO workflow wait")
    console.print(f"Endpoint: [bold]{escape(status_url(s.TFO_API_URL))}[/] | timeout {s.TIMEOUT_S}s")
    console.print(
        f"Intervals: running {s.RUNNING_INTERVAL_S}s, completed {s.COMPLETED_INTERVAL_S}s"
        f" | exit on complete: [bold]{s.EXIT_ON_COMPLETE}[/]\n"
    )
    try:
        final = anyio.run(wait_for_workflow, s)
    except PollError as exc:
        console.print(f"[bold red]{escape(str(exc))}")
        raise typer.Exit(code=1)
    console.print(f"Finished: [bold]{final.state.value}[/] (last state: {escape(final.last_observed_state) or '-'})")

from __future__ import annotations

import pytest

from tfo_wait.errors import TransportError
from tfo_wait.reporter import report_if_changed
from tfo_wait.session import PollSession


class RecordingPoster:
    def __init__(self, fail_on: str | None = None):
        self.sent: list[str] = []
        self.fail_on = fail_on

    async def __call__(self, state: str) -> None:
        if state == self.fail_on:
            raise TransportError(f"status report '{state}' rejected with HTTP 503")
        self.sent.append(state)


def new_session(**kwargs) -> PollSession:
    return PollSession(endpoint_base="https://tfo.example", auth_token="t", **kwargs)


@pytest.mark.anyio
async def test_one_report_per_distinct_change_in_order():
    post = RecordingPoster()
    session = new_session()
    remembered = []
    for state in ["Pending", "Pending", "Applying", "Applying", "Applying", "Succeeded", "Succeeded"]:
        session = await report_if_changed(session, state, post)
        remembered.append(session.last_observed_state)

    assert post.sent == ["Pending", "Applying", "Succeeded"]
    assert remembered == ["Pending", "Pending", "Applying", "Applying", "Applying", "Succeeded", "Succeeded"]


@pytest.mark.anyio
async def test_unchanged_state_returns_same_session():
    post = RecordingPoster()
    session = new_session(last_observed_state="Applying")

    assert await report_if_changed(session, "Applying", post) is session
    assert post.sent == []


@pytest.mark.anyio
async def test_state_may_change_back():
    post = RecordingPoster()
    session = new_session()
    for state in ["Applying", "Planning", "Applying"]:
        session = await report_if_changed(session, state, post)

    assert post.sent == ["Applying", "Planning", "Applying"]


@pytest.mark.anyio
async def test_empty_state_is_neither_reported_nor_remembered():
    post = RecordingPoster()
    unset = new_session()
    seen = new_session(last_observed_state="Applying")

    assert await report_if_changed(unset, "", post) is unset
    assert await report_if_changed(seen, "", post) is seen
    assert post.sent == []
    assert seen.last_observed_state == "Applying"


@pytest.mark.anyio
async def test_failed_report_propagates_and_keeps_previous_state():
    post = RecordingPoster(fail_on="Succeeded")
    session = await report_if_changed(new_session(), "Applying", post)

    with pytest.raises(TransportError):
        await report_if_changed(session, "Succeeded", post)

    assert session.last_observed_state == "Applying"
    assert post.sent == ["Applying"]

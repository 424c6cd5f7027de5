"""Status documents returned by the workflow endpoint and their meaning.

The endpoint wraps an application status code inside the JSON body, so the
HTTP status line says little: a 200 response can still carry a 401 in
``status_info``.  The wire shape is validated by the pydantic models below;
:func:`parse_document` / :func:`parse_document_json` turn a body into a
:class:`StatusDocument` and :func:`classify` reduces it to one of three
outcomes the poll loop acts on.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, ValidationError, field_validator

from .errors import ParseError

STATUS_OK = 200
STATUS_UNAUTHORIZED = 401


class StatusInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    status_code: StrictInt
    message: str


class DataItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    did_start: StrictBool
    did_complete: StrictBool
    current_state: str


class StatusResponse(BaseModel):
    """Raw body of ``GET /api/v1/task/status``."""

    model_config = ConfigDict(frozen=True)

    status_info: StatusInfo
    data: List[DataItem] = Field(default_factory=list)

    @field_validator("data", mode="before")
    @classmethod
    def _null_data_is_empty(cls, value: Any) -> Any:
        # error replies carry "data": null
        return [] if value is None else value


@dataclass(frozen=True)
class WorkItem:
    started: bool
    completed: bool
    current_state: str


@dataclass(frozen=True)
class StatusDocument:
    status_code: int
    message: str
    items: Tuple[WorkItem, ...] = ()

    @property
    def first_item(self) -> WorkItem | None:
        return self.items[0] if self.items else None

    @classmethod
    def from_response(cls, resp: StatusResponse) -> "StatusDocument":
        return cls(
            status_code=resp.status_info.status_code,
            message=resp.status_info.message,
            items=tuple(
                WorkItem(started=d.did_start, completed=d.did_complete, current_state=d.current_state)
                for d in resp.data
            ),
        )


class OutcomeKind(enum.Enum):
    OK = "ok"
    UNAUTHORIZED = "unauthorized"
    OTHER_ERROR = "other_error"


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    state: str = ""
    message: str = ""


def _wrong_format(exc: ValidationError) -> ParseError:
    return ParseError(f"response body in wrong format: {exc.error_count()} error(s), first: {exc.errors()[0]['msg']}")


def parse_document(payload: Any) -> StatusDocument:
    """Build a :class:`StatusDocument` from an already decoded JSON body."""
    try:
        resp = StatusResponse.model_validate(payload)
    except ValidationError as exc:
        raise _wrong_format(exc) from exc
    return StatusDocument.from_response(resp)


def parse_document_json(raw: str | bytes) -> StatusDocument:
    """Decode and validate a raw body; invalid JSON is a ParseError too."""
    try:
        resp = StatusResponse.model_validate_json(raw)
    except ValidationError as exc:
        raise _wrong_format(exc) from exc
    return StatusDocument.from_response(resp)


def classify(doc: StatusDocument) -> Outcome:
    if doc.status_code == STATUS_OK:
        item = doc.first_item
        return Outcome(OutcomeKind.OK, state=item.current_state if item else "", message=doc.message)
    if doc.status_code == STATUS_UNAUTHORIZED:
        return Outcome(OutcomeKind.UNAUTHORIZED, message=doc.message)
    return Outcome(OutcomeKind.OTHER_ERROR, message=doc.message)


def is_complete(doc: StatusDocument) -> bool:
    """True once the first work item has both started and completed."""
    item = doc.first_item
    if item is None:
        return False
    return item.started and item.completed


__all__ = [
    "StatusInfo",
    "DataItem",
    "StatusResponse",
    "WorkItem",
    "StatusDocument",
    "OutcomeKind",
    "Outcome",
    "parse_document",
    "parse_document_json",
    "classify",
    "is_complete",
]

"""Operations service messages.

Architecture:
    Pydantic v2 models used as request messages and as response containers.
    Unlike value models, response containers are mutable: stubs and page
    retrievers fill a container supplied by the caller, mirroring the
    "response out-parameter" shape of every stub method.

Design Decisions:
    - camelCase aliases: JSON on the wire uses camelCase, Python uses snake_case
    - Defaults everywhere: an empty container is a valid message
    - Unknown fields are ignored so newer servers do not break old clients
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..core.status import Status, StatusCode


class Message(BaseModel):
    """Base class for wire messages."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict[str, Any]:
        """JSON-compatible dict with camelCase keys, omitting unset defaults."""
        return self.model_dump(mode="json", by_alias=True, exclude_defaults=True)


def copy_message(source: Message, target: Message) -> None:
    """Overwrite every field of `target` with the value from `source`."""
    for name in type(target).model_fields:
        setattr(target, name, getattr(source, name))


class OperationError(Message):
    """Error result of a finished operation."""

    code: int = 0
    message: str = ""
    details: list[dict[str, Any]] = Field(default_factory=list)

    def to_status(self) -> Status:
        return Status(StatusCode.from_number(self.code), self.message)


class Operation(Message):
    """A long-running operation."""

    name: str = ""
    metadata: dict[str, Any] | None = None
    done: bool = False
    error: OperationError | None = None
    response: dict[str, Any] | None = None

    @property
    def succeeded(self) -> bool:
        return self.done and self.error is None


class GetOperationRequest(Message):
    name: str = ""


class DeleteOperationRequest(Message):
    name: str = ""


class CancelOperationRequest(Message):
    name: str = ""


class ListOperationsRequest(Message):
    name: str = ""
    filter: str = ""
    page_size: int = Field(default=0, ge=0)
    page_token: str = ""


class ListOperationsResponse(Message):
    """One page of operations."""

    operations: list[Operation] = Field(default_factory=list)
    next_page_token: str = ""


class Empty(Message):
    pass

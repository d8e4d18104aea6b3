"""Payload models shared by unit and integration tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class Greeting(BaseModel):
    """Greeting with lowercase JSON keys and capitalized XML element names."""

    one: str = Field(alias="One")
    two: str = Field(alias="Two")


@dataclass
class GreetingRecord:
    """Dataclass counterpart of Greeting."""

    One: str
    Two: str


class Status(Enum):
    """Enum rendered through its value."""

    ACTIVE = "active"
    DISABLED = "disabled"


@dataclass
class Address:
    """Nested dataclass."""

    City: str
    Zip: str | None = None


@dataclass
class Person:
    """Dataclass with nested, repeated and optional fields."""

    Name: str
    Emails: list[str] = field(default_factory=list)
    Address: Address | None = None
    Status: Status = Status.ACTIVE
    Verified: bool = False


class Event(BaseModel):
    """Model with types orjson handles natively."""

    id: UUID
    created_at: datetime
    tags: list[str] = Field(default_factory=list)


SAMPLE_EVENT = Event(
    id=UUID("12345678-1234-5678-1234-567812345678"),
    created_at=datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC),
    tags=["a", "b"],
)

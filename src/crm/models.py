from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.util.date_utils import ensure_utc


class RecordingType(str, Enum):
    """Recording types that are posted to Slack."""

    EMAIL = "email"
    NOTE = "note"
    COMMENT = "comment"


class SubjectType(str, Enum):
    """Subject types a recording can be attached to."""

    PARTY = "Party"
    DEAL = "Deal"
    KASE = "Kase"


class HighriseModel(BaseModel):
    """Base for entities decoded from Highrise XML (camelCase keys)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )


class Recording(HighriseModel):
    """An email, note or comment as returned by recordings.xml."""

    id: int
    type: str
    body: str = ""
    title: Optional[str] = None
    author_id: Optional[int] = None
    subject_id: Optional[int] = None
    subject_type: str = ""
    subject_name: str = ""
    visible_to: str = ""
    group_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    @field_validator(
        "body", "subject_type", "subject_name", "visible_to", mode="before"
    )
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class Author(HighriseModel):
    """A Highrise user."""

    id: Optional[int] = None
    name: str = ""

    @property
    def first_name(self) -> str:
        parts = self.name.split()
        return parts[0] if parts else ""


class Subject(HighriseModel):
    """The person, company, deal or case a recording is about."""

    id: int


class EnrichedRecording(BaseModel):
    """A recording together with its fetched author and subject."""

    model_config = ConfigDict(frozen=True)

    recording: Recording
    author: Author
    subject: Subject


class Attachment(BaseModel):
    fallback: str
    text: str
    ts: float
    mrkdwn_in: List[str] = Field(default_factory=lambda: ["text", "pretext"])
    title: Optional[str] = None
    title_link: Optional[str] = None


class WebhookPayload(BaseModel):
    """Slack incoming webhook message."""

    text: str
    username: str
    icon_url: str
    attachments: List[Attachment]

    def to_json(self) -> Dict[str, Any]:
        """JSON body for the webhook, without unset optional fields."""
        return self.model_dump(exclude_none=True)

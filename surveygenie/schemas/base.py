"""Shared pydantic pieces for API payloads."""
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer

from surveygenie.utils.datetime_helpers import ensure_utc


def format_utc(value: datetime) -> str:
    """ISO 8601 with a ``Z`` suffix; naive values are read as UTC."""
    return ensure_utc(value).isoformat().replace("+00:00", "Z")


# Completion timestamps go out as UTC whatever the store handed back
UTCDateTime = Annotated[datetime, PlainSerializer(format_utc, return_type=str, when_used="json")]


class BaseSchema(BaseModel):
    """Records built from ORM rows or reducer output."""

    model_config = ConfigDict(from_attributes=True)

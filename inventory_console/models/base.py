from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def utcnow_after(previous: Optional[datetime]) -> datetime:
    """Current time, bumped past `previous` so successive stamps strictly increase."""
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class CamelModel(BaseModel):
    """Records exposed with the camelCase keys used by CSV, JSON and the API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

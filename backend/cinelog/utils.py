from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime
from sqlmodel import Field


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def created_at_field() -> Any:
    """
    Insert timestamp: an aware UTC value in a ``DateTime(timezone=True)`` column.

    The column type is given explicitly so the mapping does not depend on how
    the installed sqlmodel maps a bare ``datetime`` annotation.
    """
    return Field(
        default_factory=now_utc,
        sa_type=DateTime(timezone=True),  # type: ignore[call-overload]
        nullable=False,
    )

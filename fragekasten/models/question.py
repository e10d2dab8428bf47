"""
Question Model
==============

Pending anonymous questions. Rows are written once on submission and
removed by the expiry sweeper once ``expire_after`` has passed.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class Question(SQLModel, table=True):
    __tablename__ = "asks"

    id: Optional[int] = Field(default=None, primary_key=True)
    content: str
    ip_address: str  # abuse diagnosis only, never exposed
    user_agent: str = ""
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    expire_after: int = Field(index=True)  # epoch seconds

"""User model."""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String

from ..database import UTCDateTime
from .base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False, default="")
    email = Column(String(255))
    created_at = Column(UTCDateTime, default=_utcnow)
    updated_at = Column(UTCDateTime, default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return f"<User id={self.id} name={self.name!r}>"

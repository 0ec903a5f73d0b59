"""ORM model for the consumed-token log. Rows are written by the session service."""

from sqlalchemy import Column, DateTime, Integer, Text, func

from app.models.base import Base


class UsedToken(Base):
    __tablename__ = "used_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token = Column(Text, nullable=False, unique=True)
    used_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

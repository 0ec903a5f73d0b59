"""Declarative base shared by the users, appointments and used_tokens tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass

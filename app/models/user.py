"""ORM model for member accounts referenced by appointments."""

from sqlalchemy import Column, String

from app.models.base import Base


class User(Base):
    """
    Member account. Owned by the membership service; read here for roles and names.

    account_type: one of Admin, Officer, Primer, Boy
    appointment: name of the appointment this account currently holds
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    account_name = Column(String(255), nullable=False)
    account_type = Column(String(32), nullable=False)
    appointment = Column(String(255), nullable=True)

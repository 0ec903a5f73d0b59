"""Read-only view of the consumed-token log."""

from typing import Protocol

from sqlalchemy.orm import Session

from app.models import UsedToken


class TokenLedger(Protocol):
    """Answers whether a token has already been used. Marking tokens is done elsewhere."""

    def was_consumed(self, token: str) -> bool: ...


class SqlTokenLedger:
    """TokenLedger backed by the used_tokens table."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def was_consumed(self, token: str) -> bool:
        return (
            self.session.query(UsedToken.id)
            .filter(UsedToken.token == token)
            .first()
            is not None
        )

"""JWT verification for the token cookie: signature, expiry and single use."""

import time
from typing import TYPE_CHECKING, Any

import jwt
from pydantic import ValidationError

from app.core.config import settings
from app.core.errors import (
    InvalidSignature,
    MissingCredential,
    TokenAlreadyUsed,
    TokenExpired,
)
from app.schemas.auth import TokenClaims

if TYPE_CHECKING:
    from app.services.token_ledger import TokenLedger


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify the signature of a JWT and return its payload.

    Expiry is not checked here; validate_token compares exp itself so that a
    token is expired only when exp is strictly before now.
    Raises jwt.PyJWTError on a bad signature or malformed token.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"verify_exp": False},
    )


def validate_token(
    token: str | None,
    ledger: "TokenLedger",
    now: float | None = None,
) -> TokenClaims:
    """
    Validate a bearer token and return its claims.

    Checks run in order: presence, signature and structure, expiry, and the
    consumed-token ledger (read only). Each failure raises its own
    AuthenticationFailure subclass.
    """
    if not token:
        raise MissingCredential()
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError:
        raise InvalidSignature() from None
    try:
        claims = TokenClaims.model_validate(payload)
    except ValidationError:
        raise InvalidSignature() from None

    current = time.time() if now is None else now
    if claims.exp is not None and claims.exp < current:
        raise TokenExpired()

    if ledger.was_consumed(token):
        raise TokenAlreadyUsed()
    return claims

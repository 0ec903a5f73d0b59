"""Schemas for decoded credentials."""

from pydantic import BaseModel, ConfigDict, Field


class TokenClaims(BaseModel):
    """Claims of a verified token; id is the subject account id."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str = Field(..., min_length=1, description="Subject account id")
    # NaN compares false against any clock, so it would never expire
    exp: float | None = Field(
        default=None,
        allow_inf_nan=False,
        description="Expiry, seconds since epoch",
    )

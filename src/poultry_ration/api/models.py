"""Pydantic models for ration API payloads."""

from datetime import date

from pydantic import BaseModel, Field


class RationRequest(BaseModel):
    """Request payload for an automatic ration."""

    breed: str
    stage: str | None = None
    bird_count: int
    age_days: int | None = Field(default=None, ge=0)
    target_sale_date: date | None = None

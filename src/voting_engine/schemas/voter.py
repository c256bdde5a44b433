"""Pydantic v2 schemas for voters."""

from typing import Literal

from pydantic import BaseModel, Field

from voting_engine.schemas.common import UtcDatetime


class UserInfo(BaseModel):
    """External user reference to turn into a voter."""

    user_id: str = Field(min_length=1, description="Private identifier linking to the host user database")
    alias: str | None = None


class Voter(BaseModel):
    """Registered voter.

    ``voter_id`` is public; ``user_id`` is private and opaque to the engine.
    """

    voter_id: str
    user_id: str
    alias: str | None = None
    status: Literal["active", "inactive"] = "active"
    created_at: UtcDatetime
    updated_at: UtcDatetime

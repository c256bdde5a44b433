"""Pydantic v2 schemas for votes.

A choice targets a candidate with a verdict (election, judgment) or a
free-form option value (option polls); which shape applies is decided by the
type of the voting the vote belongs to.
"""

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from voting_engine.schemas.common import UtcDatetime


class CandidateChoice(BaseModel):
    """Verdict cast for one candidate."""

    model_config = ConfigDict(extra="forbid")

    candidate_id: str
    verdict: Literal["elect", "pass", "guilty", "innocent"]


class OptionChoice(BaseModel):
    """Option picked in an option poll."""

    model_config = ConfigDict(extra="forbid")

    value: str


VoteChoice = CandidateChoice | OptionChoice


class VoteParams(BaseModel):
    """Request to cast a vote as a registered voter."""

    voting_id: str
    voter_id: str
    choices: list[VoteChoice] = Field(min_length=1)

    @property
    def candidate_ids(self) -> list[str]:
        return [choice.candidate_id for choice in self.choices if isinstance(choice, CandidateChoice)]


class VoteByUserParams(BaseModel):
    """Request to cast a vote identified by the host user id."""

    voting_id: str
    user_id: str
    choices: list[VoteChoice] = Field(min_length=1)


class Vote(VoteParams):
    """Registered vote."""

    vote_id: str
    created_at: UtcDatetime


_votes_adapter: TypeAdapter[list[Vote]] = TypeAdapter(list[Vote])


def parse_votes(values: Any) -> list[Vote]:
    """Validate a sequence of votes given as models or plain mappings."""
    return _votes_adapter.validate_python(
        [dict(value) if isinstance(value, Mapping) else value for value in values],
        from_attributes=True,
    )

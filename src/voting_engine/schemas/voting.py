"""Pydantic v2 schemas for votings.

A voting is one of three variants selected by ``voting_type``:
``election`` and ``judgment`` target a fixed roster of candidates,
``option`` targets free-form string options.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from voting_engine.schemas.common import UtcDatetime, VotingDescription, utc_now


class Candidate(BaseModel):
    """Reference to a voter standing as a candidate."""

    candidate_id: str
    alias: str | None = None


class Evidence(BaseModel):
    """Evidence attached to a judgment: literal text or an image URL."""

    type: Literal["text", "image"]
    data: str


# --- Request schemas ---


class _VotingParamsBase(BaseModel):
    voting_description: VotingDescription = Field(default_factory=dict)
    started_by: str = Field(description="voter_id of the voter opening the voting")
    starts_at: UtcDatetime | None = Field(default=None, description="Defaults to the registration time")
    ends_at: UtcDatetime
    required_participation_percentage: float | None = Field(
        default=None,
        ge=0,
        le=1,
        description="Quorum as a fraction of total voters",
    )


class _CandidateVotingParams(_VotingParamsBase):
    candidates: list[Candidate] = Field(default_factory=list)

    @property
    def candidate_ids(self) -> list[str]:
        return [candidate.candidate_id for candidate in self.candidates]


class ElectionParams(_CandidateVotingParams):
    """Parameters for opening an election."""

    voting_type: Literal["election"] = "election"
    only_one_selected: bool = False
    max_elected_candidates: int | None = Field(
        default=None,
        ge=1,
        description="When 1, the unique top candidate wins and ties elect nobody",
    )


class JudgmentParams(_CandidateVotingParams):
    """Parameters for opening a judgment."""

    voting_type: Literal["judgment"] = "judgment"
    evidences: list[Evidence] = Field(default_factory=list)


class OptionParams(_VotingParamsBase):
    """Parameters for opening a free-form option poll."""

    voting_type: Literal["option"] = "option"
    options: list[str] = Field(default_factory=list)
    only_one_selected: bool = False


VotingParams = Annotated[
    ElectionParams | JudgmentParams | OptionParams,
    Field(discriminator="voting_type"),
]


# --- Stored records ---


class _VotingRecord(BaseModel):
    voting_id: str
    total_voters: int = Field(ge=0, description="Active voters when the voting was registered")
    created_at: UtcDatetime
    updated_at: UtcDatetime

    def has_ended(self, now: datetime | None = None) -> bool:
        """Whether ``ends_at`` is already in the past."""
        return self.ends_at < (now or utc_now())  # type: ignore[attr-defined]


class Election(_VotingRecord, ElectionParams):
    """Registered election."""

    starts_at: UtcDatetime


class Judgment(_VotingRecord, JudgmentParams):
    """Registered judgment."""

    starts_at: UtcDatetime


class OptionVoting(_VotingRecord, OptionParams):
    """Registered option poll."""

    starts_at: UtcDatetime


VotingData = Annotated[
    Election | Judgment | OptionVoting,
    Field(discriminator="voting_type"),
]

CandidateVoting = Election | Judgment

VOTING_RECORD_TYPES: dict[str, type[Election] | type[Judgment] | type[OptionVoting]] = {
    "election": Election,
    "judgment": Judgment,
    "option": OptionVoting,
}

_voting_params_adapter: TypeAdapter[Any] = TypeAdapter(VotingParams)
_voting_data_adapter: TypeAdapter[Any] = TypeAdapter(VotingData)


def parse_voting_params(value: Any) -> ElectionParams | JudgmentParams | OptionParams:
    """Validate voting params given as a model or a plain mapping."""
    if isinstance(value, ElectionParams | JudgmentParams | OptionParams):
        return value
    return _voting_params_adapter.validate_python(value)


def parse_voting(value: Any) -> Election | Judgment | OptionVoting | None:
    """Validate a voting record returned by a collaborator.

    Args:
        value: A voting model, a plain mapping, or None.

    Returns:
        The voting model, or None when nothing was found.
    """
    if value is None or isinstance(value, Election | Judgment | OptionVoting):
        return value
    if isinstance(value, Mapping):
        return _voting_data_adapter.validate_python(dict(value))
    return _voting_data_adapter.validate_python(value, from_attributes=True)

"""Shared test fixtures for settings, collaborator registry and sample votings."""

from collections.abc import Callable, Generator
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from voting_engine.core.collaborators import reset_collaborators
from voting_engine.core.config import Settings, configure
from voting_engine.schemas.vote import CandidateChoice, OptionChoice, Vote
from voting_engine.schemas.voting import Candidate, Election, Judgment, OptionVoting

NOW = datetime.now(UTC)
YESTERDAY = NOW - timedelta(days=1)
BEFORE_YESTERDAY = YESTERDAY - timedelta(days=1)
TOMORROW = NOW + timedelta(days=1)

STARTED_BY = "voter-123456"
CANDIDATE_IDS = ["voter-111111", "voter-222222"]


@pytest.fixture
def settings() -> Settings:
    """Test engine settings, isolated from the environment file."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture(autouse=True)
def _reset_engine(settings: Settings) -> Generator[None]:
    """Install fresh settings and the default collaborator stubs around each test."""
    reset_collaborators()
    configure(settings)
    yield
    reset_collaborators()
    configure(None)


@pytest.fixture
def candidates() -> list[Candidate]:
    """Two candidates with aliases."""
    return [
        Candidate(candidate_id=CANDIDATE_IDS[0], alias="Jack Bummer"),
        Candidate(candidate_id=CANDIDATE_IDS[1], alias="Claire Corn"),
    ]


@pytest.fixture
def make_voting(candidates: list[Candidate]) -> Callable[..., Election | Judgment | OptionVoting]:
    """Factory for registered votings; ongoing by default, ``ended=True`` for ended ones."""

    def _make(voting_type: str = "election", *, ended: bool = False, **overrides: Any):
        fields: dict[str, Any] = {
            "voting_id": "voting-test",
            "voting_description": {"en-US": "Test voting"},
            "started_by": STARTED_BY,
            "starts_at": BEFORE_YESTERDAY if ended else YESTERDAY,
            "ends_at": YESTERDAY if ended else TOMORROW,
            "total_voters": len(candidates) + 1,
            "created_at": BEFORE_YESTERDAY,
            "updated_at": BEFORE_YESTERDAY,
        }
        if voting_type == "election":
            fields |= {"candidates": candidates, "max_elected_candidates": 1}
            fields |= overrides
            return Election(**fields)
        if voting_type == "judgment":
            fields |= {"candidates": candidates, "evidences": []}
            fields |= overrides
            return Judgment(**fields)
        fields |= {"options": ["yes", "no"]}
        fields |= overrides
        return OptionVoting(**fields)

    return _make


@pytest.fixture
def make_vote() -> Callable[..., Vote]:
    """Factory for a single-choice vote targeting a candidate or an option."""
    counter = iter(range(1, 1_000_000))

    def _make(target: str, verdict: str | None = None, *, voting_id: str = "voting-test") -> Vote:
        index = next(counter)
        choice = CandidateChoice(candidate_id=target, verdict=verdict) if verdict else OptionChoice(value=target)
        return Vote(
            vote_id=f"vote-{index}",
            voting_id=voting_id,
            voter_id=f"voter-{index:06d}",
            choices=[choice],
            created_at=NOW,
        )

    return _make

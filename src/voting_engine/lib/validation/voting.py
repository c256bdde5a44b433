"""Voting registration rules.

Checks run in a fixed order and stop at the first broken rule: window
ordering, window length, candidate roster, then voter activity through the
``check_active_voters`` collaborator.
"""

from collections.abc import Awaitable, Callable, Mapping
from datetime import datetime

from voting_engine.core.config import Settings
from voting_engine.lib.tally.stats import VotingType
from voting_engine.lib.validation.errors import (
    InvalidWindowError,
    NoCandidatesError,
    StartedByCandidateError,
    TooFewCandidatesError,
    VotersNotFoundError,
    VotingTooLongError,
    VotingTooShortError,
)
from voting_engine.schemas.voting import ElectionParams, JudgmentParams, OptionParams

CheckActiveVoters = Callable[[list[str]], Awaitable[Mapping[str, bool]]]


def validate_window(starts_at: datetime, ends_at: datetime, settings: Settings) -> None:
    """Validate the voting window against the configured duration bounds.

    Raises:
        InvalidWindowError: If the voting ends before it starts.
        VotingTooShortError: If the window is shorter than the minimum.
        VotingTooLongError: If the window is longer than the maximum.
    """
    if ends_at < starts_at:
        raise InvalidWindowError
    duration = ends_at - starts_at
    if duration < settings.min_voting_duration:
        raise VotingTooShortError
    if duration > settings.max_voting_duration:
        raise VotingTooLongError


def validate_candidates(params: ElectionParams | JudgmentParams, settings: Settings) -> None:
    """Validate the candidate roster of a candidate-based voting.

    Raises:
        NoCandidatesError: If there are no candidates.
        TooFewCandidatesError: If an election has fewer than the minimum.
        StartedByCandidateError: If the starter is a candidate and that is
            not allowed.
    """
    if not params.candidates:
        raise NoCandidatesError
    if params.voting_type == VotingType.ELECTION and len(params.candidates) < settings.min_candidates_election:
        raise TooFewCandidatesError(settings.min_candidates_election)
    if not settings.can_candidate_start_voting and params.started_by in params.candidate_ids:
        raise StartedByCandidateError


async def validate_voting(
    params: ElectionParams | JudgmentParams | OptionParams,
    starts_at: datetime,
    settings: Settings,
    check_active_voters: CheckActiveVoters,
) -> None:
    """Validate a voting before it is registered.

    Args:
        params: Voting parameters.
        starts_at: Effective start of the voting (params may omit it).
        settings: Duration bounds and candidate flags.
        check_active_voters: Collaborator mapping voter ids to their
            active flag. Called once, after every other rule passed.

    Raises:
        VotingValidationError: The first broken rule.
    """
    validate_window(starts_at, params.ends_at, settings)

    voter_ids = [params.started_by]
    if isinstance(params, ElectionParams | JudgmentParams):
        validate_candidates(params, settings)
        voter_ids += [candidate_id for candidate_id in params.candidate_ids if candidate_id != params.started_by]

    checked = await check_active_voters(voter_ids)
    missing = [voter_id for voter_id in voter_ids if not (checked or {}).get(voter_id)]
    if missing:
        raise VotersNotFoundError(missing)

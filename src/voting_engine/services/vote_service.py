"""Vote service: validate and register votes."""

from collections.abc import Mapping
from functools import partial
from typing import Any

from loguru import logger

from voting_engine.core.collaborators import call_collaborator
from voting_engine.core.config import Settings, get_settings
from voting_engine.core.identifiers import generate_vote_id
from voting_engine.lib.validation.errors import VoterNotRegisteredError, VotingValidationError
from voting_engine.lib.validation.vote import validate_vote
from voting_engine.schemas.common import utc_now
from voting_engine.schemas.vote import Vote, VoteByUserParams, VoteParams
from voting_engine.schemas.voter import Voter


async def register_vote(
    params: VoteParams | Mapping[str, Any],
    *,
    settings: Settings | None = None,
) -> Vote:
    """Validate and persist a vote cast by a registered voter.

    Args:
        params: Vote parameters.
        settings: Overrides the process-wide settings.

    Returns:
        The persisted vote.

    Raises:
        VotingValidationError: If a validation rule is broken.
        CollaboratorError: If a collaborator fails.
    """
    settings = settings or get_settings()
    params = VoteParams.model_validate(params)
    now = utc_now()

    try:
        await validate_vote(
            params,
            settings,
            partial(call_collaborator, "retrieve_voting"),
            partial(call_collaborator, "has_voted"),
            now=now,
        )
    except VotingValidationError as e:
        logger.warning("Rejected vote by {} in {}: {}", params.voter_id, params.voting_id, e.reason)
        raise

    vote = Vote(**params.model_dump(), vote_id=generate_vote_id(), created_at=now)
    await call_collaborator("persist_vote", vote)
    logger.info("Registered vote {} in {}", vote.vote_id, vote.voting_id)
    return vote


async def register_vote_by_user_id(
    params: VoteByUserParams | Mapping[str, Any],
    *,
    settings: Settings | None = None,
) -> Vote:
    """Resolve the host user id to a voter, then register the vote.

    Args:
        params: Vote parameters carrying ``user_id`` instead of ``voter_id``.
        settings: Overrides the process-wide settings.

    Returns:
        The persisted vote.

    Raises:
        VoterNotRegisteredError: If no voter matches the user id.
    """
    params = VoteByUserParams.model_validate(params)
    found = await call_collaborator("retrieve_voter", params.user_id)
    if found is None:
        logger.warning("Rejected vote in {}: user {} is not a registered voter", params.voting_id, params.user_id)
        raise VoterNotRegisteredError
    voter = Voter.model_validate(found, from_attributes=not isinstance(found, Mapping))

    return await register_vote(
        VoteParams(voting_id=params.voting_id, voter_id=voter.voter_id, choices=params.choices),
        settings=settings,
    )

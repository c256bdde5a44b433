"""Voting service: validate and register new votings."""

from collections.abc import Mapping
from functools import partial
from typing import Any

from loguru import logger

from voting_engine.core.collaborators import call_collaborator
from voting_engine.core.config import Settings, get_settings
from voting_engine.core.identifiers import generate_voting_id
from voting_engine.lib.validation.errors import VotingValidationError
from voting_engine.lib.validation.voting import validate_voting
from voting_engine.schemas.common import utc_now
from voting_engine.schemas.voting import (
    VOTING_RECORD_TYPES,
    Election,
    ElectionParams,
    Judgment,
    JudgmentParams,
    OptionParams,
    OptionVoting,
    parse_voting_params,
)


# Set below; a stored record passed back in gets a fresh id and voter snapshot
_REGISTRATION_FIELDS = {"starts_at", "voting_id", "total_voters", "created_at", "updated_at"}


async def register_voting(
    params: ElectionParams | JudgmentParams | OptionParams | Mapping[str, Any],
    *,
    settings: Settings | None = None,
) -> Election | Judgment | OptionVoting:
    """Validate, snapshot the electorate size and persist a new voting.

    Args:
        params: Voting parameters; ``starts_at`` defaults to now.
        settings: Overrides the process-wide settings.

    Returns:
        The persisted voting.

    Raises:
        VotingValidationError: If a validation rule is broken.
        CollaboratorError: If a collaborator fails.
    """
    settings = settings or get_settings()
    params = parse_voting_params(params)
    now = utc_now()
    starts_at = params.starts_at or now

    try:
        await validate_voting(params, starts_at, settings, partial(call_collaborator, "check_active_voters"))
    except VotingValidationError as e:
        logger.warning("Rejected {} started by {}: {}", params.voting_type, params.started_by, e.reason)
        raise

    # Point-in-time snapshot; later voter churn does not change it
    total_voters = await call_collaborator("count_active_voters")

    record_type = VOTING_RECORD_TYPES[params.voting_type]
    voting = record_type(
        **params.model_dump(exclude=_REGISTRATION_FIELDS),
        starts_at=starts_at,
        voting_id=generate_voting_id(),
        total_voters=total_voters,
        created_at=now,
        updated_at=now,
    )
    await call_collaborator("persist_voting", voting)
    logger.info("Registered {} {} with {} voters", voting.voting_type, voting.voting_id, total_voters)
    return voting

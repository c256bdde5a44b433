"""Voter service: turn external user references into active voters."""

from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger

from voting_engine.core.collaborators import call_collaborator
from voting_engine.core.identifiers import generate_voter_id
from voting_engine.schemas.common import utc_now
from voting_engine.schemas.voter import UserInfo, Voter


async def register_voters(
    users: Iterable[UserInfo | Mapping[str, Any]],
    *,
    omit_returned_data: bool = False,
) -> list[Voter] | None:
    """Register one active voter per user and persist them in a single call.

    No deduplication is done; the caller must not submit the same user twice.

    Args:
        users: User references (``user_id`` and optional ``alias``).
        omit_returned_data: Return None instead of the created voters.

    Returns:
        The persisted voters, or None when ``omit_returned_data`` is set.
    """
    now = utc_now()
    voters = [
        Voter(
            voter_id=generate_voter_id(),
            user_id=user.user_id,
            alias=user.alias,
            status="active",
            created_at=now,
            updated_at=now,
        )
        for user in (UserInfo.model_validate(user) for user in users)
    ]
    await call_collaborator("persist_voters", voters)
    logger.info("Registered {} voters", len(voters))
    return None if omit_returned_data else voters

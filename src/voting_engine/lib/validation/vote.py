"""Vote casting rules.

Order matters: the self-vote rule needs no collaborator, then the voting is
retrieved, then checked for having ended, and only then is ``has_voted``
queried. Callers rely on this order to know which collaborators ran.

The ``has_voted`` check is read-then-act. Two concurrent casts by the same
voter can both pass it; preventing that is up to the persistence layer.
"""

from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any

from voting_engine.core.config import Settings
from voting_engine.lib.validation.errors import (
    DuplicateVoteError,
    SelfVoteError,
    VotingEndedError,
    VotingNotFoundError,
)
from voting_engine.schemas.vote import VoteParams
from voting_engine.schemas.voting import Election, Judgment, OptionVoting, parse_voting

RetrieveVoting = Callable[[str], Awaitable[Any]]
HasVoted = Callable[[str, str], Awaitable[bool]]


async def validate_vote(
    params: VoteParams,
    settings: Settings,
    retrieve_voting: RetrieveVoting,
    has_voted: HasVoted,
    now: datetime | None = None,
) -> Election | Judgment | OptionVoting:
    """Validate a vote before it is registered.

    Args:
        params: Vote parameters.
        settings: Provides the self-vote flag.
        retrieve_voting: Collaborator returning the voting or None.
        has_voted: Collaborator telling whether the voter already voted.
        now: Reference time for the ended check; defaults to now.

    Returns:
        The target voting.

    Raises:
        SelfVoteError: If the voter targets themselves and that is not allowed.
        VotingNotFoundError: If the voting does not exist.
        VotingEndedError: If the voting has ended.
        DuplicateVoteError: If the voter already voted in this voting.
    """
    if not settings.can_voter_vote_for_himself and params.voter_id in params.candidate_ids:
        raise SelfVoteError

    voting = parse_voting(await retrieve_voting(params.voting_id))
    if voting is None:
        raise VotingNotFoundError
    if voting.has_ended(now):
        raise VotingEndedError

    if await has_voted(params.voter_id, params.voting_id):
        raise DuplicateVoteError
    return voting

"""Voting summary service: tally a voting and resolve its verdicts.

Retrieves the voting and its votes concurrently, aggregates the votes onto a
zero-seeded stats map and, once the voting has ended, resolves the final
verdict of every candidate or option.
"""

import asyncio
import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from loguru import logger

from voting_engine.core.collaborators import call_collaborator
from voting_engine.lib.tally import aggregate, filter_declared_options, resolve_verdicts, seed_stats
from voting_engine.lib.validation.errors import CollaboratorError, VotingNotFoundError
from voting_engine.schemas.common import utc_now
from voting_engine.schemas.summary import VotingSummary
from voting_engine.schemas.vote import Vote, parse_votes
from voting_engine.schemas.voting import Election, Judgment, OptionVoting, parse_voting


def required_votes(voting: Election | Judgment | OptionVoting) -> int:
    """Number of votes a candidate or option needs for a decisive verdict.

    Args:
        voting: The voting record.

    Returns:
        ``ceil(required_participation_percentage * total_voters)``, or ``0``
        when the voting has no quorum.
    """
    percentage = voting.required_participation_percentage or 0
    return math.ceil(percentage * voting.total_voters)


def _normalize_votes(
    voting: Election | Judgment | OptionVoting,
    votes: Any,
) -> list[Vote] | Mapping[str, Any] | None:
    if votes is None or isinstance(votes, Mapping):
        return votes
    parsed = parse_votes(votes)
    if isinstance(voting, OptionVoting) and voting.options:
        return filter_declared_options(parsed, voting.options)
    return parsed


async def retrieve_voting_summary(voting_id: str, *, now: datetime | None = None) -> VotingSummary:
    """Build the summary of a voting.

    Args:
        voting_id: The voting to summarize.
        now: Reference time deciding whether the voting has ended.

    Returns:
        Summary with ``state="partial"`` and no verdict while the voting is
        open, or ``state="final"`` with the resolved verdicts.

    Raises:
        CollaboratorError: If retrieving the voting or its votes failed.
        VotingNotFoundError: If the voting does not exist.
    """
    voting_result, votes_result = await asyncio.gather(
        call_collaborator("retrieve_voting", voting_id),
        call_collaborator("retrieve_votes", voting_id),
        return_exceptions=True,
    )
    if isinstance(voting_result, BaseException):
        msg = f"Unable to retrieve voting: {voting_result}"
        raise CollaboratorError(msg, slot="retrieve_voting") from voting_result
    if isinstance(votes_result, BaseException):
        msg = f"Unable to retrieve votes: {votes_result}"
        raise CollaboratorError(msg, slot="retrieve_votes") from votes_result

    voting = parse_voting(voting_result)
    if voting is None:
        raise VotingNotFoundError("Voting not found")

    stats = aggregate(voting.voting_type, _normalize_votes(voting, votes_result), seed=seed_stats(voting))
    if not voting.has_ended(now):
        logger.info("Partial summary for {}", voting_id)
        return VotingSummary(voting=voting, stats=stats, state="partial")

    verdict = resolve_verdicts(
        voting.voting_type,
        stats,
        required_votes=required_votes(voting),
        max_elected_candidates=getattr(voting, "max_elected_candidates", None),
    )
    logger.info("Final summary for {}", voting_id)
    return VotingSummary(voting=voting, stats=stats, state="final", verdict=verdict)

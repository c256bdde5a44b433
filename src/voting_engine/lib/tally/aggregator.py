"""Tally aggregation: turn votes or pre-aggregated counters into a stats map.

The retrieval collaborator may hand back either the raw vote records or a
stats map the store keeps as running counters; both produce the same result.
"""

import copy
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from loguru import logger

from voting_engine.lib.tally.stats import COUNTERS, StatsMap, VotingType, default_stats
from voting_engine.schemas.vote import CandidateChoice, OptionChoice, Vote


def filter_declared_options(votes: Iterable[Vote], options: Sequence[str]) -> list[Vote]:
    """Drop option choices whose value is not one of the declared options.

    Args:
        votes: Votes of an option poll.
        options: Declared options of the poll.

    Returns:
        New vote records carrying only the choices for declared options.
    """
    allowed = set(options)
    return [
        vote.model_copy(
            update={
                "choices": [
                    choice for choice in vote.choices if isinstance(choice, OptionChoice) and choice.value in allowed
                ]
            }
        )
        for vote in votes
    ]


def _count_votes(kind: VotingType, stats: StatsMap, votes: Iterable[Vote]) -> None:
    for vote in votes:
        for choice in vote.choices:
            if kind is VotingType.OPTION:
                if not isinstance(choice, OptionChoice):
                    logger.warning("Skipping candidate choice in option vote {}", vote.vote_id)
                    continue
                stats[choice.value] = stats.get(choice.value, 0) + 1  # type: ignore[operator]
                continue

            if not isinstance(choice, CandidateChoice) or choice.verdict not in COUNTERS[kind]:
                logger.warning("Skipping choice {!r} not valid for {} vote {}", choice, kind, vote.vote_id)
                continue
            record = stats.setdefault(choice.candidate_id, default_stats(kind))
            record[choice.verdict] += 1  # type: ignore[index]


def _as_count(value: Any) -> int | None:
    # Document stores may hand back integral counts as floats
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _merge_stats(kind: VotingType, stats: StatsMap, source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        if kind is VotingType.OPTION:
            count = _as_count(value)
            if count is None:
                logger.warning("Skipping non-integer option count for {!r}", key)
                continue
            stats[key] = stats.get(key, 0) + count  # type: ignore[operator]
            continue

        if not isinstance(value, Mapping):
            logger.warning("Skipping malformed {} stats for {!r}", kind, key)
            continue
        record = stats.setdefault(key, default_stats(kind))
        for counter, raw in value.items():
            count = _as_count(raw)
            if counter not in COUNTERS[kind] or count is None:
                logger.warning("Skipping {} counter {!r}={!r} for {!r}", kind, counter, raw, key)
                continue
            record[counter] += count  # type: ignore[index]


def aggregate(
    voting_type: str,
    source: Sequence[Vote] | Mapping[str, Any] | None,
    seed: StatsMap | None = None,
) -> StatsMap:
    """Aggregate votes into a per-candidate (or per-option) stats map.

    Args:
        voting_type: Type of the voting the votes belong to.
        source: Raw vote records, a pre-aggregated stats map, or None.
        seed: Optional zero-seeded map to merge onto. It is copied, never
            mutated.

    Returns:
        The aggregated stats map.
    """
    kind = VotingType(voting_type)
    stats: StatsMap = copy.deepcopy(seed) if seed else {}
    if source is None:
        return stats

    if isinstance(source, Mapping):
        _merge_stats(kind, stats, source)
    else:
        _count_votes(kind, stats, source)
    return stats

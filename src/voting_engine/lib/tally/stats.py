"""Per-candidate statistic shapes for each voting variant.

Elections count ``elect``/``pass`` verdicts per candidate, judgments count
``guilty``/``innocent`` verdicts per candidate, and option polls keep a plain
integer count per option.
"""

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from voting_engine.schemas.voting import Election, Judgment, OptionVoting


class VotingType(StrEnum):
    """Voting variant tag."""

    ELECTION = "election"
    JUDGMENT = "judgment"
    OPTION = "option"


CANDIDATE_VOTING_TYPES = frozenset({VotingType.ELECTION, VotingType.JUDGMENT})

# Counter names per candidate-based variant, in display order
COUNTERS: dict[VotingType, tuple[str, str]] = {
    VotingType.ELECTION: ("elect", "pass"),
    VotingType.JUDGMENT: ("guilty", "innocent"),
}

CandidateStats = dict[str, int]
OptionStats = int
StatsMap = dict[str, CandidateStats | OptionStats]


def is_candidate_based(voting_type: str) -> bool:
    """Whether choices of this voting type target a fixed roster of candidates."""
    return VotingType(voting_type) in CANDIDATE_VOTING_TYPES


def default_stats(voting_type: str) -> CandidateStats | OptionStats:
    """Return a fresh zero-record for the given voting type.

    Args:
        voting_type: One of ``election``, ``judgment`` or ``option``.

    Returns:
        A new counter dict for candidate-based types, ``0`` for option polls.
    """
    kind = VotingType(voting_type)
    if kind is VotingType.OPTION:
        return 0
    return dict.fromkeys(COUNTERS[kind], 0)


def seed_stats(voting: "Election | Judgment | OptionVoting") -> StatsMap:
    """Build a stats map with a zero-record for every declared candidate or option."""
    if is_candidate_based(voting.voting_type):
        keys = [candidate.candidate_id for candidate in voting.candidates]  # type: ignore[union-attr]
    else:
        keys = list(voting.options)  # type: ignore[union-attr]
    return {key: default_stats(voting.voting_type) for key in keys}

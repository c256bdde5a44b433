"""Verdict resolution for ended votings.

Each candidate (or option) first gets a provisional verdict from its own
counters and the quorum. Option polls and single-winner elections mark
every winning entry as ``pending``; the tie-break then elects the entry with
the strictly highest count, or nobody when the top two counts are equal.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

from voting_engine.lib.tally.stats import CandidateStats, OptionStats, VotingType


class Verdict(StrEnum):
    """Resolved outcome for a candidate or option."""

    ELECTED = "elected"
    NOT_ELECTED = "not elected"
    GUILTY = "guilty"
    INNOCENT = "innocent"
    UNDECIDED = "undecided"
    SELECTED = "selected"
    REJECTED = "rejected"
    # Transient, never returned by resolve_verdicts
    PENDING = "pending"


# Verdicts for a pending entry that wins or loses the single-winner tie-break
_TIE_BREAK_OUTCOMES: dict[VotingType, tuple[Verdict, Verdict]] = {
    VotingType.ELECTION: (Verdict.ELECTED, Verdict.NOT_ELECTED),
    VotingType.OPTION: (Verdict.SELECTED, Verdict.REJECTED),
}


@dataclass
class PartialVerdict:
    """Provisional verdict of one stats key, before the tie-break."""

    key: str
    verdict: Verdict
    votes: int | None = None


def _has_quorum(total: int, required_votes: int) -> bool:
    return not required_votes or total >= required_votes


def _election_verdict(key: str, stats: CandidateStats, required_votes: int, single_winner: bool) -> PartialVerdict:
    elect, pass_ = stats.get("elect", 0), stats.get("pass", 0)
    if not _has_quorum(elect + pass_, required_votes):
        return PartialVerdict(key, Verdict.UNDECIDED)
    if elect > pass_:
        if single_winner:
            return PartialVerdict(key, Verdict.PENDING, elect)
        return PartialVerdict(key, Verdict.ELECTED)
    return PartialVerdict(key, Verdict.NOT_ELECTED)


def _judgment_verdict(key: str, stats: CandidateStats, required_votes: int) -> PartialVerdict:
    guilty, innocent = stats.get("guilty", 0), stats.get("innocent", 0)
    if not _has_quorum(guilty + innocent, required_votes):
        return PartialVerdict(key, Verdict.UNDECIDED)
    if guilty > innocent:
        return PartialVerdict(key, Verdict.GUILTY)
    if innocent > guilty:
        return PartialVerdict(key, Verdict.INNOCENT)
    return PartialVerdict(key, Verdict.UNDECIDED)


def _option_verdict(key: str, count: OptionStats, required_votes: int, single_winner: bool) -> PartialVerdict:
    if not count or not _has_quorum(count, required_votes):
        return PartialVerdict(key, Verdict.REJECTED)
    if single_winner:
        return PartialVerdict(key, Verdict.PENDING, count)
    return PartialVerdict(key, Verdict.SELECTED)


def generate_partial_verdicts(
    voting_type: str,
    stats: Mapping[str, CandidateStats | OptionStats],
    required_votes: int = 0,
    single_winner: bool = False,
) -> list[PartialVerdict]:
    """Compute the provisional verdict of every stats key.

    Args:
        voting_type: Type of the voting the stats belong to.
        stats: Aggregated stats map.
        required_votes: Minimum number of votes for a decisive verdict;
            ``0`` disables the quorum.
        single_winner: Mark winning entries ``pending`` for the tie-break.

    Returns:
        One PartialVerdict per stats key, in stats order.
    """
    kind = VotingType(voting_type)
    verdicts: list[PartialVerdict] = []
    for key, record in stats.items():
        if kind is VotingType.ELECTION:
            verdicts.append(_election_verdict(key, record, required_votes, single_winner))  # type: ignore[arg-type]
        elif kind is VotingType.JUDGMENT:
            verdicts.append(_judgment_verdict(key, record, required_votes))  # type: ignore[arg-type]
        else:
            verdicts.append(_option_verdict(key, record, required_votes, single_winner))  # type: ignore[arg-type]
    return verdicts


def find_single_winner(verdicts: list[PartialVerdict]) -> str | None:
    """Return the key of the unique top pending entry, or None on a tie.

    With no pending entries the (absent) top two counts compare equal, so
    there is no winner; a single pending entry always wins.
    """
    pending = sorted(
        (verdict for verdict in verdicts if verdict.verdict is Verdict.PENDING),
        key=lambda verdict: verdict.votes or 0,
        reverse=True,
    )
    first = pending[0].votes if pending else None
    second = pending[1].votes if len(pending) > 1 else None
    if first == second:
        return None
    return pending[0].key


def resolve_verdicts(
    voting_type: str,
    stats: Mapping[str, CandidateStats | OptionStats],
    required_votes: int = 0,
    max_elected_candidates: int | None = None,
) -> dict[str, Verdict]:
    """Resolve the final verdict of every candidate or option.

    Args:
        voting_type: Type of the voting the stats belong to.
        stats: Aggregated stats map of the ended voting.
        required_votes: Quorum in votes; ``0`` means no quorum.
        max_elected_candidates: For elections, ``1`` enables the
            single-winner tie-break. Option polls always go through it.

    Returns:
        Mapping of stats key to its final verdict. Never contains
        ``pending``.
    """
    kind = VotingType(voting_type)
    if kind is VotingType.ELECTION:
        single_winner = max_elected_candidates == 1
    else:
        single_winner = kind is VotingType.OPTION

    verdicts = generate_partial_verdicts(kind, stats, required_votes, single_winner)
    if not single_winner:
        return {verdict.key: verdict.verdict for verdict in verdicts}

    winner = find_single_winner(verdicts)
    won, lost = _TIE_BREAK_OUTCOMES[kind]
    final: dict[str, Verdict] = {}
    for verdict in verdicts:
        if verdict.verdict is Verdict.PENDING:
            final[verdict.key] = won if verdict.key == winner else lost
        else:
            final[verdict.key] = verdict.verdict
    return final

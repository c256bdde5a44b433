"""Tally library: stats shapes, vote aggregation and verdict resolution.

Public API:
    - VotingType: Voting variant tag
    - default_stats / seed_stats: Zero-records and zero-seeded stats maps
    - aggregate: Merge raw votes or pre-aggregated stats into a stats map
    - filter_declared_options: Drop option choices for undeclared options
    - resolve_verdicts: Final verdicts with quorum and single-winner tie-break
    - Verdict: Verdict enum
"""

from voting_engine.lib.tally.aggregator import aggregate, filter_declared_options
from voting_engine.lib.tally.stats import (
    COUNTERS,
    CandidateStats,
    OptionStats,
    StatsMap,
    VotingType,
    default_stats,
    is_candidate_based,
    seed_stats,
)
from voting_engine.lib.tally.verdict import (
    PartialVerdict,
    Verdict,
    find_single_winner,
    generate_partial_verdicts,
    resolve_verdicts,
)

__all__ = [
    "COUNTERS",
    "CandidateStats",
    "OptionStats",
    "PartialVerdict",
    "StatsMap",
    "Verdict",
    "VotingType",
    "aggregate",
    "default_stats",
    "filter_declared_options",
    "find_single_winner",
    "generate_partial_verdicts",
    "is_candidate_based",
    "resolve_verdicts",
    "seed_stats",
]

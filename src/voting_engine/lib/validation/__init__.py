"""Validation library: rules gating voting registration and vote casting.

Public API:
    - validate_voting: Window, roster and voter activity rules for a voting
    - validate_window / validate_candidates: Individual voting rules
    - validate_vote: Self-vote, existence, open state and duplicate rules
    - VotingEngineError and subclasses: Error taxonomy
"""

from voting_engine.lib.validation.errors import (
    CollaboratorError,
    CollaboratorNotImplementedError,
    DuplicateVoteError,
    InvalidWindowError,
    NoCandidatesError,
    SelfVoteError,
    StartedByCandidateError,
    TooFewCandidatesError,
    VoterNotRegisteredError,
    VotersNotFoundError,
    VotingEndedError,
    VotingEngineError,
    VotingNotFoundError,
    VotingTooLongError,
    VotingTooShortError,
    VotingValidationError,
)
from voting_engine.lib.validation.vote import validate_vote
from voting_engine.lib.validation.voting import validate_candidates, validate_voting, validate_window

__all__ = [
    "CollaboratorError",
    "CollaboratorNotImplementedError",
    "DuplicateVoteError",
    "InvalidWindowError",
    "NoCandidatesError",
    "SelfVoteError",
    "StartedByCandidateError",
    "TooFewCandidatesError",
    "VoterNotRegisteredError",
    "VotersNotFoundError",
    "VotingEndedError",
    "VotingEngineError",
    "VotingNotFoundError",
    "VotingTooLongError",
    "VotingTooShortError",
    "VotingValidationError",
    "validate_candidates",
    "validate_vote",
    "validate_voting",
    "validate_window",
]

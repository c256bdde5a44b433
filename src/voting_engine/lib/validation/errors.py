"""Error types raised by the voting engine.

Validation errors are deterministic rejections of a request. Collaborator
errors wrap failures of the host-supplied persistence and retrieval
operations.
"""


class VotingEngineError(Exception):
    """Base class for every error raised by the engine."""


class VotingValidationError(VotingEngineError):
    """Raised when a voting or vote request breaks a validation rule.

    Args:
        reason: Human-readable description of the broken rule.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class InvalidWindowError(VotingValidationError):
    """Raised when a voting ends before it starts."""

    def __init__(self) -> None:
        super().__init__("Voting cannot end before it starts")


class VotingTooShortError(VotingValidationError):
    """Raised when the voting window is shorter than the configured minimum."""

    def __init__(self) -> None:
        super().__init__("Voting duration is too short")


class VotingTooLongError(VotingValidationError):
    """Raised when the voting window is longer than the configured maximum."""

    def __init__(self) -> None:
        super().__init__("Voting duration is too long")


class NoCandidatesError(VotingValidationError):
    """Raised when a candidate-based voting has no candidates."""

    def __init__(self) -> None:
        super().__init__("Voting must have at least one candidate")


class TooFewCandidatesError(VotingValidationError):
    """Raised when an election has fewer candidates than the configured minimum."""

    def __init__(self, minimum: int) -> None:
        self.minimum = minimum
        super().__init__(f"Election must have at least {minimum} candidates")


class StartedByCandidateError(VotingValidationError):
    """Raised when the voter starting a voting is one of its candidates."""

    def __init__(self) -> None:
        super().__init__("Voting cannot be started by a candidate")


class VotersNotFoundError(VotingValidationError):
    """Raised when referenced voters are missing or inactive.

    Args:
        voter_ids: Identifiers that were not reported as active.
    """

    def __init__(self, voter_ids: list[str]) -> None:
        self.voter_ids = voter_ids
        super().__init__(f"Voters {', '.join(voter_ids)} do not exist")


class SelfVoteError(VotingValidationError):
    """Raised when a voter targets themselves in a vote."""

    def __init__(self) -> None:
        super().__init__("Voter cannot vote for themselves")


class VotingNotFoundError(VotingValidationError):
    """Raised when the target voting cannot be retrieved."""

    def __init__(self, reason: str = "Voting does not exist") -> None:
        super().__init__(reason)


class VotingEndedError(VotingValidationError):
    """Raised when casting a vote on a voting that has already ended."""

    def __init__(self) -> None:
        super().__init__("Voting has ended")


class DuplicateVoteError(VotingValidationError):
    """Raised when a voter has already voted in the target voting."""

    def __init__(self) -> None:
        super().__init__("Voter cannot vote again")


class VoterNotRegisteredError(VotingValidationError):
    """Raised when no voter matches the caller-supplied user identifier."""

    def __init__(self) -> None:
        super().__init__("Voter not registered")


class CollaboratorError(VotingEngineError):
    """Raised when a host-supplied collaborator fails.

    Args:
        message: Human-readable error description.
        slot: Name of the failing collaborator, when known.
    """

    def __init__(self, message: str, slot: str | None = None) -> None:
        self.message = message
        self.slot = slot
        super().__init__(message)


class CollaboratorNotImplementedError(CollaboratorError):
    """Raised by the default stub of a collaborator slot that was never installed."""

    def __init__(self, slot: str) -> None:
        super().__init__(f"Not implemented: {slot}", slot=slot)

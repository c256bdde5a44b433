"""Host-supplied collaborators for persistence and retrieval.

The engine owns no storage. Every read and write goes through one of the
async callables installed here by the host application. Until a slot is
installed it holds a stub that raises ``CollaboratorNotImplementedError``.

The registry is process-wide: install with :func:`set_collaborators`,
restore the stubs with :func:`reset_collaborators` and inspect the wiring
with :func:`check_collaborators`.
"""

import dataclasses
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger

from voting_engine.lib.validation.errors import (
    CollaboratorError,
    CollaboratorNotImplementedError,
    VotingEngineError,
)

# Callables may be coroutine functions or plain functions returning a value.
CollaboratorFn = Callable[..., Awaitable[Any] | Any]

SLOTS: tuple[str, ...] = (
    "persist_voting",
    "persist_voters",
    "persist_vote",
    "retrieve_voting",
    "retrieve_voter",
    "retrieve_votes",
    "check_active_voters",
    "count_active_voters",
    "has_voted",
)


@dataclass(frozen=True)
class Collaborators:
    """One async callable per persistence or retrieval operation.

    Attributes:
        persist_voting: ``(voting) -> Any``
        persist_voters: ``(voters) -> Any``
        persist_vote: ``(vote) -> Any``
        retrieve_voting: ``(voting_id) -> voting | None``
        retrieve_voter: ``(user_id) -> voter | None``
        retrieve_votes: ``(voting_id) -> list[vote] | stats map | None``
        check_active_voters: ``(voter_ids) -> dict[voter_id, bool]``
        count_active_voters: ``() -> int``
        has_voted: ``(voter_id, voting_id) -> bool``
    """

    persist_voting: CollaboratorFn
    persist_voters: CollaboratorFn
    persist_vote: CollaboratorFn
    retrieve_voting: CollaboratorFn
    retrieve_voter: CollaboratorFn
    retrieve_votes: CollaboratorFn
    check_active_voters: CollaboratorFn
    count_active_voters: CollaboratorFn
    has_voted: CollaboratorFn


def _not_implemented(slot: str) -> CollaboratorFn:
    async def _stub(*args: Any, **kwargs: Any) -> Any:
        raise CollaboratorNotImplementedError(slot)

    _stub.__name__ = slot
    return _stub


DEFAULT_COLLABORATORS = Collaborators(**{slot: _not_implemented(slot) for slot in SLOTS})

_collaborators: Collaborators = DEFAULT_COLLABORATORS


def get_collaborators() -> Collaborators:
    """Return the collaborators currently installed."""
    return _collaborators


def set_collaborators(collaborators: Collaborators | None = None, **overrides: CollaboratorFn) -> Collaborators:
    """Install collaborators.

    Args:
        collaborators: Full replacement registry. When None, the overrides
            are merged onto the collaborators currently installed.
        **overrides: Individual slots to replace, by slot name.

    Returns:
        The collaborators now installed.

    Raises:
        ValueError: If an override names an unknown slot.
    """
    global _collaborators
    unknown = sorted(set(overrides) - set(SLOTS))
    if unknown:
        msg = f"Unknown collaborator slots: {unknown}. Available: {list(SLOTS)}"
        raise ValueError(msg)

    base = collaborators if collaborators is not None else _collaborators
    _collaborators = dataclasses.replace(base, **overrides) if overrides else base
    logger.debug("Installed collaborators: {}", sorted(overrides) or "full registry")
    return _collaborators


def reset_collaborators() -> Collaborators:
    """Restore the not-implemented stub in every slot."""
    return set_collaborators(DEFAULT_COLLABORATORS)


def check_collaborators() -> dict[str, bool]:
    """Report, per slot, whether a real collaborator has been installed."""
    return {slot: getattr(_collaborators, slot) is not getattr(DEFAULT_COLLABORATORS, slot) for slot in SLOTS}


async def call_collaborator(slot: str, *args: Any) -> Any:
    """Invoke the collaborator installed in ``slot``.

    Engine errors raised by the collaborator propagate unchanged. Any other
    exception is re-raised as a ``CollaboratorError`` whose message carries
    the ``Thrown error:`` prefix.

    Args:
        slot: Slot name, one of ``SLOTS``.
        *args: Positional arguments forwarded to the collaborator.

    Returns:
        Whatever the collaborator returned.
    """
    collaborator = getattr(_collaborators, slot)
    logger.debug("Calling collaborator {}", slot)
    try:
        result = collaborator(*args)
        if inspect.isawaitable(result):
            result = await result
    except VotingEngineError:
        raise
    except Exception as exc:
        raise CollaboratorError(f"Thrown error: {exc}", slot=slot) from exc
    return result

"""Voting engine: validation and verdict resolution for polls.

Public API:
    - set_collaborators / reset_collaborators / check_collaborators:
      Install and inspect the host persistence and retrieval callables
    - Settings / get_settings / configure: Run-time configuration
    - register_voters: Create active voters from user references
    - register_voting: Validate and open an election, judgment or option poll
    - register_vote / register_vote_by_user_id: Validate and cast a vote
    - retrieve_voting_summary: Partial or final tally with verdicts
"""

from voting_engine.core.collaborators import (
    DEFAULT_COLLABORATORS,
    Collaborators,
    check_collaborators,
    get_collaborators,
    reset_collaborators,
    set_collaborators,
)
from voting_engine.core.config import Settings, configure, get_settings
from voting_engine.services.vote_service import register_vote, register_vote_by_user_id
from voting_engine.services.voter_service import register_voters
from voting_engine.services.voting_service import register_voting
from voting_engine.services.voting_summary_service import retrieve_voting_summary

__all__ = [
    "DEFAULT_COLLABORATORS",
    "Collaborators",
    "Settings",
    "check_collaborators",
    "configure",
    "get_collaborators",
    "get_settings",
    "register_vote",
    "register_vote_by_user_id",
    "register_voters",
    "register_voting",
    "reset_collaborators",
    "retrieve_voting_summary",
    "set_collaborators",
]

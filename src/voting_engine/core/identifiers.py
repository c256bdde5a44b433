"""Prefixed identifier generation for voters, votings and votes."""

import uuid


def _generate(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex}"


def generate_voter_id() -> str:
    """Return a new public voter identifier (``voter-<hex>``)."""
    return _generate("voter")


def generate_voting_id() -> str:
    """Return a new voting identifier (``voting-<hex>``)."""
    return _generate("voting")


def generate_vote_id() -> str:
    """Return a new vote identifier (``vote-<hex>``)."""
    return _generate("vote")

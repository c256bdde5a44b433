"""Unit tests for the voting summary service module."""

from unittest.mock import AsyncMock

import pytest

from voting_engine.core.collaborators import set_collaborators
from voting_engine.lib.tally import Verdict
from voting_engine.lib.validation.errors import (
    CollaboratorError,
    CollaboratorNotImplementedError,
    VotingNotFoundError,
)
from voting_engine.services.voting_summary_service import required_votes, retrieve_voting_summary

CANDIDATE_A = "voter-111111"
CANDIDATE_B = "voter-222222"


def _install_store(voting: object, votes: object) -> dict[str, AsyncMock]:
    mocks = {
        "retrieve_voting": AsyncMock(return_value=voting),
        "retrieve_votes": AsyncMock(return_value=votes),
    }
    set_collaborators(**mocks)
    return mocks


class TestRequiredVotes:
    """Tests for required_votes()."""

    def test_no_quorum(self, make_voting):
        assert required_votes(make_voting("election")) == 0

    def test_rounds_up(self, make_voting):
        voting = make_voting("election", required_participation_percentage=0.5, total_voters=3)
        assert required_votes(voting) == 2


class TestRetrieveVotingSummary:
    """Tests for retrieve_voting_summary()."""

    @pytest.mark.asyncio
    async def test_partial_summary_has_no_verdict(self, make_voting, make_vote):
        mocks = _install_store(make_voting("election"), [make_vote(CANDIDATE_A, "elect")])

        summary = await retrieve_voting_summary("voting-test")

        assert summary.state == "partial"
        assert summary.verdict is None
        assert "verdict" not in summary.model_dump()
        assert summary.stats == {
            CANDIDATE_A: {"elect": 1, "pass": 0},
            CANDIDATE_B: {"elect": 0, "pass": 0},
        }
        mocks["retrieve_voting"].assert_awaited_once_with("voting-test")
        mocks["retrieve_votes"].assert_awaited_once_with("voting-test")

    @pytest.mark.asyncio
    async def test_final_election_single_winner(self, make_voting, make_vote):
        votes = [
            make_vote(CANDIDATE_A, "elect"),
            make_vote(CANDIDATE_A, "elect"),
            make_vote(CANDIDATE_A, "elect"),
            make_vote(CANDIDATE_B, "elect"),
            make_vote(CANDIDATE_B, "elect"),
        ]
        _install_store(make_voting("election", ended=True), votes)

        summary = await retrieve_voting_summary("voting-test")

        assert summary.state == "final"
        assert summary.stats[CANDIDATE_A] == {"elect": 3, "pass": 0}
        assert summary.verdict == {CANDIDATE_A: Verdict.ELECTED, CANDIDATE_B: Verdict.NOT_ELECTED}
        assert summary.model_dump(mode="json")["verdict"] == {CANDIDATE_A: "elected", CANDIDATE_B: "not elected"}

    @pytest.mark.asyncio
    async def test_final_election_tie_elects_nobody(self, make_voting, make_vote):
        votes = [make_vote(CANDIDATE_A, "elect"), make_vote(CANDIDATE_B, "elect")]
        _install_store(make_voting("election", ended=True), votes)

        summary = await retrieve_voting_summary("voting-test")

        assert summary.verdict == {CANDIDATE_A: Verdict.NOT_ELECTED, CANDIDATE_B: Verdict.NOT_ELECTED}

    @pytest.mark.asyncio
    async def test_final_election_multiple_winners(self, make_voting, make_vote):
        votes = [make_vote(CANDIDATE_A, "elect"), make_vote(CANDIDATE_B, "elect")]
        _install_store(make_voting("election", ended=True, max_elected_candidates=2), votes)

        summary = await retrieve_voting_summary("voting-test")

        assert summary.verdict == {CANDIDATE_A: Verdict.ELECTED, CANDIDATE_B: Verdict.ELECTED}

    @pytest.mark.asyncio
    async def test_final_judgment(self, make_voting, make_vote):
        votes = [
            make_vote(CANDIDATE_A, "guilty"),
            make_vote(CANDIDATE_A, "guilty"),
            make_vote(CANDIDATE_A, "innocent"),
            make_vote(CANDIDATE_B, "guilty"),
            make_vote(CANDIDATE_B, "innocent"),
        ]
        _install_store(make_voting("judgment", ended=True), votes)

        summary = await retrieve_voting_summary("voting-test")

        assert summary.stats == {
            CANDIDATE_A: {"guilty": 2, "innocent": 1},
            CANDIDATE_B: {"guilty": 1, "innocent": 1},
        }
        assert summary.verdict == {CANDIDATE_A: Verdict.GUILTY, CANDIDATE_B: Verdict.UNDECIDED}

    @pytest.mark.asyncio
    async def test_quorum_not_reached(self, make_voting, make_vote):
        voting = make_voting("judgment", ended=True, required_participation_percentage=1, total_voters=3)
        votes = [make_vote(CANDIDATE_A, "guilty"), make_vote(CANDIDATE_A, "guilty")]
        _install_store(voting, votes)

        summary = await retrieve_voting_summary("voting-test")

        assert summary.verdict == {CANDIDATE_A: Verdict.UNDECIDED, CANDIDATE_B: Verdict.UNDECIDED}

    @pytest.mark.asyncio
    async def test_zero_vote_candidates_resolved(self, make_voting):
        _install_store(make_voting("election", ended=True), [])

        summary = await retrieve_voting_summary("voting-test")

        assert summary.stats == {
            CANDIDATE_A: {"elect": 0, "pass": 0},
            CANDIDATE_B: {"elect": 0, "pass": 0},
        }
        assert summary.verdict == {CANDIDATE_A: Verdict.NOT_ELECTED, CANDIDATE_B: Verdict.NOT_ELECTED}

    @pytest.mark.asyncio
    async def test_missing_votes_treated_as_empty(self, make_voting):
        _install_store(make_voting("judgment"), None)
        summary = await retrieve_voting_summary("voting-test")
        assert summary.stats[CANDIDATE_A] == {"guilty": 0, "innocent": 0}

    @pytest.mark.asyncio
    async def test_pre_aggregated_stats(self, make_voting):
        stats = {CANDIDATE_A: {"elect": 4, "pass": 1}, CANDIDATE_B: {"elect": 1, "pass": 3}}
        _install_store(make_voting("election", ended=True), stats)

        summary = await retrieve_voting_summary("voting-test")

        assert summary.stats == stats
        assert summary.verdict == {CANDIDATE_A: Verdict.ELECTED, CANDIDATE_B: Verdict.NOT_ELECTED}

    @pytest.mark.asyncio
    async def test_voting_as_mapping(self, make_voting, make_vote):
        _install_store(make_voting("option").model_dump(), [make_vote("yes")])
        summary = await retrieve_voting_summary("voting-test")
        assert summary.voting.voting_type == "option"
        assert summary.stats == {"yes": 1, "no": 0}

    @pytest.mark.asyncio
    async def test_option_poll_ignores_undeclared_values(self, make_voting, make_vote):
        votes = [make_vote("yes"), make_vote("yes"), make_vote("maybe")]
        _install_store(make_voting("option", ended=True), votes)

        summary = await retrieve_voting_summary("voting-test")

        assert summary.stats == {"yes": 2, "no": 0}
        assert summary.verdict == {"yes": Verdict.SELECTED, "no": Verdict.REJECTED}

    @pytest.mark.asyncio
    async def test_option_poll_selects_single_option(self, make_voting, make_vote):
        votes = [make_vote("yes"), make_vote("yes"), make_vote("no")]
        _install_store(make_voting("option", ended=True, only_one_selected=False), votes)

        summary = await retrieve_voting_summary("voting-test")

        assert summary.verdict == {"yes": Verdict.SELECTED, "no": Verdict.REJECTED}

    @pytest.mark.asyncio
    async def test_option_poll_tie_selects_nothing(self, make_voting, make_vote):
        votes = [make_vote("yes"), make_vote("no")]
        _install_store(make_voting("option", ended=True), votes)

        summary = await retrieve_voting_summary("voting-test")

        assert summary.verdict == {"yes": Verdict.REJECTED, "no": Verdict.REJECTED}

    @pytest.mark.asyncio
    async def test_voting_not_found(self):
        _install_store(None, [])
        with pytest.raises(VotingNotFoundError, match="Voting not found"):
            await retrieve_voting_summary("voting-missing")

    @pytest.mark.asyncio
    async def test_voting_retrieval_error(self, make_vote):
        mocks = _install_store(None, [make_vote(CANDIDATE_A, "elect")])
        mocks["retrieve_voting"].side_effect = RuntimeError("Generic error")
        with pytest.raises(CollaboratorError, match="Unable to retrieve voting: Thrown error: Generic error"):
            await retrieve_voting_summary("voting-test")
        mocks["retrieve_votes"].assert_awaited_once_with("voting-test")

    @pytest.mark.asyncio
    async def test_votes_retrieval_error(self, make_voting):
        mocks = _install_store(make_voting("election"), None)
        mocks["retrieve_votes"].side_effect = RuntimeError("Generic error")
        match = "Unable to retrieve votes: Thrown error: Generic error"
        with pytest.raises(CollaboratorError, match=match) as exc_info:
            await retrieve_voting_summary("voting-test")
        assert exc_info.value.slot == "retrieve_votes"

    @pytest.mark.asyncio
    async def test_not_implemented(self):
        match = "Unable to retrieve voting: Not implemented: retrieve_voting"
        with pytest.raises(CollaboratorError, match=match) as exc_info:
            await retrieve_voting_summary("voting-test")
        assert isinstance(exc_info.value.__cause__, CollaboratorNotImplementedError)

"""Pydantic v2 schema for the voting summary response."""

from typing import Any, Literal

from pydantic import BaseModel, SerializerFunctionWrapHandler, model_serializer

from voting_engine.lib.tally.stats import StatsMap
from voting_engine.lib.tally.verdict import Verdict
from voting_engine.schemas.voting import VotingData


class VotingSummary(BaseModel):
    """Tally of a voting, with verdicts once the voting has ended.

    ``verdict`` is left out of the serialized summary while the voting is
    still open.
    """

    voting: VotingData
    stats: StatsMap
    state: Literal["partial", "final"]
    verdict: dict[str, Verdict] | None = None

    @model_serializer(mode="wrap")
    def _drop_missing_verdict(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if self.verdict is None:
            data.pop("verdict", None)
        return data

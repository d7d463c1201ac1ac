"""
Poll vote flow.

Drives one visitor's vote on one poll the way the poll page does: pick an
option, verify the phone number when the poll asks for it, send the vote and
fold the server's tallies back into the local poll.

States move as follows::

    not_voted --submit--> verifying --verify_phone--> voting --> voted
        |                     |                          |
        |                     +--cancel_verification-----+--> error
        +--submit (no verification needed)--> voting

The phone number itself never leaves the client. Only the SHA-256 hash of
its normalised digits is sent as the voter identity.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from constituency_hub.core.models.io.polls import PollRead, PollVoteOutcome
from constituency_hub.core.phone import hash_phone_number, is_valid_bd_phone

from .api import ConstituencyHubClient
from .errors import ApiError

logger = logging.getLogger(__name__)

NOT_VOTABLE_MESSAGE = "This poll is not open for voting"
INVALID_PHONE_MESSAGE = "Please enter a valid Bangladeshi mobile number"
NO_OPTION_MESSAGE = "Please select an option"
VOTE_FAILED_MESSAGE = "Failed to submit vote"


class VoteState(str, Enum):
    NOT_VOTED = "not_voted"
    VERIFYING = "verifying"
    VOTING = "voting"
    VOTED = "voted"
    ERROR = "error"


class PollVoteFlow:
    """State machine for voting on a single poll.

    Args:
        client: API client used to send the vote.
        poll: The poll as last fetched. It is updated in place as the vote
            progresses.
        voter_hash: A phone hash remembered from an earlier verification, if any.
    """

    def __init__(self, client: ConstituencyHubClient, poll: PollRead, voter_hash: Optional[str] = None) -> None:
        self.client = client
        self.poll = poll
        self.voter_hash = voter_hash
        self.pending_option_id: Optional[str] = None
        self.error: Optional[str] = None
        self.state = VoteState.VOTED if poll.has_voted else VoteState.NOT_VOTED

    @property
    def can_vote(self) -> bool:
        return self.poll.can_vote and not self.poll.has_voted

    def _fail(self, message: str) -> VoteState:
        self.error = message
        self.state = VoteState.ERROR
        return self.state

    async def submit(self, option_id: Optional[str]) -> VoteState:
        """Vote for ``option_id``, or ask for phone verification first."""
        if not self.can_vote:
            return self._fail(NOT_VOTABLE_MESSAGE)
        if not option_id:
            return self._fail(NO_OPTION_MESSAGE)

        self.error = None
        self.pending_option_id = option_id
        if self.poll.require_verification and not self.voter_hash:
            self.state = VoteState.VERIFYING
            return self.state
        return await self._send_vote()

    async def verify_phone(self, phone: str) -> VoteState:
        """Accept the visitor's phone number and continue with the pending vote.

        An invalid number keeps the flow in ``verifying`` with an error message
        so the visitor can correct it.
        """
        if self.state is not VoteState.VERIFYING:
            return self.state
        if not is_valid_bd_phone(phone):
            self.error = INVALID_PHONE_MESSAGE
            return self.state
        self.error = None
        self.voter_hash = hash_phone_number(phone)
        return await self._send_vote()

    def cancel_verification(self) -> VoteState:
        if self.state is VoteState.VERIFYING:
            self.pending_option_id = None
            self.error = None
            self.state = VoteState.NOT_VOTED
        return self.state

    async def _send_vote(self) -> VoteState:
        self.state = VoteState.VOTING
        try:
            outcome = await self.client.cast_poll_vote(self.poll.id, self.pending_option_id, self.voter_hash)
        except ApiError as e:
            return self._rejected(e)
        self._apply(outcome)
        self.state = VoteState.VOTED
        return self.state

    def _apply(self, outcome: PollVoteOutcome) -> None:
        self.poll.has_voted = True
        self.poll.voted_option_id = outcome.voted_option_id
        self.poll.total_votes = outcome.total_votes
        self.poll.options = outcome.options
        self.poll.show_results = True
        self.poll.can_vote = False
        self.pending_option_id = None

    def _rejected(self, error: ApiError) -> VoteState:
        payload = error.payload if isinstance(error.payload, dict) else {}
        if payload.get("already_voted"):
            logger.info(f"Poll {self.poll.id}: voter has already voted")
            self.poll.has_voted = True
            self.poll.voted_option_id = payload.get("voted_option_id")
            self.poll.can_vote = False
            self.pending_option_id = None
            self.error = error.message
            self.state = VoteState.VOTED
            return self.state
        return self._fail(error.message or VOTE_FAILED_MESSAGE)

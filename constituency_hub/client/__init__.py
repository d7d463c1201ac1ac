"""Async client for the Constituency Hub API and the poll vote flow built on it."""

from .api import ConstituencyHubClient, Page
from .errors import ApiError
from .poll_flow import PollVoteFlow, VoteState

__all__ = ["ApiError", "ConstituencyHubClient", "Page", "PollVoteFlow", "VoteState"]

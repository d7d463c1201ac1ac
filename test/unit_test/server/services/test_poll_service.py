"""Unit tests for PollService voting rules and presentation."""

from datetime import datetime, timedelta

import pytest

from constituency_hub.core.database.entities.polls import PollOption, PollStatus, PollVote
from constituency_hub.core.exceptions import BadRequestError, NotFoundError
from constituency_hub.core.models.io.polls import PollCreate, PollOptionInput, PollUpdate, PollVoteRequest
from constituency_hub.core.phone import hash_phone_number
from constituency_hub.server.services.polls import PollService, admin_status, compute_phase, percentage

NOW = datetime(2025, 6, 15, 12, 0)
VOTER = hash_phone_number("01712345678")
OTHER_VOTER = hash_phone_number("01812345678")


def _poll_data(**overrides) -> PollCreate:
    data = dict(
        title_en="Which road first?",
        title_bn="কোন রাস্তা আগে?",
        start_datetime=NOW - timedelta(days=1),
        end_datetime=NOW + timedelta(days=1),
        status=PollStatus.ACTIVE,
        options=[
            PollOptionInput(option_en="North road", option_bn="উত্তর রাস্তা"),
            PollOptionInput(option_en="South road", option_bn="দক্ষিণ রাস্তা"),
        ],
    )
    data.update(overrides)
    return PollCreate(**data)


@pytest.fixture
def service(session):
    return PollService(session, now=lambda: NOW)


@pytest.fixture
async def active_poll(service):
    return await service.create(_poll_data())


class TestHelpers:
    def test_percentage_rounds_half_up(self):
        assert percentage(1, 3) == 33
        assert percentage(2, 3) == 67
        assert percentage(1, 8) == 13
        assert percentage(0, 0) == 0

    def test_compute_phase(self):
        poll = type("P", (), {"start_datetime": NOW, "end_datetime": NOW + timedelta(hours=1)})

        assert compute_phase(poll, NOW - timedelta(seconds=1)) == "upcoming"
        assert compute_phase(poll, NOW) == "active"
        assert compute_phase(poll, NOW + timedelta(hours=2)) == "closed"

    def test_admin_status_refines_active(self):
        poll = type(
            "P", (), {"status": "active", "start_datetime": NOW, "end_datetime": NOW + timedelta(hours=1)}
        )

        assert admin_status(poll, NOW - timedelta(hours=1)) == "scheduled"
        assert admin_status(poll, NOW) == "active"
        assert admin_status(poll, NOW + timedelta(hours=2)) == "closed"


class TestCreate:
    async def test_create_orders_options(self, active_poll):
        assert [o.option_en for o in active_poll.options] == ["North road", "South road"]
        assert [o.display_order for o in active_poll.options] == [0, 1]
        assert active_poll.admin_status == "active"
        # admin view always carries the tallies
        assert active_poll.show_results is True
        assert active_poll.options[0].vote_count == 0

    def test_create_requires_two_complete_options(self):
        with pytest.raises(ValueError):
            _poll_data(options=[PollOptionInput(option_en="Only", option_bn="একটি")])
        with pytest.raises(ValueError):
            _poll_data(
                options=[
                    PollOptionInput(option_en="One", option_bn="এক"),
                    PollOptionInput(option_en="Two", option_bn=""),
                ]
            )

    def test_create_rejects_inverted_window(self):
        with pytest.raises(ValueError):
            _poll_data(end_datetime=NOW - timedelta(days=2))


class TestVoting:
    async def test_vote_records_and_returns_tallies(self, service, active_poll):
        option_id = active_poll.options[0].id

        outcome = await service.cast_vote(
            active_poll.id, PollVoteRequest(option_id=option_id, voter_phone_hash=VOTER), voter_ip="10.0.0.1"
        )

        assert outcome.voted_option_id == option_id
        assert outcome.total_votes == 1
        assert outcome.options[0].vote_count == 1
        assert outcome.options[0].percentage == 100
        assert outcome.options[0].is_voted is True

    async def test_second_vote_is_rejected_with_previous_choice(self, service, active_poll):
        first, second = active_poll.options
        await service.cast_vote(active_poll.id, PollVoteRequest(option_id=first.id, voter_phone_hash=VOTER))

        with pytest.raises(BadRequestError) as exc_info:
            await service.cast_vote(active_poll.id, PollVoteRequest(option_id=second.id, voter_phone_hash=VOTER))

        assert exc_info.value.code == "already_voted"
        assert exc_info.value.details == {"already_voted": True, "voted_option_id": first.id}

    @pytest.mark.parametrize(
        "request_kwargs,message",
        [
            ({"voter_phone_hash": VOTER}, "Option ID is required"),
            ({"option_id": "x"}, "Phone verification is required to vote"),
        ],
    )
    async def test_missing_fields_checked_first(self, service, request_kwargs, message):
        with pytest.raises(BadRequestError, match=message):
            await service.cast_vote("missing-poll", PollVoteRequest(**request_kwargs))

    async def test_unknown_poll(self, service):
        with pytest.raises(NotFoundError):
            await service.cast_vote("missing-poll", PollVoteRequest(option_id="x", voter_phone_hash=VOTER))

    async def test_draft_poll_not_votable(self, service):
        poll = await service.create(_poll_data(status=PollStatus.DRAFT))

        with pytest.raises(BadRequestError, match="not available"):
            await service.cast_vote(poll.id, PollVoteRequest(option_id=poll.options[0].id, voter_phone_hash=VOTER))

    async def test_window_enforced(self, service):
        upcoming = await service.create(
            _poll_data(start_datetime=NOW + timedelta(hours=1), end_datetime=NOW + timedelta(days=1))
        )
        ended = await service.create(
            _poll_data(start_datetime=NOW - timedelta(days=2), end_datetime=NOW - timedelta(days=1))
        )

        with pytest.raises(BadRequestError, match="not started"):
            await service.cast_vote(
                upcoming.id, PollVoteRequest(option_id=upcoming.options[0].id, voter_phone_hash=VOTER)
            )
        with pytest.raises(BadRequestError, match="ended"):
            await service.cast_vote(ended.id, PollVoteRequest(option_id=ended.options[0].id, voter_phone_hash=VOTER))

    async def test_option_must_belong_to_poll(self, service, active_poll):
        other = await service.create(_poll_data(title_en="Another"))

        with pytest.raises(BadRequestError, match="Invalid option"):
            await service.cast_vote(
                active_poll.id, PollVoteRequest(option_id=other.options[0].id, voter_phone_hash=VOTER)
            )


class TestPublicReads:
    async def test_results_hidden_until_voted(self, service, active_poll):
        await service.cast_vote(
            active_poll.id, PollVoteRequest(option_id=active_poll.options[1].id, voter_phone_hash=OTHER_VOTER)
        )

        anonymous = await service.get_public(active_poll.id)
        assert anonymous.show_results is False
        assert anonymous.total_votes == 0
        assert anonymous.options[0].vote_count is None
        assert anonymous.can_vote is True

        voter_view = await service.get_public(active_poll.id, voter_hash=OTHER_VOTER)
        assert voter_view.show_results is True
        assert voter_view.has_voted is True
        assert voter_view.can_vote is False
        assert voter_view.voted_option_id == active_poll.options[1].id
        assert voter_view.total_votes == 1

    async def test_draft_hidden_from_public(self, service):
        poll = await service.create(_poll_data(status=PollStatus.DRAFT))

        with pytest.raises(NotFoundError):
            await service.get_public(poll.id)
        polls, pagination = await service.list_public()
        assert polls == []
        assert pagination.total == 0

    async def test_list_filters_by_phase(self, service, active_poll):
        closed = await service.create(
            _poll_data(title_en="Closed", start_datetime=NOW - timedelta(days=3), end_datetime=NOW - timedelta(days=2))
        )

        active, _ = await service.list_public(status="active")
        finished, _ = await service.list_public(status="closed")
        everything, pagination = await service.list_public()

        assert [p.id for p in active] == [active_poll.id]
        assert [p.id for p in finished] == [closed.id]
        assert finished[0].show_results is True
        assert finished[0].computed_status == "closed"
        assert pagination.total == 2
        assert {p.id for p in everything} == {active_poll.id, closed.id}

    async def test_vote_status(self, service, active_poll):
        assert (await service.vote_status(active_poll.id, VOTER)).has_voted is False

        await service.cast_vote(
            active_poll.id, PollVoteRequest(option_id=active_poll.options[0].id, voter_phone_hash=VOTER)
        )
        status = await service.vote_status(active_poll.id, VOTER)

        assert status.has_voted is True
        assert status.voted_option_id == active_poll.options[0].id
        assert status.voted_at is not None


class TestAdministration:
    async def test_update_replaces_options_before_votes(self, service, active_poll):
        updated = await service.update(
            active_poll.id,
            PollUpdate(
                title_en="Renamed",
                options=[
                    PollOptionInput(option_en="A", option_bn="ক"),
                    PollOptionInput(option_en="B", option_bn="খ"),
                    PollOptionInput(option_en="C", option_bn="গ"),
                ],
            ),
        )

        assert updated.title_en == "Renamed"
        assert [o.option_en for o in updated.options] == ["A", "B", "C"]

    async def test_update_refuses_option_swap_after_votes(self, service, active_poll):
        await service.cast_vote(
            active_poll.id, PollVoteRequest(option_id=active_poll.options[0].id, voter_phone_hash=VOTER)
        )

        with pytest.raises(BadRequestError, match="cannot be replaced"):
            await service.update(
                active_poll.id,
                PollUpdate(
                    options=[
                        PollOptionInput(option_en="A", option_bn="ক"),
                        PollOptionInput(option_en="B", option_bn="খ"),
                    ]
                ),
            )

    async def test_update_rejects_inverted_window(self, service, active_poll):
        with pytest.raises(BadRequestError):
            await service.update(active_poll.id, PollUpdate(end_datetime=NOW - timedelta(days=5)))

    async def test_delete_removes_votes_and_options(self, service, session, active_poll):
        await service.cast_vote(
            active_poll.id, PollVoteRequest(option_id=active_poll.options[0].id, voter_phone_hash=VOTER)
        )

        await service.delete(active_poll.id)

        with pytest.raises(NotFoundError):
            await service.get_admin(active_poll.id)
        assert await session.get(PollOption, active_poll.options[0].id) is None
        votes = (await session.execute(PollVote.__table__.select())).all()
        assert votes == []

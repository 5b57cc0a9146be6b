import pytest

from groupswipe.exceptions import DataAccessError
from groupswipe.models.match import Match
from groupswipe.services.match_service import MatchService
from groupswipe.stores import ProfileStore, SwipeStore

from conftest import create_group, create_profile, create_swipe, create_title


def make_group(session, size, threshold="majority"):
    members = [create_profile(session, f"Member {i}") for i in range(size)]
    return members, create_group(session, members, threshold=threshold)


@pytest.mark.parametrize("threshold,yes_votes,total,expected", [
    ("majority", 2, 4, False),
    ("majority", 3, 4, True),
    ("majority", 2, 3, True),
    ("majority", 1, 2, False),
    ("unanimous", 3, 4, False),
    ("unanimous", 4, 4, True),
    (None, 3, 4, True),
])
def test_threshold_met(threshold, yes_votes, total, expected):
    assert MatchService.threshold_met(threshold, yes_votes, total) is expected


def test_single_member_group_never_matches(db_session):
    members, group = make_group(db_session, 1)
    create_title(db_session, 1)
    create_swipe(db_session, members[0], 1, group=group)

    decision = MatchService.check_for_match(db_session, group.id, 1)

    assert decision.is_match is False
    assert decision.total_members == 1


def test_partial_participation_never_matches(db_session):
    members, group = make_group(db_session, 4, threshold="majority")
    create_title(db_session, 1)
    # 3 of 4 already said yes: majority is guaranteed, but one vote is missing
    for member in members[:3]:
        create_swipe(db_session, member, 1, group=group)

    decision = MatchService.check_for_match(db_session, group.id, 1)

    assert decision.is_match is False
    assert decision.total_swipes == 3
    assert decision.yes_votes == 3


@pytest.mark.parametrize("threshold,yes_count,expected", [
    ("majority", 2, False),
    ("majority", 3, True),
    ("unanimous", 3, False),
    ("unanimous", 4, True),
])
def test_four_member_threshold_semantics(db_session, threshold, yes_count, expected):
    members, group = make_group(db_session, 4, threshold=threshold)
    create_title(db_session, 1)
    for i, member in enumerate(members):
        create_swipe(db_session, member, 1, decision="yes" if i < yes_count else "no", group=group)

    decision = MatchService.check_for_match(db_session, group.id, 1)

    assert decision.is_match is expected
    assert decision.total_members == 4
    assert decision.yes_votes == yes_count
    assert decision.threshold == threshold


def test_votes_from_other_contexts_are_ignored(db_session):
    members, group = make_group(db_session, 2)
    create_title(db_session, 1)
    create_swipe(db_session, members[0], 1, group=group)
    create_swipe(db_session, members[1], 1)  # solo swipe

    decision = MatchService.check_for_match(db_session, group.id, 1)

    assert decision.is_match is False
    assert decision.total_swipes == 1


def test_match_reports_yes_voter_names(db_session):
    members, group = make_group(db_session, 3)
    create_title(db_session, 1)
    create_swipe(db_session, members[0], 1, group=group)
    create_swipe(db_session, members[1], 1, decision="no", group=group)
    create_swipe(db_session, members[2], 1, group=group)

    decision = MatchService.check_for_match(db_session, group.id, 1)

    assert decision.is_match is True
    assert decision.yes_voter_ids == [members[0].id, members[2].id]
    assert decision.yes_voter_names == ["Member 0", "Member 2"]


def test_failed_profile_lookup_becomes_unknown(db_session, monkeypatch):
    members, group = make_group(db_session, 2, threshold="unanimous")
    create_title(db_session, 1)
    for member in members:
        create_swipe(db_session, member, 1, group=group)

    original_get = ProfileStore.get
    broken_id = members[1].id

    def flaky_get(self, user_id):
        if user_id == broken_id:
            raise DataAccessError("profiles.get", "timeout")
        return original_get(self, user_id)

    monkeypatch.setattr(ProfileStore, "get", flaky_get)

    decision = MatchService.check_for_match(db_session, group.id, 1)

    assert decision.is_match is True
    assert decision.yes_voter_names == ["Member 0", "Unknown"]
    assert len(decision.yes_voter_names) == decision.yes_votes


def test_store_failure_is_swallowed(db_session, monkeypatch):
    _, group = make_group(db_session, 2)

    def broken(self, *args, **kwargs):
        raise DataAccessError("swipes.query_title", "connection refused")

    monkeypatch.setattr(SwipeStore, "title_swipes", broken)

    assert MatchService.check_for_match(db_session, group.id, 1) is None


def test_record_match_is_idempotent(db_session):
    members, group = make_group(db_session, 2)
    create_title(db_session, 1)
    for member in members:
        create_swipe(db_session, member, 1, group=group)

    decision = MatchService.check_for_match(db_session, group.id, 1)
    MatchService.record_match(db_session, group.id, 1, decision)
    MatchService.record_match(db_session, group.id, 1, decision)

    matches = db_session.query(Match).all()
    assert len(matches) == 1
    assert matches[0].rule == "majority"
    assert sorted(m.user_id for m in matches[0].match_members) == sorted(m.id for m in members)


def test_list_matches_includes_title_and_members(db_session):
    members, group = make_group(db_session, 2)
    create_title(db_session, 1, name="Arrival", genres=["Sci-Fi"])
    for member in members:
        create_swipe(db_session, member, 1, group=group)
    MatchService.record_match(db_session, group.id, 1, MatchService.check_for_match(db_session, group.id, 1))

    matches = MatchService.list_matches(db_session, group.id)

    assert len(matches) == 1
    assert matches[0].title.name == "Arrival"
    assert matches[0].title.genres == ["Sci-Fi"]
    assert {m.display_name for m in matches[0].members} == {"Member 0", "Member 1"}

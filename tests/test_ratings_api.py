"""
Rating matched titles and changing a group's match threshold
"""
from groupswipe.models.group import Group

from conftest import auth_headers, create_group, create_match, create_profile, create_title


# ============================================
# Ratings
# ============================================

def test_member_rates_a_match_and_reads_it_back(client, db_session):
    u = create_profile(db_session, "Uma")
    v = create_profile(db_session, "Victor")
    group = create_group(db_session, [u, v])
    create_title(db_session, 42, name="Heat")
    match = create_match(db_session, group, 42, [u, v])

    response = client.post(
        f"/api/matches/{match.id}/rating",
        json={"rating": 4, "reaction": "  Great heist scene  "},
        headers=auth_headers(u)
    )

    assert response.status_code == 201
    body = response.json()
    assert body["rating"] == 4
    assert body["reaction"] == "Great heist scene"
    assert body["group_id"] == group.id
    assert body["title_id"] == 42

    mine = client.get(f"/api/matches/{match.id}/rating", headers=auth_headers(u)).json()
    assert mine == {"rating": 4, "reaction": "Great heist scene", "rating_id": body["id"]}


def test_rating_again_replaces_the_previous_one(client, db_session):
    u = create_profile(db_session)
    v = create_profile(db_session)
    group = create_group(db_session, [u, v])
    create_title(db_session, 1)
    match = create_match(db_session, group, 1, [u, v])

    first = client.post(f"/api/matches/{match.id}/rating", json={"rating": 2, "reaction": "meh"}, headers=auth_headers(u))
    second = client.post(f"/api/matches/{match.id}/rating", json={"rating": 5}, headers=auth_headers(u))

    assert second.json()["id"] == first.json()["id"]
    assert second.json()["rating"] == 5
    assert second.json()["reaction"] is None


def test_unrated_match_returns_nulls(client, db_session):
    u = create_profile(db_session)
    v = create_profile(db_session)
    group = create_group(db_session, [u, v])
    create_title(db_session, 1)
    match = create_match(db_session, group, 1, [u, v])

    response = client.get(f"/api/matches/{match.id}/rating", headers=auth_headers(v))

    assert response.status_code == 200
    assert response.json() == {"rating": None, "reaction": None, "rating_id": None}


def test_rating_outside_star_range_is_rejected(client, db_session):
    u = create_profile(db_session)
    v = create_profile(db_session)
    group = create_group(db_session, [u, v])
    create_title(db_session, 1)
    match = create_match(db_session, group, 1, [u, v])

    for stars in (0, 6):
        response = client.post(f"/api/matches/{match.id}/rating", json={"rating": stars}, headers=auth_headers(u))
        assert response.status_code == 422


def test_script_in_reaction_is_rejected(client, db_session):
    u = create_profile(db_session)
    v = create_profile(db_session)
    group = create_group(db_session, [u, v])
    create_title(db_session, 1)
    match = create_match(db_session, group, 1, [u, v])

    response = client.post(
        f"/api/matches/{match.id}/rating",
        json={"rating": 3, "reaction": "<script>alert(1)</script>"},
        headers=auth_headers(u)
    )

    assert response.status_code == 422


def test_outsider_cannot_rate_a_match(client, db_session):
    u = create_profile(db_session)
    v = create_profile(db_session)
    outsider = create_profile(db_session)
    group = create_group(db_session, [u, v])
    create_title(db_session, 1)
    match = create_match(db_session, group, 1, [u, v])

    response = client.post(f"/api/matches/{match.id}/rating", json={"rating": 3}, headers=auth_headers(outsider))

    assert response.status_code == 403


def test_rating_unknown_match_returns_404(client, db_session):
    u = create_profile(db_session)

    response = client.post("/api/matches/999/rating", json={"rating": 3}, headers=auth_headers(u))

    assert response.status_code == 404


# ============================================
# Match threshold
# ============================================

def test_owner_switches_group_to_unanimous(client, db_session):
    owner = create_profile(db_session)
    member = create_profile(db_session)
    group = create_group(db_session, [owner, member], threshold="majority")

    response = client.put(
        f"/api/groups/{group.id}/threshold",
        json={"match_threshold": "unanimous"},
        headers=auth_headers(owner)
    )

    assert response.status_code == 200
    assert response.json()["match_threshold"] == "unanimous"
    db_session.expire_all()
    assert db_session.get(Group, group.id).match_threshold == "unanimous"


def test_new_threshold_applies_to_the_next_match_check(client, db_session):
    owner = create_profile(db_session)
    v = create_profile(db_session)
    w = create_profile(db_session)
    group = create_group(db_session, [owner, v, w], threshold="majority")
    create_title(db_session, 7)

    client.put(f"/api/groups/{group.id}/threshold", json={"match_threshold": "unanimous"}, headers=auth_headers(owner))

    for user, decision in ((owner, "yes"), (v, "yes"), (w, "no")):
        response = client.post(
            "/api/swipes",
            json={"title_id": 7, "group_id": group.id, "decision": decision},
            headers=auth_headers(user)
        )

    match = response.json()["match"]
    assert match["threshold"] == "unanimous"
    assert match["is_match"] is False


def test_only_owner_can_change_threshold(client, db_session):
    owner = create_profile(db_session)
    member = create_profile(db_session)
    group = create_group(db_session, [owner, member])

    response = client.put(
        f"/api/groups/{group.id}/threshold",
        json={"match_threshold": "unanimous"},
        headers=auth_headers(member)
    )

    assert response.status_code == 403


def test_unknown_threshold_value_is_rejected(client, db_session):
    owner = create_profile(db_session)
    group = create_group(db_session, [owner])

    response = client.put(
        f"/api/groups/{group.id}/threshold",
        json={"match_threshold": "most"},
        headers=auth_headers(owner)
    )

    assert response.status_code == 422


def test_threshold_of_unknown_group_returns_404(client, db_session):
    owner = create_profile(db_session)

    response = client.put("/api/groups/999/threshold", json={"match_threshold": "majority"}, headers=auth_headers(owner))

    assert response.status_code == 404

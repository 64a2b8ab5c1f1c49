"""
HTTP-level tests for league routes and league membership calls.
"""

from sqlalchemy import select

from backend.huddle.models import League, LeagueEvent, Participation, ParticipationType

LEAGUE_FORM = {
    "leagueName": "Summer league",
    "prize": "Trophy",
    "eventDates": "June - August",
    "spots": "8",
    "organizer": "Parks dept",
    "sport": "soccer",
    "rules": "Fair play",
    "creator_id": "7",
}


# ============================================================================
# POST/PUT /league
# ============================================================================


def test_create_league_adds_pending_creator_participation(client, db):
    response = client.post("/league", data=LEAGUE_FORM, follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/pages/add-events.html?leagueId=1"

    rows = db.scalars(select(Participation)).all()
    assert len(rows) == 1
    assert rows[0].user_id == 7
    assert rows[0].league_id == 1
    assert rows[0].event_id is None
    assert rows[0].type == ParticipationType.PENDING


def test_create_league_json_for_api_clients(client):
    response = client.post(
        "/league",
        data=LEAGUE_FORM,
        headers={"Accept": "application/json"},
    )

    assert response.status_code == 201
    assert response.json()["leagueId"] == 1

    league = client.get("/leagues/1").json()
    assert league["leagueName"] == "Summer league"
    assert league["eventDates"] == "June - August"
    assert league["imageUrl"] == ""


def test_create_league_with_image(client):
    client.post(
        "/league",
        data=LEAGUE_FORM,
        files={"image": ("crest.jpg", b"jpeg", "image/jpeg")},
        follow_redirects=False,
    )

    assert client.get("/leagues/1").json()["imageUrl"].startswith("/assets/images/image-")


def test_update_league_preserves_image(client, make_league):
    league_id = make_league(image_url="/assets/images/crest.jpg", creator_id=7)

    response = client.put(
        f"/league/{league_id}", data={**LEAGUE_FORM, "leagueName": "Autumn league"}
    )

    assert response.status_code == 200
    league = client.get(f"/leagues/{league_id}").json()
    assert league["leagueName"] == "Autumn league"
    assert league["imageUrl"] == "/assets/images/crest.jpg"


def test_update_missing_league_returns_404(client):
    assert client.put("/league/5", data=LEAGUE_FORM).status_code == 404


# ============================================================================
# GET /leagues...
# ============================================================================


def test_get_league_not_found(client):
    response = client.get("/leagues/3")

    assert response.status_code == 404
    assert response.text == "League not found"


def test_list_leagues(client, make_league):
    make_league(name="One")
    make_league(name="Two")

    assert [l["leagueName"] for l in client.get("/leagues").json()] == ["One", "Two"]


def test_leagues_by_sport_hides_joined_leagues(client, make_league, make_participation):
    joined = make_league(name="Joined")
    make_league(name="Open")
    pending = make_league(name="Pending")
    make_participation(user_id=1, league_id=joined, type=ParticipationType.PARTICIPANT)
    make_participation(user_id=1, league_id=pending, type=ParticipationType.PENDING)

    response = client.get("/leagues/sport", params={"sport": "soccer"})

    assert [l["leagueName"] for l in response.json()] == ["Open", "Pending"]


def test_leagues_by_sport_accessibility_checks_linked_events(client, make_event, make_league):
    accessible = make_event(accessibility="wheelchair")
    plain = make_event(accessibility="")
    make_league(name="Accessible", event_ids=[plain, accessible])
    make_league(name="Plain", event_ids=[plain])
    make_league(name="Empty")

    response = client.get(
        "/leagues/sport", params={"sport": "soccer", "accessibility": "wheel"}
    )

    assert [l["leagueName"] for l in response.json()] == ["Accessible"]


def test_leagues_for_user_lists_event_names_in_order(client, make_event, make_league, make_participation):
    first = make_event(name="Round 1")
    second = make_event(name="Round 2")
    league_id = make_league(event_ids=[second, first])
    empty_league = make_league(name="No events yet")
    for event_id in (first, second):
        make_participation(
            user_id=3, league_id=league_id, event_id=event_id,
            type=ParticipationType.PARTICIPANT,
        )
    make_participation(user_id=3, league_id=empty_league, type=ParticipationType.PENDING)

    rows = client.get("/leagues/user/3").json()

    assert len(rows) == 2
    assert rows[0]["id"] == league_id
    assert rows[0]["eventNames"] == ["Round 1", "Round 2"]
    assert rows[0]["type"] == "participant"
    assert rows[1]["eventNames"] == []
    assert rows[1]["type"] == "pending"


def test_leagues_for_user_prefers_creator_type(client, make_league, make_participation):
    league_id = make_league()
    make_participation(user_id=3, league_id=league_id, type=ParticipationType.PENDING)
    make_participation(user_id=3, league_id=league_id, type=ParticipationType.CREATOR)

    rows = client.get("/leagues/user/3").json()

    assert [r["type"] for r in rows] == ["creator"]


def test_leagues_created_by_user(client, make_league):
    make_league(name="Mine", creator_id=3)
    make_league(name="Theirs", creator_id=4)

    assert [l["leagueName"] for l in client.get("/leagues/created/3").json()] == ["Mine"]


# ============================================================================
# DELETE /league/{id}
# ============================================================================


def test_delete_league_as_non_creator_is_forbidden(client, make_league, count_rows):
    league_id = make_league(creator_id=7)

    response = client.request("DELETE", f"/league/{league_id}", json={"userId": 1})

    assert response.status_code == 403
    assert response.text == "You do not have permission to delete this league."
    assert count_rows(League) == 1


def test_delete_missing_league_returns_404(client):
    assert client.request("DELETE", "/league/9", json={"userId": 1}).status_code == 404


def test_delete_league_as_creator(client, make_event, make_league, make_participation, count_rows):
    event_id = make_event()
    league_id = make_league(event_ids=[event_id], creator_id=7)
    make_participation(user_id=7, league_id=league_id, type=ParticipationType.PENDING)

    response = client.request("DELETE", f"/league/{league_id}", json={"userId": 7})

    assert response.status_code == 200
    assert response.json()["changes"] == 1
    assert count_rows(League) == 0
    assert count_rows(LeagueEvent) == 0
    assert count_rows(Participation) == 0
    # events outlive their leagues
    assert len(client.get("/events").json()) == 1


# ============================================================================
# Linking and membership
# ============================================================================


def test_link_event_to_league(client, make_event, make_league, count_rows):
    event_id = make_event()
    league_id = make_league()

    response = client.post(
        "/link-event-to-league", json={"league_id": league_id, "event_id": event_id}
    )

    assert response.status_code == 200
    assert response.text == "Event linked to league successfully!"
    assert count_rows(LeagueEvent, league_id=league_id, event_id=event_id) == 1


def test_join_league_creates_one_row_per_linked_event(client, db, make_event, make_league):
    event_ids = [make_event(name=f"Round {i}") for i in range(3)]
    league_id = make_league(event_ids=event_ids)
    make_league(event_ids=[make_event(name="Elsewhere")])

    response = client.post("/join-league", json={"user_id": 4, "league_id": league_id})

    assert response.status_code == 200
    assert response.json() == {"message": "Successfully joined the league", "changes": 3}

    rows = db.scalars(select(Participation).where(Participation.user_id == 4)).all()
    assert sorted(r.event_id for r in rows) == sorted(event_ids)
    assert all(r.league_id == league_id for r in rows)
    assert all(r.type == ParticipationType.PARTICIPANT for r in rows)


def test_join_league_without_events_changes_nothing(client, make_league):
    league_id = make_league()

    response = client.post("/join-league", json={"user_id": 4, "league_id": league_id})

    assert response.json()["changes"] == 0


def test_joined_league_disappears_from_sport_listing(client, make_event, make_league):
    league_id = make_league(event_ids=[make_event()])

    client.post("/join-league", json={"user_id": 1, "league_id": league_id})

    assert client.get("/leagues/sport", params={"sport": "soccer"}).json() == []
    assert client.get("/events/sport", params={"sport": "soccer"}).json() == []


def test_exit_league_removes_all_rows_for_league(client, make_league, make_participation, count_rows):
    league_id = make_league()
    make_participation(user_id=4, league_id=league_id, event_id=1, type=ParticipationType.PARTICIPANT)
    make_participation(user_id=4, league_id=league_id, event_id=2, type=ParticipationType.PARTICIPANT)
    make_participation(user_id=5, league_id=league_id, event_id=1, type=ParticipationType.PARTICIPANT)

    response = client.post("/exit-league", json={"user_id": 4, "league_id": league_id})

    assert response.json() == {"message": "Successfully exited the league", "changes": 2}
    assert count_rows(Participation) == 1


def test_exit_league_with_missing_ids_changes_nothing(client, make_participation, count_rows):
    make_participation(user_id=None, league_id=None, type=ParticipationType.PENDING)

    response = client.post("/exit-league", json={})

    assert response.status_code == 200
    assert response.json()["changes"] == 0
    assert count_rows(Participation) == 1


def test_accept_league_turns_pending_into_participant(client, db, make_league, make_participation):
    league_id = make_league()
    make_participation(user_id=4, league_id=league_id, type=ParticipationType.PENDING)

    response = client.post("/accept-league", json={"user_id": 4, "league_id": league_id})

    assert response.status_code == 200
    assert response.json()["message"] == "League participation accepted successfully!"
    row = db.scalars(select(Participation)).one()
    assert row.type == ParticipationType.PARTICIPANT


def test_reject_league_deletes_participation(client, make_league, make_participation, count_rows):
    league_id = make_league()
    make_participation(user_id=4, league_id=league_id, type=ParticipationType.PENDING)

    response = client.post("/reject-league", json={"user_id": 4, "league_id": league_id})

    assert response.json()["message"] == "League participation rejected successfully!"
    assert count_rows(Participation) == 0


def test_join_league_without_body_changes_nothing(client, make_event, make_league, count_rows):
    make_league(event_ids=[make_event()])

    response = client.post("/join-league")

    assert response.status_code == 200
    assert response.json() == {"message": "Successfully joined the league", "changes": 0}
    assert count_rows(Participation) == 0

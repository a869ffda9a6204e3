from conftest import auth_headers

EVENT_BODY = {
    "name": "Softuniada 2022",
    "place": "Sofia",
    "start": "2026-11-01T09:00:00",
    "end": "2026-11-01T18:00:00",
    "totalTickets": 100,
    "pricePerTicket": "12.00",
}


def test_count_is_public(client, seeded_events):
    response = client.get("/api/events/count")
    assert response.status_code == 200
    assert response.json() == 3


def test_list_requires_authentication(client, seeded_events):
    assert client.get("/api/events/").status_code == 401


def test_list_events(client, seeded_events, maria, peter):
    response = client.get("/api/events/", headers=auth_headers(maria))
    assert response.status_code == 200
    body = response.json()
    assert [e["name"] for e in body] == ["Softuniada 2021", "OpenFest", "Varna Jazz"]
    assert body[0] == {
        "id": seeded_events[0].id,
        "name": "Softuniada 2021",
        "place": "Sofia",
        "start": "2026-11-01T09:00:00",
        "end": "2026-11-01T18:00:00",
        "totalTickets": 120,
        "pricePerTicket": "12.00",
        "owner": "maria",
    }

    owned = client.get("/api/events/", params={"ownerId": peter.id}, headers=auth_headers(maria))
    assert [e["name"] for e in owned.json()] == ["Varna Jazz"]


def test_get_event(client, seeded_events, maria):
    event = seeded_events[1]
    response = client.get(f"/api/events/{event.id}", headers=auth_headers(maria))
    assert response.status_code == 200
    assert response.json()["name"] == "OpenFest"
    assert response.json()["pricePerTicket"] == "0"

    missing = client.get("/api/events/-1", headers=auth_headers(maria))
    assert missing.status_code == 404
    assert missing.json() == {"message": "Event #-1 not found."}


def test_create_event(client, maria):
    response = client.post("/api/events/", json=EVENT_BODY, headers=auth_headers(maria))
    assert response.status_code == 201
    body = response.json()
    assert body["id"] > 0
    assert body["owner"] == "maria"
    assert body["pricePerTicket"] == "12.00"
    assert client.get("/api/events/count").json() == 1


def test_create_ignores_client_supplied_owner_and_id(client, maria, peter):
    payload = dict(EVENT_BODY, id=999, ownerId=peter.id, owner="peter")
    body = client.post("/api/events/", json=payload, headers=auth_headers(maria)).json()
    assert body["id"] != 999
    assert body["owner"] == "maria"


def test_create_invalid_event_lists_every_problem(client, maria):
    payload = dict(EVENT_BODY, place="", totalTickets=0)
    response = client.post("/api/events/", json=payload, headers=auth_headers(maria))
    assert response.status_code == 400
    assert response.json() == {
        "message": "\r\nPlace field is required.\r\nTotal Tickets must be a positive number.",
        "errors": ["Place field is required.", "Total Tickets must be a positive number."],
    }


def test_put_edit_event(client, seeded_events, maria):
    event = seeded_events[0]
    response = client.put(f"/api/events/{event.id}", json=EVENT_BODY, headers=auth_headers(maria))
    assert response.status_code == 204
    assert response.content == b""

    stored = client.get(f"/api/events/{event.id}", headers=auth_headers(maria)).json()
    assert stored["name"] == "Softuniada 2022"
    assert stored["totalTickets"] == 100
    assert stored["id"] == event.id
    assert stored["owner"] == "maria"


def test_put_invalid_id(client, seeded_events, maria):
    response = client.put("/api/events/-1", json={"name": ""}, headers=auth_headers(maria))
    assert response.status_code == 404
    assert response.json()["message"] == "Event #-1 not found."


def test_put_invalid_draft(client, seeded_events, maria):
    event = seeded_events[0]
    response = client.put(
        f"/api/events/{event.id}", json=dict(EVENT_BODY, name=" "), headers=auth_headers(maria)
    )
    assert response.status_code == 400
    assert response.json()["errors"] == ["Name field is required."]


def test_put_foreign_event_looks_like_missing(client, seeded_events, maria):
    foreign = seeded_events[2]
    response = client.put(f"/api/events/{foreign.id}", json=EVENT_BODY, headers=auth_headers(maria))
    assert response.status_code == 404
    assert response.json() == {"message": f"Event #{foreign.id} not found."}


def test_patch_event(client, seeded_events, maria):
    event = seeded_events[0]
    response = client.patch(
        f"/api/events/{event.id}", json={"place": "Plovdiv"}, headers=auth_headers(maria)
    )
    assert response.status_code == 204
    stored = client.get(f"/api/events/{event.id}", headers=auth_headers(maria)).json()
    assert stored["place"] == "Plovdiv"
    assert stored["name"] == "Softuniada 2021"


def test_delete_event(client, seeded_events, maria):
    event = seeded_events[0]
    response = client.delete(f"/api/events/{event.id}", headers=auth_headers(maria))
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == event.id
    assert body["name"] == "Softuniada 2021"
    assert body["place"] == "Sofia"
    assert client.get("/api/events/count").json() == 2
    assert client.get(f"/api/events/{event.id}", headers=auth_headers(maria)).status_code == 404


def test_delete_invalid_id(client, seeded_events, maria):
    response = client.delete("/api/events/-1", headers=auth_headers(maria))
    assert response.status_code == 404
    assert response.json() == {"message": "Event #-1 not found."}


def test_delete_foreign_event_looks_like_missing(client, seeded_events, maria):
    foreign = seeded_events[2]
    response = client.delete(f"/api/events/{foreign.id}", headers=auth_headers(maria))
    assert response.status_code == 404
    assert client.get("/api/events/count").json() == 3


def test_rejects_tampered_token(client, seeded_events, maria):
    headers = auth_headers(maria)
    headers["Authorization"] += "x"
    assert client.get("/api/events/", headers=headers).status_code == 401


def test_put_missing_event_is_not_found_whatever_the_body(client, seeded_events, maria):
    headers = auth_headers(maria)
    for kwargs in ({"json": {"totalTickets": "abc"}}, {}, {"content": b"{not json"}):
        response = client.put("/api/events/-1", headers=headers, **kwargs)
        assert response.status_code == 404
        assert response.json() == {"message": "Event #-1 not found."}


def test_put_with_unparseable_field_reports_it_as_invalid(client, seeded_events, maria):
    event = seeded_events[0]
    response = client.put(
        f"/api/events/{event.id}", json=dict(EVENT_BODY, totalTickets="abc"), headers=auth_headers(maria)
    )
    assert response.status_code == 400
    assert response.json() == {
        "message": "\r\nTotal Tickets field is invalid.",
        "errors": ["Total Tickets field is invalid."],
    }


def test_create_without_body_reports_every_field(client, maria):
    response = client.post("/api/events/", headers=auth_headers(maria))
    assert response.status_code == 400
    assert len(response.json()["errors"]) == 6
    assert client.get("/api/events/count").json() == 0


def test_create_with_oversized_ticket_count(client, maria):
    payload = dict(EVENT_BODY, totalTickets=10**20)
    response = client.post("/api/events/", json=payload, headers=auth_headers(maria))
    assert response.status_code == 400
    assert response.json()["errors"] == ["Total Tickets is too large."]


def test_put_ignores_client_supplied_id_and_owner(client, seeded_events, maria, peter):
    event = seeded_events[0]
    payload = dict(EVENT_BODY, id=999, ownerId=peter.id, owner="peter")
    response = client.put(f"/api/events/{event.id}", json=payload, headers=auth_headers(maria))
    assert response.status_code == 204

    assert client.get("/api/events/999", headers=auth_headers(maria)).status_code == 404
    stored = client.get(f"/api/events/{event.id}", headers=auth_headers(maria)).json()
    assert stored["id"] == event.id
    assert stored["owner"] == "maria"
    assert stored["name"] == "Softuniada 2022"


def test_patch_ignores_client_supplied_id_and_owner(client, seeded_events, maria, peter):
    event = seeded_events[0]
    payload = {"id": 999, "ownerId": peter.id, "place": "Plovdiv"}
    response = client.patch(f"/api/events/{event.id}", json=payload, headers=auth_headers(maria))
    assert response.status_code == 204

    stored = client.get(f"/api/events/{event.id}", headers=auth_headers(maria)).json()
    assert stored["id"] == event.id
    assert stored["owner"] == "maria"
    assert stored["place"] == "Plovdiv"
    peter_events = client.get("/api/events/", params={"ownerId": peter.id}, headers=auth_headers(peter)).json()
    assert [e["name"] for e in peter_events] == ["Varna Jazz"]


def test_patch_with_unparseable_field(client, seeded_events, maria):
    event = seeded_events[0]
    response = client.patch(
        f"/api/events/{event.id}", json={"pricePerTicket": "cheap"}, headers=auth_headers(maria)
    )
    assert response.status_code == 400
    assert response.json()["errors"] == ["Price Per Ticket field is invalid."]

from __future__ import annotations

from slugconnect.database import SessionLocal
from slugconnect.db.store import StoreConnectionError, insert_row, update_where
from slugconnect.models.connection_request import ConnectionRequest
from slugconnect.services import connection_service


def _status(client, viewer: dict, target: dict) -> str:
    r = client.get(f"/connections/status/{target['id']}", headers=viewer["headers"])
    assert r.status_code == 200, r.text
    return r.json()["status"]


def _send(client, sender: dict, receiver: dict):
    return client.post("/connections/requests", json={"receiver_id": receiver["id"]}, headers=sender["headers"])


def _pending_request_id(client, receiver: dict) -> int:
    overview = client.get("/connections", headers=receiver["headers"]).json()
    assert len(overview["pending_requests"]) == 1
    return overview["pending_requests"][0]["request"]["id"]


def test_no_rows_means_idle(client, make_student) -> None:
    alice = make_student("alice@ucsc.edu")
    bob = make_student("bob@ucsc.edu")

    r = client.get(f"/connections/status/{bob['id']}", headers=alice["headers"])
    assert r.status_code == 200
    assert r.json() == {
        "target_id": bob["id"],
        "status": "idle",
        "label": "Send Connection Request",
        "can_send": True,
    }


def test_send_then_accept(client, make_student) -> None:
    alice = make_student("alice@ucsc.edu", name="Alice", major="Biology")
    bob = make_student("bob@ucsc.edu", name="Bob")

    sent = _send(client, alice, bob)
    assert sent.status_code == 200
    assert sent.json()["status"] == "pending"
    assert sent.json()["label"] == "Request Pending"
    assert _status(client, alice, bob) == "pending"
    assert _status(client, bob, alice) == "received"

    overview = client.get("/connections", headers=bob["headers"]).json()
    assert overview["accepted_connections"] == []
    item = overview["pending_requests"][0]
    assert item["sender_name"] == "Alice"
    assert item["sender_major"] == "Biology"
    assert item["request"]["sender_id"] == alice["id"]

    accepted = client.post(
        f"/connections/requests/{item['request']['id']}/respond",
        json={"action": "accepted"},
        headers=bob["headers"],
    )
    assert accepted.status_code == 200
    body = accepted.json()
    assert body["pending_requests"] == []
    assert body["accepted_connections"][0]["other_user_id"] == alice["id"]
    assert body["accepted_connections"][0]["other_user_name"] == "Alice"

    assert _status(client, alice, bob) == "accepted"
    assert _status(client, bob, alice) == "accepted"

    # The sender sees the same connection from their side.
    mine = client.get("/connections", headers=alice["headers"]).json()
    assert mine["accepted_connections"][0]["other_user_id"] == bob["id"]
    assert mine["accepted_connections"][0]["other_user_name"] == "Bob"


def test_rejected_request_can_be_sent_again(client, make_student) -> None:
    alice = make_student("alice@ucsc.edu")
    bob = make_student("bob@ucsc.edu")

    _send(client, alice, bob)
    request_id = _pending_request_id(client, bob)
    r = client.post(f"/connections/requests/{request_id}/respond", json={"action": "rejected"}, headers=bob["headers"])
    assert r.status_code == 200
    assert r.json()["pending_requests"] == []

    assert _status(client, alice, bob) == "rejected"
    assert _status(client, bob, alice) == "idle"

    again = _send(client, alice, bob)
    assert again.status_code == 200
    assert again.json()["status"] == "pending"
    assert _status(client, bob, alice) == "received"


def test_rejecter_can_reach_out_instead(client, make_student) -> None:
    alice = make_student("alice@ucsc.edu")
    bob = make_student("bob@ucsc.edu")

    _send(client, alice, bob)
    request_id = _pending_request_id(client, bob)
    client.post(f"/connections/requests/{request_id}/respond", json={"action": "rejected"}, headers=bob["headers"])

    r = _send(client, bob, alice)
    assert r.status_code == 200
    assert r.json()["status"] == "pending"
    assert _status(client, alice, bob) == "received"


def test_second_send_while_pending_is_refused(client, make_student) -> None:
    alice = make_student("alice@ucsc.edu")
    bob = make_student("bob@ucsc.edu")

    assert _send(client, alice, bob).json()["status"] == "pending"
    # Already pending: sending is no longer offered.
    second = _send(client, alice, bob)
    assert second.status_code == 409

    overview = client.get("/connections", headers=bob["headers"]).json()
    assert len(overview["pending_requests"]) == 1


def test_cannot_send_when_request_received(client, make_student) -> None:
    alice = make_student("alice@ucsc.edu")
    bob = make_student("bob@ucsc.edu")

    _send(client, alice, bob)
    r = _send(client, bob, alice)
    assert r.status_code == 409
    assert _status(client, bob, alice) == "received"


def test_self_connection_is_rejected(client, make_student) -> None:
    alice = make_student("alice@ucsc.edu")

    r = _send(client, alice, alice)
    assert r.status_code == 400
    assert r.json()["detail"] == "You cannot connect with yourself"

    status = client.get(f"/connections/status/{alice['id']}", headers=alice["headers"])
    assert status.status_code == 400


def test_unknown_receiver(client, make_student) -> None:
    alice = make_student("alice@ucsc.edu")
    r = client.post("/connections/requests", json={"receiver_id": "no-such-user"}, headers=alice["headers"])
    assert r.status_code == 404


def test_only_receiver_may_respond(client, make_student) -> None:
    alice = make_student("alice@ucsc.edu")
    bob = make_student("bob@ucsc.edu")
    carol = make_student("carol@ucsc.edu")

    _send(client, alice, bob)
    request_id = _pending_request_id(client, bob)

    for intruder in (alice, carol):
        r = client.post(
            f"/connections/requests/{request_id}/respond",
            json={"action": "accepted"},
            headers=intruder["headers"],
        )
        assert r.status_code == 403
    assert _status(client, alice, bob) == "pending"

    missing = client.post("/connections/requests/9999/respond", json={"action": "accepted"}, headers=bob["headers"])
    assert missing.status_code == 404

    bad_action = client.post(
        f"/connections/requests/{request_id}/respond",
        json={"action": "maybe"},
        headers=bob["headers"],
    )
    assert bad_action.status_code == 422


def test_overview_labels_missing_profiles_unknown(client, make_student) -> None:
    ghost = make_student("ghost@ucsc.edu", onboard=False)
    bob = make_student("bob@ucsc.edu")

    assert _send(client, ghost, bob).status_code == 200
    item = client.get("/connections", headers=bob["headers"]).json()["pending_requests"][0]
    assert item["sender"] is None
    assert item["sender_name"] == "Unknown"
    assert item["sender_major"] == "Unknown"


def test_status_of_unknown_user_is_not_found(client, make_student) -> None:
    alice = make_student("alice@ucsc.edu")
    r = client.get("/connections/status/no-such-user", headers=alice["headers"])
    assert r.status_code == 404
    assert r.json()["detail"] == "User not found"


def test_store_failure_never_reads_as_idle(client, make_student, monkeypatch) -> None:
    alice = make_student("alice@ucsc.edu")
    bob = make_student("bob@ucsc.edu")

    def unreachable(*args, **kwargs):
        raise StoreConnectionError("select from connection_requests failed, database unreachable")

    monkeypatch.setattr(connection_service, "select_rows", unreachable)

    r = client.get(f"/connections/status/{bob['id']}", headers=alice["headers"])
    assert r.status_code == 503
    assert r.json()["detail"] == "Connection status unknown. Please try again later."

    assert client.get("/discover", headers=alice["headers"]).status_code == 503
    assert _send(client, alice, bob).status_code == 503


def test_concurrent_insert_reports_pending(client, make_student, monkeypatch) -> None:
    alice = make_student("alice@ucsc.edu")
    bob = make_student("bob@ucsc.edu")
    real_fetch = connection_service.fetch_request_pair
    calls = []

    def racing_fetch(db, viewer_id, target_id):
        calls.append(viewer_id)
        if len(calls) == 2:
            # Another send from the same viewer commits between the re-check and the insert.
            with SessionLocal() as other:
                insert_row(other, ConnectionRequest, ConnectionRequest.values_for(viewer_id, target_id))
            return connection_service.RequestPair()
        return real_fetch(db, viewer_id, target_id)

    monkeypatch.setattr(connection_service, "fetch_request_pair", racing_fetch)

    r = _send(client, alice, bob)
    assert r.status_code == 200
    assert r.json()["status"] == "pending"
    assert len(calls) == 3

    with SessionLocal() as db:
        assert db.query(ConnectionRequest).count() == 1


def test_concurrent_reoffers_do_not_both_win(client, make_student, monkeypatch) -> None:
    alice = make_student("alice@ucsc.edu")
    bob = make_student("bob@ucsc.edu")
    _send(client, alice, bob)
    request_id = _pending_request_id(client, bob)
    client.post(f"/connections/requests/{request_id}/respond", json={"action": "rejected"}, headers=bob["headers"])

    real_fetch = connection_service.fetch_request_pair
    calls = []

    def racing_fetch(db, viewer_id, target_id):
        calls.append(viewer_id)
        pair = real_fetch(db, viewer_id, target_id)
        if len(calls) == 2:
            # Bob re-offers the rejected row first.
            with SessionLocal() as other:
                update_where(
                    other,
                    ConnectionRequest,
                    {"id": request_id, "status": "rejected"},
                    ConnectionRequest.values_for(bob["id"], alice["id"]),
                )
        return pair

    monkeypatch.setattr(connection_service, "fetch_request_pair", racing_fetch)

    r = _send(client, alice, bob)
    assert r.status_code == 200
    assert r.json()["status"] == "received"

    with SessionLocal() as db:
        row = db.query(ConnectionRequest).one()
        assert (row.sender_id, row.receiver_id, row.status) == (bob["id"], alice["id"], "pending")


def test_other_write_failures_are_request_failed(client, make_student, monkeypatch) -> None:
    alice = make_student("alice@ucsc.edu")
    bob = make_student("bob@ucsc.edu")
    original = ConnectionRequest.values_for

    def bad_status(sender_id, receiver_id, status="pending"):
        return {**original(sender_id, receiver_id), "status": "maybe"}

    # The status CHECK constraint rejects the insert; that is not a duplicate.
    monkeypatch.setattr(ConnectionRequest, "values_for", staticmethod(bad_status))

    r = _send(client, alice, bob)
    assert r.status_code == 502
    assert r.json()["detail"].startswith("Failed to send connection request")

    monkeypatch.undo()
    assert _status(client, alice, bob) == "idle"

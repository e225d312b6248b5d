from __future__ import annotations


def test_discover_lists_other_students_with_status(client, make_student) -> None:
    alice = make_student("alice@ucsc.edu", name="Alice", interests=["Hiking"])
    bob = make_student("bob@ucsc.edu", name="Bob", major="Biology", year="Senior", interests=["surfing"])
    carol = make_student("carol@ucsc.edu", name="Carol", interests=["hiking", "chess"])

    client.post("/connections/requests", json={"receiver_id": bob["id"]}, headers=alice["headers"])

    r = client.get("/discover", headers=alice["headers"])
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 2
    assert body["viewer_interests"] == ["hiking"]
    assert body["message"] is None
    by_id = {p["user_id"]: p for p in body["profiles"]}
    assert alice["id"] not in by_id
    assert by_id[bob["id"]]["status"] == "pending"
    assert by_id[bob["id"]]["can_send"] is False
    assert by_id[carol["id"]]["status"] == "idle"
    assert by_id[carol["id"]]["label"] == "Send Connection Request"

    bob_view = client.get("/discover", headers=bob["headers"]).json()
    statuses = {p["user_id"]: p["status"] for p in bob_view["profiles"]}
    assert statuses[alice["id"]] == "received"


def test_discover_filters(client, make_student) -> None:
    viewer = make_student("viewer@ucsc.edu", name="Viewer")
    make_student("bob@ucsc.edu", name="Bob", major="Biology", year="Senior", interests=["surfing"])
    make_student("carol@ucsc.edu", name="Carol", interests=["hiking", "chess"])

    def names(**params) -> list[str]:
        r = client.get("/discover", params=params, headers=viewer["headers"])
        assert r.status_code == 200
        return [p["name"] for p in r.json()["profiles"]]

    assert names(major="Biology") == ["Bob"]
    assert names(year="Junior") == ["Carol"]
    assert names(interest="Hiking") == ["Carol"]
    assert names(custom_interest="SURFING") == ["Bob"]
    assert names(q="car") == ["Carol"]
    assert names(major="Biology", interest="hiking") == []


def test_discover_empty_message(client, make_student) -> None:
    viewer = make_student("lonely@ucsc.edu")
    body = client.get("/discover", params={"q": "nobody"}, headers=viewer["headers"]).json()
    assert body["profiles"] == []
    assert body["total"] == 0
    assert body["message"].startswith("Looks a little empty here")
    assert body["filters"]["search"] == "nobody"

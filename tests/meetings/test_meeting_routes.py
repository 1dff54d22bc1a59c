from __future__ import annotations

from datetime import date


def test_create_update_and_filter(client, login):
    login(5)
    resp = client.post(
        "/meetings/create",
        json={"meeting_name": "Budget review", "date": "2024-03-13", "dept": "Finance", "prop_slot": "10:00"},
    )
    assert resp.status_code == 201
    meeting_id = resp.get_json()["meeting_id"]

    resp = client.put(f"/meetings/{meeting_id}", json={"status": "Completed", "notes": "approved"})
    assert resp.status_code == 200
    assert resp.get_json()["meeting"]["status"] == "Completed"

    body = client.post("/meetings/filter", json={"date_filter": "custom", "custom_date": "2024-03-13"}).get_json()
    [m] = body["meetings"]
    assert m["meeting_name"] == "Budget review"
    assert m["date"] == "2024-03-13"
    assert m["notes"] == "approved"


def test_today_filter_uses_current_date(login):
    client = login(5)
    client.post("/meetings/create", json={"meeting_name": "Standup", "date": date.today().strftime("%Y-%m-%d")})
    client.post("/meetings/create", json={"meeting_name": "Old", "date": "2020-01-01"})

    body = client.post("/meetings/filter", json={"date_filter": "today"}).get_json()

    assert [m["meeting_name"] for m in body["meetings"]] == ["Standup"]


def test_missing_meeting_name_is_400(login):
    resp = login(5).post("/meetings/create", json={"date": "2024-03-13"})
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "meeting_name is required"}


def test_updating_someone_elses_meeting_is_404(client, login):
    login(5)
    meeting_id = client.post("/meetings/create", json={"meeting_name": "1:1", "date": "2024-03-13"}).get_json()["meeting_id"]

    login(6)
    resp = client.put(f"/meetings/{meeting_id}", json={"status": "Cancelled"})

    assert resp.status_code == 404
    assert resp.get_json() == {"message": "Meeting not found"}

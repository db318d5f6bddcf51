from __future__ import annotations

API = "/api/schedules"


def _employee(client, code="EMP-100", email="rina@decorops.com"):
    res = client.post(
        "/api/employees",
        json={"employee_code": code, "name": "Rina Susanti", "email": email, "join_date": "2024-02-01"},
    )
    assert res.status_code == 201, res.text
    return res.json()["id"]


def _schedule(client, employee_id, start, end, day="2025-06-01", **extra):
    body = {
        "employee_id": employee_id,
        "date": day,
        "shift_start": start,
        "shift_end": end,
        "shift_type": "full_day",
        "location": "Grand Ballroom",
        "notes": "",
    }
    body.update(extra)
    return client.post(API, json=body)


def test_confirmed_shift_blocks_overlap_but_not_touching(client):
    emp = _employee(client)
    res = _schedule(client, emp, "08:00", "16:00", status="confirmed")
    assert res.status_code == 201
    existing = res.json()

    res = _schedule(client, emp, "15:00", "20:00")
    assert res.status_code == 422
    body = res.json()
    assert body["code"] == "schedule_conflict"
    assert body["conflict"]["entry_id"] == existing["id"]
    assert body["conflict"]["start_time"] == "08:00"
    assert body["conflict"]["end_time"] == "16:00"
    assert body["conflict"]["status"] == "confirmed"

    res = _schedule(client, emp, "16:00", "20:00")
    assert res.status_code == 201


def test_invalid_window_is_422(client):
    emp = _employee(client)
    res = _schedule(client, emp, "12:00", "09:00")
    assert res.status_code == 422
    assert res.json()["code"] == "invalid_window"


def test_unknown_employee_is_404(client):
    res = _schedule(client, "nope", "09:00", "12:00")
    assert res.status_code == 404
    assert res.json()["code"] == "not_found"


def test_put_reschedules_and_excludes_itself(client):
    emp = _employee(client)
    entry = _schedule(client, emp, "09:00", "12:00").json()

    res = client.put(
        f"{API}/{entry['id']}",
        json={
            "employee_id": emp,
            "date": "2025-06-01",
            "shift_start": "10:00",
            "shift_end": "13:00",
            "shift_type": "morning",
        },
    )
    assert res.status_code == 200
    assert res.json()["shift_start"] == "10:00:00"


def test_put_that_cancels_skips_the_overlap_check(client):
    emp = _employee(client)
    _schedule(client, emp, "09:00", "12:00", status="confirmed")
    other = _schedule(client, emp, "13:00", "15:00").json()

    body = {"employee_id": emp, "date": "2025-06-01", "shift_start": "10:00", "shift_end": "14:00", "shift_type": "morning"}
    res = client.put(f"{API}/{other['id']}", json=body)
    assert res.status_code == 422
    assert res.json()["code"] == "schedule_conflict"

    res = client.put(f"{API}/{other['id']}", json={**body, "status": "cancelled"})
    assert res.status_code == 200, res.text
    assert res.json()["status"] == "cancelled"
    assert res.json()["shift_start"] == "10:00:00"


def test_status_flow_and_terminal_edit(client):
    emp = _employee(client)
    entry = _schedule(client, emp, "09:00", "12:00").json()

    assert client.post(f"{API}/{entry['id']}/status", json={"status": "confirmed"}).status_code == 200
    assert client.post(f"{API}/{entry['id']}/status", json={"status": "completed"}).status_code == 200

    res = client.post(f"{API}/{entry['id']}/status", json={"status": "cancelled"})
    assert res.status_code == 422
    assert res.json()["code"] == "invalid_transition"

    res = client.put(
        f"{API}/{entry['id']}",
        json={"employee_id": emp, "date": "2025-06-01", "shift_start": "13:00", "shift_end": "14:00", "shift_type": "afternoon"},
    )
    assert res.status_code == 422


def test_delete_frees_window(client):
    emp = _employee(client)
    entry = _schedule(client, emp, "09:00", "12:00").json()

    assert client.delete(f"{API}/{entry['id']}").json() == {"ok": True}
    assert client.get(f"{API}/{entry['id']}").status_code == 404
    assert _schedule(client, emp, "09:00", "12:00").status_code == 201


def test_list_and_calendar(client):
    emp = _employee(client)
    _schedule(client, emp, "13:00", "17:00", day="2025-06-03")
    _schedule(client, emp, "08:00", "12:00", day="2025-06-03")
    _schedule(client, emp, "08:00", "12:00", day="2025-06-10")
    _schedule(client, emp, "08:00", "12:00", day="2025-07-01")

    rows = client.get(API, params={"employee_id": emp, "start_date": "2025-06-01", "end_date": "2025-06-30"}).json()
    assert [(r["date"], r["shift_start"]) for r in rows] == [
        ("2025-06-03", "08:00:00"),
        ("2025-06-03", "13:00:00"),
        ("2025-06-10", "08:00:00"),
    ]

    cal = client.get(f"{API}/calendar", params={"year": 2025, "month": 6}).json()
    assert cal["month"] == 6
    assert [d["date"] for d in cal["days"]] == ["2025-06-03", "2025-06-10"]
    assert len(cal["days"][0]["entries"]) == 2


def test_writes_are_audited(client):
    emp = _employee(client)
    _schedule(client, emp, "09:00", "12:00")

    logs = client.get("/api/audit-logs", params={"target_type": "schedule"}).json()
    assert [log["action_type"] for log in logs] == ["SCHEDULE_CREATE"]


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"

from datetime import date


MONDAY = "2031-01-06"
SUNDAY = "2031-01-05"


def create_barber(client, name="Alex Razor"):
    response = client.post("/barbers", json={"full_name": name})
    assert response.status_code == 201
    barber_id = response.json()["id"]
    for weekday in range(1, 6):
        r = client.put(
            f"/barbers/{barber_id}/working-hours/{weekday}",
            json={"start_time": "09:00", "end_time": "12:00"},
        )
        assert r.status_code == 200
    return barber_id


def create_service(client, name="Buzz Cut", minutes=30):
    response = client.post("/services", json={"name": name, "duration_minutes": minutes})
    assert response.status_code == 201
    return response.json()["id"]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_services(client):
    create_service(client)

    assert client.post("/services", json={"name": "Buzz Cut", "duration_minutes": 20}).status_code == 409
    assert client.post("/services", json={"name": "Zero", "duration_minutes": 0}).status_code == 422
    assert [s["name"] for s in client.get("/services").json()] == ["Buzz Cut"]


def test_working_hours_upsert_and_delete(client):
    barber_id = create_barber(client)

    r = client.put(
        f"/barbers/{barber_id}/working-hours/1",
        json={"start_time": "10:00", "end_time": "00:00"},
    )
    assert r.status_code == 200
    hours = client.get(f"/barbers/{barber_id}/working-hours").json()
    assert len(hours) == 5
    assert hours[0]["start_time"] == "10:00:00"

    assert client.delete(f"/barbers/{barber_id}/working-hours/1").status_code == 204
    assert client.delete(f"/barbers/{barber_id}/working-hours/1").status_code == 404
    assert client.put(
        f"/barbers/{barber_id}/working-hours/7",
        json={"start_time": "10:00", "end_time": "11:00"},
    ).status_code == 422


def test_backwards_interval_is_422(client):
    barber_id = create_barber(client)

    r = client.put(
        f"/barbers/{barber_id}/working-hours/2",
        json={"start_time": "12:00", "end_time": "09:00"},
    )
    assert r.status_code == 422

    r = client.post(
        f"/barbers/{barber_id}/breaks",
        json={"type": "everyday", "start_time": "11:00", "end_time": "10:00"},
    )
    assert r.status_code == 422


def test_availability_for_a_day(client):
    barber_id = create_barber(client)
    client.post(
        f"/barbers/{barber_id}/breaks",
        json={"type": "custom", "date": MONDAY, "start_time": "10:00", "end_time": "11:00"},
    )

    r = client.get(
        f"/barbers/{barber_id}/availability",
        params={"from_date": MONDAY, "service_duration": 30, "granularity": 30},
    )

    assert r.status_code == 200
    body = r.json()
    assert body["service_duration"] == 30
    assert body["granularity"] == 30
    assert body["days"] == [
        {"date": MONDAY, "time_slots": ["09:00", "09:30", "11:00", "11:30"]}
    ]


def test_availability_12h_and_day_off(client):
    barber_id = create_barber(client)
    service_id = create_service(client, minutes=60)
    client.post(f"/barbers/{barber_id}/days-off", json={"date": "2031-01-07"})

    r = client.get(
        f"/barbers/{barber_id}/availability",
        params={
            "from_date": SUNDAY,
            "to_date": "2031-01-07",
            "service_id": service_id,
            "granularity": 60,
            "style": "12h",
        },
    )

    days = {d["date"]: d["time_slots"] for d in r.json()["days"]}
    assert days == {
        SUNDAY: [],
        MONDAY: ["9:00 AM", "10:00 AM", "11:00 AM"],
        "2031-01-07": [],
    }


def test_availability_errors(client):
    barber_id = create_barber(client)

    assert client.get("/barbers/999/availability", params={"from_date": MONDAY}).status_code == 404
    assert client.get(
        f"/barbers/{barber_id}/availability", params={"from_date": MONDAY, "service_id": 999}
    ).status_code == 404

    r = client.get(
        f"/barbers/{barber_id}/availability",
        params={"from_date": MONDAY, "to_date": SUNDAY},
    )
    assert r.status_code == 422
    assert r.json()["detail"]["code"] == "InvalidRequest"

    r = client.get(
        f"/barbers/{barber_id}/availability",
        params={"from_date": MONDAY, "to_date": "2031-03-01"},
    )
    assert r.status_code == 422


def test_booking_flow(client):
    barber_id = create_barber(client)
    service_id = create_service(client)
    payload = {
        "barber_id": barber_id,
        "service_id": service_id,
        "appointment_date": MONDAY,
        "start_time": "09:30",
        "client_name": "Robin",
        "client_email": "robin@example.com",
    }

    r = client.post("/appointments", json=payload)
    assert r.status_code == 201
    appointment = r.json()
    assert appointment["status"] == "scheduled"
    assert appointment["duration_minutes"] == 30

    r = client.post("/appointments", json=payload)
    assert r.status_code == 409
    assert r.json()["detail"]["code"] == "SlotUnavailable"

    slots = client.get(
        f"/barbers/{barber_id}/availability",
        params={"from_date": MONDAY, "service_duration": 30, "granularity": 30},
    ).json()["days"][0]["time_slots"]
    assert "09:30" not in slots
    assert "10:00" in slots

    r = client.patch(
        f"/appointments/{appointment['id']}/reschedule",
        json={"appointment_date": MONDAY, "start_time": "10:00"},
    )
    assert r.status_code == 200
    assert r.json()["start_time"] == "10:00:00"

    r = client.patch(f"/appointments/{appointment['id']}/status", json={"status": "confirmed"})
    assert r.json()["status"] == "confirmed"

    listed = client.get("/appointments", params={"barber_id": barber_id, "on_date": MONDAY}).json()
    assert [a["id"] for a in listed] == [appointment["id"]]

    assert client.patch(f"/appointments/{appointment['id']}/cancel").status_code == 200
    assert client.patch(f"/appointments/{appointment['id']}/cancel").status_code == 409
    assert client.get("/appointments/999").status_code == 404


def test_booking_unknown_barber(client):
    service_id = create_service(client)
    r = client.post(
        "/appointments",
        json={
            "barber_id": 999,
            "service_id": service_id,
            "appointment_date": MONDAY,
            "start_time": "09:00",
            "client_name": "Robin",
            "client_email": "robin@example.com",
        },
    )
    assert r.status_code == 404
    assert r.json()["detail"]["code"] == "NotFound"


def test_today_lists_active_barbers(client):
    create_barber(client)
    client.post("/barbers", json={"full_name": "Gone", "is_active": False})

    r = client.get("/availability/today", params={"limit": 3})

    assert r.status_code == 200
    body = r.json()
    assert [b["full_name"] for b in body] == ["Alex Razor"]
    assert len(body[0]["time_slots"]) <= 3


def test_schedule_request_flow(client):
    barber_id = create_barber(client)

    r = client.post(
        "/schedule-requests",
        json={"kind": "day_off", "barber_id": barber_id, "date": MONDAY},
    )
    assert r.status_code == 201
    request_id = r.json()["id"]
    assert r.json()["status"] == "pending"

    # nothing changes until approval
    before = client.get(
        f"/barbers/{barber_id}/availability", params={"from_date": MONDAY}
    ).json()["days"][0]["time_slots"]
    assert before

    r = client.post(f"/schedule-requests/{request_id}/review", json={"approve": True})
    assert r.status_code == 200
    assert r.json()["status"] == "approved"

    after = client.get(
        f"/barbers/{barber_id}/availability", params={"from_date": MONDAY}
    ).json()["days"][0]["time_slots"]
    assert after == []

    assert client.post(
        f"/schedule-requests/{request_id}/review", json={"approve": False}
    ).status_code == 409
    assert client.get("/schedule-requests", params={"status": "pending"}).json() == []

    r = client.post(
        "/schedule-requests",
        json={
            "kind": "breaks",
            "barber_id": barber_id,
            "break_kind": "custom",
            "start_time": "10:00",
            "end_time": "11:00",
        },
    )
    assert r.status_code == 422


def test_dates_are_iso(client):
    barber_id = create_barber(client)
    r = client.post(f"/barbers/{barber_id}/days-off", json={"date": MONDAY})
    assert date.fromisoformat(r.json()["date"]) == date(2031, 1, 6)
    assert client.post(f"/barbers/{barber_id}/days-off", json={"date": MONDAY}).status_code == 409

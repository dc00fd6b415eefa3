from __future__ import annotations

from datetime import datetime, time

import pytest

from conftest import headers_for, make_user
from taskee.models.availability import Availability
from taskee.models.task import Task

URL = "/api/v1/planning/suggest"
MONDAY = "2024-01-01"


def _window(db, user, start, end, location, weekday=1):
    db.add(Availability(
        org_id=user.org_id, user_id=user.user_id, weekday=weekday,
        start_time=start, end_time=end, location=location,
    ))
    db.commit()


def _task(db, user, due):
    db.add(Task(org_id=user.org_id, title="Visit", assignee_id=user.user_id, due_date=due))
    db.commit()


@pytest.fixture()
def schedule(db, anna, bram):
    _window(db, anna, time(9), time(17), "Clinic North")
    _window(db, bram, time(10), time(12), "Clinic South")
    return anna, bram


def test_location_match_comes_first(client, manager, schedule):
    anna, bram = schedule
    body = {"date": MONDAY, "start_time": "10:00", "end_time": "11:00", "location": "Clinic North"}

    res = client.post(URL, json=body, headers=headers_for(manager))

    assert res.status_code == 200
    result = res.json()
    assert [r["user"]["user_id"] for r in result] == [str(anna.user_id), str(bram.user_id)]
    assert result[0]["location_matches"] is True
    assert result[0]["available_from"] == "09:00:00"
    assert result[0]["available_until"] == "17:00:00"
    assert result[1]["location"] == "Clinic South"


def test_busy_employee_ranks_lower(client, db, manager, schedule):
    anna, bram = schedule
    _task(db, anna, datetime(2024, 1, 1, 9, 0))
    _task(db, anna, datetime(2024, 1, 1, 15, 0))
    _task(db, bram, datetime(2024, 1, 2, 9, 0))

    res = client.post(URL, json={"date": MONDAY, "start_time": "10:00", "end_time": "11:00"},
                      headers=headers_for(manager))

    result = res.json()
    assert [r["user"]["name"] for r in result] == ["Bram", "Anna"]
    assert [r["assigned_tasks_that_day"] for r in result] == [0, 2]


def test_preferred_fallback_and_limit(client, db, org, manager, schedule):
    absent = make_user(db, org, "cas@north.test", name="Cas")
    body = {
        "date": MONDAY, "start_time": "10:00", "end_time": "11:00",
        "preferred_user_ids": [str(absent.user_id)],
    }

    full = client.post(URL, json=body, headers=headers_for(manager)).json()
    limited = client.post(URL, params={"limit": 1}, json=body, headers=headers_for(manager)).json()

    assert {r["user"]["name"] for r in full} == {"Anna", "Bram"}
    assert limited == full[:1]


def test_managers_and_inactive_staff_are_not_suggested(client, db, manager, schedule):
    anna, bram = schedule
    _window(db, manager, time(8), time(18), "Clinic North")
    bram.is_active = False
    db.commit()

    res = client.post(URL, json={"date": MONDAY, "start_time": "10:00", "end_time": "11:00"},
                      headers=headers_for(manager))

    assert [r["user"]["name"] for r in res.json()] == ["Anna"]


def test_no_one_available_returns_empty_list(client, manager, schedule):
    res = client.post(URL, json={"date": "2024-01-02", "start_time": "10:00", "end_time": "11:00"},
                      headers=headers_for(manager))

    assert res.status_code == 200
    assert res.json() == []


def test_other_org_sees_nothing(client, outsider_manager, schedule):
    res = client.post(URL, json={"date": MONDAY, "start_time": "10:00", "end_time": "11:00"},
                      headers=headers_for(outsider_manager))

    assert res.json() == []


def test_invalid_window(client, manager, schedule):
    res = client.post(URL, json={"date": MONDAY, "start_time": "11:00", "end_time": "10:00"},
                      headers=headers_for(manager))

    assert res.status_code == 400
    assert "detail" in res.json()


def test_staff_cannot_request_suggestions(client, anna):
    res = client.post(URL, json={"date": MONDAY, "start_time": "10:00", "end_time": "11:00"},
                      headers=headers_for(anna))

    assert res.status_code == 403

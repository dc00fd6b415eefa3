from __future__ import annotations

import uuid

from conftest import headers_for
from taskee.models.audit_log import AuditLog

URL = "/api/v1/availability/"


def _week(location="Clinic North"):
    return [
        {"weekday": 3, "start_time": "13:00", "end_time": "17:00", "location": location},
        {"weekday": 1, "start_time": "09:00", "end_time": "17:00", "location": location},
    ]


def test_staff_replaces_own_availability(client, anna):
    res = client.put(URL, json={"entries": _week()}, headers=headers_for(anna))

    assert res.status_code == 200
    body = res.json()
    assert [w["weekday"] for w in body] == [1, 3]
    assert all(w["user_id"] == str(anna.user_id) for w in body)

    listed = client.get(URL, headers=headers_for(anna)).json()
    assert listed == body


def test_replace_drops_previous_windows(client, anna):
    client.put(URL, json={"entries": _week()}, headers=headers_for(anna))

    res = client.put(
        URL,
        json={"entries": [{"weekday": 5, "start_time": "08:00", "end_time": "12:00", "location": "  "}]},
        headers=headers_for(anna),
    )

    assert res.status_code == 200
    assert len(res.json()) == 1
    assert res.json()[0]["weekday"] == 5
    assert res.json()[0]["location"] is None


def test_empty_list_clears_availability(client, anna):
    client.put(URL, json={"entries": _week()}, headers=headers_for(anna))

    res = client.put(URL, json={"entries": []}, headers=headers_for(anna))

    assert res.status_code == 200
    assert res.json() == []


def test_staff_cannot_change_colleague(client, anna, bram):
    res = client.put(URL, json={"user_id": str(bram.user_id), "entries": _week()}, headers=headers_for(anna))

    assert res.status_code == 403


def test_staff_cannot_view_colleague(client, anna, bram):
    res = client.get(URL, params={"user_id": str(bram.user_id)}, headers=headers_for(anna))

    assert res.status_code == 403


def test_viewing_unknown_or_foreign_user_is_not_found(client, manager, outsider_manager):
    unknown = client.get(URL, params={"user_id": str(uuid.uuid4())}, headers=headers_for(manager))
    foreign = client.get(URL, params={"user_id": str(outsider_manager.user_id)}, headers=headers_for(manager))

    assert unknown.status_code == 404
    assert foreign.status_code == 404


def test_manager_sets_staff_availability(client, db, manager, anna):
    res = client.put(URL, json={"user_id": str(anna.user_id), "entries": _week()}, headers=headers_for(manager))

    assert res.status_code == 200
    listed = client.get(URL, params={"user_id": str(anna.user_id)}, headers=headers_for(manager))
    assert len(listed.json()) == 2

    db.expire_all()
    audit = db.query(AuditLog).filter(AuditLog.resource_type == "availability").one()
    assert audit.action == "replace"
    assert audit.resource_id == str(anna.user_id)
    assert audit.details == {"windows": 2}


def test_unknown_user_is_not_found(client, manager):
    res = client.put(URL, json={"user_id": str(uuid.uuid4()), "entries": _week()}, headers=headers_for(manager))

    assert res.status_code == 404


def test_user_of_other_org_is_not_found(client, manager, outsider_manager):
    res = client.put(
        URL, json={"user_id": str(outsider_manager.user_id), "entries": _week()}, headers=headers_for(manager),
    )

    assert res.status_code == 404


def test_inverted_window_is_rejected_and_keeps_old_windows(client, anna):
    client.put(URL, json={"entries": _week()}, headers=headers_for(anna))

    res = client.put(
        URL,
        json={"entries": [{"weekday": 2, "start_time": "12:00", "end_time": "09:00"}]},
        headers=headers_for(anna),
    )

    assert res.status_code == 400
    assert len(client.get(URL, headers=headers_for(anna)).json()) == 2


def test_weekday_out_of_range_is_invalid(client, anna):
    res = client.put(
        URL,
        json={"entries": [{"weekday": 7, "start_time": "09:00", "end_time": "12:00"}]},
        headers=headers_for(anna),
    )

    assert res.status_code == 422

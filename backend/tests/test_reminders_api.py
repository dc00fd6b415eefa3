from __future__ import annotations

import uuid

from conftest import headers_for

URL = "/api/v1/reminders/"


def _remind(client, user, text="Bel klant terug", at="2024-01-02T09:00:00+00:00"):
    res = client.post(URL, json={"text": text, "remind_at": at}, headers=headers_for(user))
    assert res.status_code == 200
    return res.json()


def test_reminders_listed_by_time(client, anna):
    _remind(client, anna, "later", "2024-01-03T09:00:00+00:00")
    _remind(client, anna, "first", "2024-01-01T09:00:00+00:00")

    listed = client.get(URL, headers=headers_for(anna)).json()

    assert [r["text"] for r in listed] == ["first", "later"]
    assert all(r["sent"] is False for r in listed)


def test_text_is_trimmed_and_must_not_be_blank(client, anna):
    assert _remind(client, anna, "  Medicatie  ")["text"] == "Medicatie"

    res = client.post(URL, json={"text": "   ", "remind_at": "2024-01-02T09:00:00+00:00"},
                      headers=headers_for(anna))
    assert res.status_code == 422


def test_invalid_remind_at_is_rejected(client, anna):
    res = client.post(URL, json={"text": "x", "remind_at": "not a date"}, headers=headers_for(anna))

    assert res.status_code == 422


def test_update_own_reminder(client, anna):
    reminder = _remind(client, anna)

    res = client.patch(f"{URL}{reminder['id']}", json={"sent": True, "text": "Klaar"}, headers=headers_for(anna))

    assert res.status_code == 200
    assert res.json()["sent"] is True
    assert res.json()["text"] == "Klaar"
    assert res.json()["remind_at"] == reminder["remind_at"]


def test_null_fields_in_update_are_rejected(client, anna):
    reminder = _remind(client, anna)

    res = client.patch(f"{URL}{reminder['id']}", json={"text": None}, headers=headers_for(anna))

    assert res.status_code == 422


def test_colleague_reminders_are_invisible(client, anna, bram):
    reminder = _remind(client, anna)

    assert client.get(URL, headers=headers_for(bram)).json() == []
    assert client.patch(f"{URL}{reminder['id']}", json={"sent": True}, headers=headers_for(bram)).status_code == 404
    assert client.delete(f"{URL}{reminder['id']}", headers=headers_for(bram)).status_code == 404


def test_delete_reminder(client, anna):
    reminder = _remind(client, anna)

    assert client.delete(f"{URL}{reminder['id']}", headers=headers_for(anna)).status_code == 200
    assert client.get(URL, headers=headers_for(anna)).json() == []
    assert client.delete(f"{URL}{uuid.uuid4()}", headers=headers_for(anna)).status_code == 404

from __future__ import annotations

from conftest import headers_for, make_user
from taskee.models.customer import Customer
from taskee.models.user import ROLE_MANAGER
from taskee.services.customer_import import parse_rows

IMPORT_URL = "/api/v1/customers/import"

CSV = (
    "First Name,Last Name,Email,Company Name,City\n"
    "Sanne,de Vries,Sanne@Example.com,Bakkerij,Utrecht\n"
    ",Jansen,piet@example.com,,Zeist\n"
    "Karel,Appel,karel@example.com,,Amersfoort\n"
)


def _upload(client, user, content=CSV):
    return client.post(
        IMPORT_URL,
        files={"file": ("customers.csv", content.encode("utf-8"), "text/csv")},
        headers=headers_for(user),
    )


def test_parse_rows_maps_headers_and_numbers_lines():
    rows = parse_rows("Email,first_name,LAST NAME,Notes\n a@b.nl ,An,Bos,hi\n,,,\n")

    assert rows == [
        (2, {"email": "a@b.nl", "first_name": "An", "last_name": "Bos"}),
        (3, {}),
    ]


def test_import_creates_and_reports_bad_rows(client, db, manager):
    res = _upload(client, manager)

    assert res.status_code == 200
    assert res.json() == {
        "created": 2,
        "updated": 0,
        "errors": [{"line": 3, "message": "Missing required fields: first_name"}],
    }
    emails = {c.email for c in db.query(Customer).all()}
    assert emails == {"sanne@example.com", "karel@example.com"}


def test_reimport_updates_by_email(client, db, manager):
    _upload(client, manager)

    res = _upload(client, manager, "firstname,lastname,email,city\nSanne,Bakker,sanne@example.com,Houten\n")

    assert res.json() == {"created": 0, "updated": 1, "errors": []}
    db.expire_all()
    sanne = db.query(Customer).filter(Customer.email == "sanne@example.com").one()
    assert sanne.last_name == "Bakker"
    assert sanne.city == "Houten"


def test_duplicate_email_in_one_file_updates(client, db, manager):
    content = "first_name,last_name,email\nA,One,dup@example.com\nB,Two,DUP@example.com\n"

    res = _upload(client, manager, content)

    assert res.json()["created"] == 1
    assert res.json()["updated"] == 1
    assert db.query(Customer).count() == 1


def test_staff_cannot_import(client, anna):
    assert _upload(client, anna).status_code == 403


def test_refused_imports_do_not_count_against_the_limit(client, anna):
    statuses = [_upload(client, anna).status_code for _ in range(7)]

    assert statuses == [403] * 7


def test_non_utf8_file_is_rejected(client, manager):
    res = client.post(
        IMPORT_URL,
        files={"file": ("customers.csv", b"\xff\xfe\x00bad", "text/csv")},
        headers=headers_for(manager),
    )

    assert res.status_code == 400


def test_sixth_import_within_a_minute_is_throttled(client, manager, clock):
    for _ in range(5):
        assert _upload(client, manager).status_code == 200
    clock.advance(15)

    res = _upload(client, manager)

    assert res.status_code == 429
    assert res.headers["Retry-After"] == "45"
    assert res.json()["retry_after"] == 45


def test_throttle_resets_after_the_window(client, manager, clock):
    for _ in range(5):
        _upload(client, manager)
    clock.advance(61)

    assert _upload(client, manager).status_code == 200


def test_throttle_is_per_user(client, db, org, manager):
    second = make_user(db, org, "second@north.test", role=ROLE_MANAGER)
    for _ in range(5):
        _upload(client, manager)

    assert _upload(client, second).status_code == 200


def test_create_list_and_archive(client, manager, anna):
    created = client.post("/api/v1/customers/", json={
        "first_name": "Lotte", "last_name": "Smit", "email": "Lotte@Example.com", "city": "Baarn",
    }, headers=headers_for(anna))
    assert created.status_code == 200
    customer = created.json()
    assert customer["email"] == "lotte@example.com"

    dup = client.post("/api/v1/customers/", json={
        "first_name": "L", "last_name": "S", "email": "lotte@example.com",
    }, headers=headers_for(anna))
    assert dup.status_code == 409

    page = client.get("/api/v1/customers/", params={"q": "smit"}, headers=headers_for(anna)).json()
    assert page["total"] == 1

    archived = client.post(f"/api/v1/customers/{customer['id']}/archive", headers=headers_for(manager))
    assert archived.json()["archived_at"] is not None
    assert client.get("/api/v1/customers/", headers=headers_for(anna)).json()["total"] == 0
    only = client.get("/api/v1/customers/", params={"archived": "only"}, headers=headers_for(anna)).json()
    assert only["total"] == 1

    restored = client.post(f"/api/v1/customers/{customer['id']}/restore", headers=headers_for(manager))
    assert restored.json()["archived_at"] is None


def test_customer_of_other_org_is_not_found(client, anna, outsider_manager):
    created = client.post("/api/v1/customers/", json={
        "first_name": "Lotte", "last_name": "Smit", "email": "lotte@example.com",
    }, headers=headers_for(anna)).json()

    res = client.get(f"/api/v1/customers/{created['id']}", headers=headers_for(outsider_manager))

    assert res.status_code == 404

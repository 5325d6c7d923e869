import pytest
from fastapi.testclient import TestClient

from app.main import create_app

API = "/api/v1/students/"


def test_create_returns_generated_fields(client):
    response = client.post(API, json={"studentCode": "S001", "fullName": "Ann", "email": "a@x.com", "major": "CS"})

    assert response.status_code == 201
    body = response.json()
    assert isinstance(body["id"], int)
    assert body["createdAt"]
    assert body["studentCode"] == "S001"


def test_list_and_get(client, dao, make_student):
    first = dao.insert(make_student(code="S001"))
    second = dao.insert(make_student(code="S002"))

    listed = client.get(API).json()
    assert [s["id"] for s in listed] == [second.id, first.id]

    response = client.get(f"{API}{first.id}")
    assert response.status_code == 200
    assert response.json()["studentCode"] == "S001"


def test_get_missing_uses_error_envelope(client):
    response = client.get(f"{API}404")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "STUDENT_NOT_FOUND"


def test_update_ignores_student_code(client, dao, make_student):
    created = dao.insert(make_student())

    response = client.put(
        f"{API}{created.id}",
        json={"studentCode": "NEW", "fullName": "Ann Lee", "email": "ann@x.com", "major": "Math"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["studentCode"] == "S001"
    assert body["fullName"] == "Ann Lee"


def test_update_missing_is_404(client):
    response = client.put(f"{API}5", json={"fullName": "X", "email": "x@x.com"})
    assert response.status_code == 404


def test_delete(client, dao, make_student):
    created = dao.insert(make_student())

    assert client.delete(f"{API}{created.id}").status_code == 204
    assert client.delete(f"{API}{created.id}").status_code == 404


def test_validation_error_envelope(client):
    response = client.post(API, json={"studentCode": "S001", "fullName": "Ann", "email": "nope"})

    assert response.status_code == 422
    body = response.json()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert "email" in body["error"]["details"]


def test_database_down_is_503_json(test_settings, unreachable_dao):
    with TestClient(create_app(test_settings, dao=unreachable_dao)) as client:
        response = client.get(API)

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "STORAGE_UNAVAILABLE"


def test_health(client, test_settings, unreachable_dao):
    assert client.get("/health").json() == {"status": "ok", "database": True, "version": "1.0.0"}

    with TestClient(create_app(test_settings, dao=unreachable_dao)) as down:
        body = down.get("/health").json()
    assert body["status"] == "degraded"
    assert body["database"] is False


@pytest.mark.parametrize("student_id", ["0", "2147483648", "99999999999999999999"])
def test_out_of_range_id_is_rejected_before_storage(client, student_id):
    for response in (
        client.get(f"{API}{student_id}"),
        client.put(f"{API}{student_id}", json={"fullName": "X", "email": "x@x.com"}),
        client.delete(f"{API}{student_id}"),
    ):
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

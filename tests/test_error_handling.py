"""
Error handling and edge case tests.

Covers:
- the exception hierarchy (status codes, codes, payloads)
- the JSON error envelope produced by the API handlers
- duplicate rows and rollbacks in the repositories
- date parsing edge cases shared by the services
"""

import uuid
from datetime import date

import pytest
from fastapi import APIRouter
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.exceptions import (
    ConflictError,
    FetchFailureError,
    NotAuthenticatedError,
    NotFoundError,
    ServiceValidationError,
    SmartMealError,
    UnauthorizedError,
    WriteFailureError,
)
from main import app
from repositories import UserRepository
from services.base import parse_date, require_user

from test_fixtures import client, db_session, make_user, unique_email


# =============================================================================
# EXCEPTION HIERARCHY
# =============================================================================


@pytest.mark.parametrize(
    "exc_class, status, code",
    [
        (ServiceValidationError, 400, "SERVICE_VALIDATION_ERROR"),
        (NotFoundError, 404, "NOT_FOUND"),
        (ConflictError, 409, "CONFLICT"),
        (UnauthorizedError, 401, "UNAUTHORIZED"),
        (NotAuthenticatedError, 401, "NOT_AUTHENTICATED"),
        (FetchFailureError, 502, "FETCH_FAILURE"),
        (WriteFailureError, 502, "WRITE_FAILURE"),
    ],
)
def test_exception_status_and_code(exc_class, status, code):
    exc = exc_class()
    assert isinstance(exc, SmartMealError)
    assert exc.http_status == status
    assert exc.error_code == code
    assert str(exc) == exc_class.default_message


def test_not_authenticated_is_unauthorized():
    with pytest.raises(UnauthorizedError):
        require_user(None)


def test_to_dict():
    exc = ServiceValidationError("bad", details={"field": "start_date"}, code="BAD_DATE")
    assert exc.to_dict() == {"message": "bad", "code": "BAD_DATE", "details": {"field": "start_date"}}
    assert NotFoundError("gone").to_dict() == {"message": "gone"}


def test_write_failure_carries_list_id():
    list_id = uuid.uuid4()
    assert WriteFailureError("items failed", list_id=list_id).to_dict() == {
        "message": "items failed",
        "list_id": str(list_id),
    }
    assert "list_id" not in WriteFailureError("list failed").to_dict()


# =============================================================================
# API ERROR ENVELOPE
# =============================================================================

_errors = APIRouter(prefix="/_errors")


@_errors.get("/conflict")
def _raise_conflict():
    raise ConflictError("already there", details={"email": "a@b.com"})


@_errors.get("/fetch")
def _raise_fetch():
    raise FetchFailureError()


@_errors.get("/boom")
def _raise_unexpected():
    raise RuntimeError("secret internals")


app.include_router(_errors)


def test_service_error_envelope():
    r = TestClient(app).get("/_errors/conflict")

    assert r.status_code == 409
    body = r.json()
    assert body["success"] is False
    assert body["error"] == {
        "code": "CONFLICT",
        "message": "already there",
        "details": {"email": "a@b.com"},
    }
    assert "timestamp" in body


def test_fetch_failure_is_502():
    r = TestClient(app).get("/_errors/fetch")
    assert r.status_code == 502
    assert r.json()["error"]["code"] == "FETCH_FAILURE"


def test_unexpected_error_is_500_without_details():
    r = TestClient(app, raise_server_exceptions=False).get("/_errors/boom")

    assert r.status_code == 500
    assert r.json()["error"]["code"] == "INTERNAL_SERVER_ERROR"
    assert "secret internals" not in r.text


def test_unknown_route_is_404_envelope():
    r = TestClient(app).get("/no-such-route")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "HTTP_404"


def test_unknown_ids_are_404(client, db_session):
    user = make_user(db_session)
    headers = {"X-User-ID": str(user.user_id)}

    for path in (f"/recipes/{uuid.uuid4()}", f"/plans/{uuid.uuid4()}", f"/shopping-lists/{uuid.uuid4()}"):
        r = client.get(path, headers=headers)
        assert r.status_code == 404, path

    r = client.patch(
        f"/shopping-lists/items/{uuid.uuid4()}", json={"is_purchased": True}, headers=headers
    )
    assert r.status_code == 404


def test_generate_for_unknown_plan_creates_empty_list(client, db_session):
    # An unknown plan has no entries owned by the caller
    user = make_user(db_session)

    r = client.post(
        f"/plans/{uuid.uuid4()}/shopping-list",
        json={"start_date": "2024-01-01", "end_date": "2024-01-01"},
        headers={"X-User-ID": str(user.user_id)},
    )

    assert r.status_code == 201
    assert r.json()["item_count"] == 0


# =============================================================================
# REPOSITORY EDGE CASES
# =============================================================================


def test_duplicate_email_is_conflict(db_session: Session):
    repo = UserRepository(db_session)
    email = unique_email("duplicate")
    first = repo.create_user(email=email, full_name="User One")

    with pytest.raises(ConflictError):
        repo.create_user(email=email, full_name="User Two")

    # Session is usable again after the rollback
    assert repo.get_by_email(email).user_id == first.user_id
    assert repo.exists(first.user_id)


def test_delete_missing_entity_returns_false(db_session: Session):
    assert UserRepository(db_session).delete(uuid.uuid4()) is False


# =============================================================================
# DATE PARSING
# =============================================================================


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-02-29", date(2024, 2, 29)),
        (date(2024, 1, 1), date(2024, 1, 1)),
    ],
)
def test_parse_date(value, expected):
    assert parse_date(value) == expected


@pytest.mark.parametrize("value", ["2023-02-29", "", "2024/01/01", None, 20240101])
def test_parse_date_rejects(value):
    with pytest.raises(ServiceValidationError) as exc_info:
        parse_date(value, "start_date")
    assert "start_date" in exc_info.value.details

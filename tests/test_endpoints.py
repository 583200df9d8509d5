import uuid
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from api.dependencies import get_db
from main import app
from repositories.shopping_repository import ShoppingListItemRepository
from services.shopping_service import ShoppingService

from test_fixtures import client, db_session, make_entry, make_plan, make_recipe, make_user


def auth(user_id) -> dict:
    return {"X-User-ID": str(user_id)}


def test_health_check():
    r = TestClient(app).get("/health-check")
    assert r.status_code == 200
    assert r.json()["service"] == "SmartMeal"


def test_database_health(client):
    r = client.get("/health-check/db")
    assert r.status_code == 200
    assert r.json() == {"database": "ok"}


def test_request_id_header(client):
    r = client.get("/health-check")
    assert r.headers["X-Request-ID"]
    assert "X-Process-Time" in r.headers


# =============================================================================
# FULL FLOW
# =============================================================================


def test_plan_to_shopping_list_flow(client, db_session):
    user = make_user(db_session)
    headers = auth(user.user_id)

    r = client.post(
        "/recipes",
        json={
            "title": "Egg Fried Rice",
            "ingredients": [
                {"ingredient_name": "Rice", "quantity": 100, "unit": "g"},
                {"ingredient_name": "Egg", "quantity": 2, "unit": "pcs"},
            ],
        },
        headers=headers,
    )
    assert r.status_code == 201
    recipe_a = r.json()["recipe_id"]
    assert len(r.json()["ingredients"]) == 2

    r = client.post(
        "/recipes",
        json={
            "title": "Onion Rice",
            "ingredients": [
                {"ingredient_name": "Rice", "quantity": 50, "unit": "g"},
                {"ingredient_name": "Onion", "quantity": 1, "unit": "pcs"},
            ],
        },
        headers=headers,
    )
    recipe_b = r.json()["recipe_id"]

    r = client.post(
        "/plans",
        json={"name": "First week", "start_date": "2024-01-01", "end_date": "2024-01-07"},
        headers=headers,
    )
    assert r.status_code == 201
    plan_id = r.json()["plan_id"]

    for body in (
        {"recipe_id": recipe_a, "meal_date": "2024-01-02", "meal_type": "dinner", "servings": 2},
        {"recipe_id": recipe_b, "meal_date": "2024-01-05", "meal_type": "lunch"},
        {"meal_date": "2024-01-04", "meal_type": "breakfast"},
    ):
        r = client.post(f"/plans/{plan_id}/entries", json=body, headers=headers)
        assert r.status_code == 201

    r = client.get(f"/plans/{plan_id}", headers=headers)
    assert [e["meal_date"] for e in r.json()["entries"]] == ["2024-01-02", "2024-01-04", "2024-01-05"]

    r = client.post(
        f"/plans/{plan_id}/shopping-list",
        json={"start_date": "2024-01-01", "end_date": "2024-01-07"},
        headers=headers,
    )
    assert r.status_code == 201
    assert r.json()["item_count"] == 3
    list_id = r.json()["list_id"]

    r = client.get(f"/shopping-lists/{list_id}", headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "Shopping List for 2024-01-01 to 2024-01-07"
    assert body["plan_id"] == plan_id
    assert {(i["product_name"], i["unit"]): Decimal(str(i["quantity"])) for i in body["items"]} == {
        ("Rice", "g"): Decimal(250),
        ("Egg", "pcs"): Decimal(4),
        ("Onion", "pcs"): Decimal(1),
    }
    assert not any(i["is_purchased"] for i in body["items"])

    item_id = body["items"][0]["list_item_id"]
    r = client.patch(f"/shopping-lists/items/{item_id}", json={"is_purchased": True}, headers=headers)
    assert r.status_code == 200
    assert r.json()["is_purchased"] is True

    r = client.delete(f"/shopping-lists/items/{item_id}", headers=headers)
    assert r.status_code == 200
    assert r.json()["deleted"] == item_id

    r = client.get("/shopping-lists", headers=headers)
    assert [sl["list_id"] for sl in r.json()] == [list_id]
    assert len(r.json()[0]["items"]) == 2

    r = client.delete(f"/shopping-lists/{list_id}", headers=headers)
    assert r.status_code == 200
    assert client.get(f"/shopping-lists/{list_id}", headers=headers).status_code == 404


def test_generate_for_empty_range(client, db_session):
    user = make_user(db_session)
    plan = make_plan(db_session, user.user_id, date(2024, 1, 1), date(2024, 1, 7))

    r = client.post(
        f"/plans/{plan.plan_id}/shopping-list",
        json={"start_date": "2024-01-01", "end_date": "2024-01-07"},
        headers=auth(user.user_id),
    )

    assert r.status_code == 201
    assert r.json()["item_count"] == 0


def test_add_item_by_hand(client, db_session):
    user = make_user(db_session)
    r = client.post(
        f"/plans/{make_plan(db_session, user.user_id, date(2024, 1, 1), date(2024, 1, 7)).plan_id}/shopping-list",
        json={"start_date": "2024-01-01", "end_date": "2024-01-07"},
        headers=auth(user.user_id),
    )
    list_id = r.json()["list_id"]

    r = client.post(
        f"/shopping-lists/{list_id}/items",
        json={"product_name": "Coffee", "quantity": 1, "unit": "bag"},
        headers=auth(user.user_id),
    )

    assert r.status_code == 201
    assert r.json()["product_name"] == "Coffee"
    assert r.json()["is_purchased"] is False


def test_recipe_endpoints(client, db_session):
    user = make_user(db_session)
    headers = auth(user.user_id)
    recipe = make_recipe(db_session, user.user_id, "Porridge", [("Oats", 50, "g")])

    r = client.get("/recipes", params={"q": "porr"}, headers=headers)
    assert [x["title"] for x in r.json()] == ["Porridge"]

    r = client.post(
        f"/recipes/{recipe.recipe_id}/ingredients",
        json={"ingredient_name": "Milk", "quantity": 0.25, "unit": "l"},
        headers=headers,
    )
    assert r.status_code == 201
    row_id = r.json()["ingredient_row_id"]

    r = client.delete(f"/recipes/{recipe.recipe_id}/ingredients/{row_id}", headers=headers)
    assert r.status_code == 200

    r = client.get(f"/recipes/{recipe.recipe_id}", headers=headers)
    assert [i["ingredient_name"] for i in r.json()["ingredients"]] == ["Oats"]

    assert client.delete(f"/recipes/{recipe.recipe_id}", headers=headers).status_code == 200
    assert client.get(f"/recipes/{recipe.recipe_id}", headers=headers).status_code == 404


def test_recipe_step_and_copy_endpoints(client, db_session):
    owner = make_user(db_session)
    other = make_user(db_session, "Omar Haddad")
    recipe = make_recipe(db_session, owner.user_id, "Porridge", [("Oats", 50, "g")], is_public=True)

    r = client.post(
        f"/recipes/{recipe.recipe_id}/steps", json={"instruction": "Boil the oats"}, headers=auth(owner.user_id)
    )
    assert r.status_code == 201
    assert r.json()["step_number"] == 1
    step_id = r.json()["step_id"]

    r = client.post(f"/recipes/{recipe.recipe_id}/steps", json={"instruction": ""}, headers=auth(owner.user_id))
    assert r.status_code == 422

    r = client.post(f"/recipes/{recipe.recipe_id}/copy", headers=auth(other.user_id))
    assert r.status_code == 201
    copy = r.json()
    assert copy["recipe_id"] != str(recipe.recipe_id)
    assert copy["user_id"] == str(other.user_id)
    assert copy["is_public"] is False
    assert [i["ingredient_name"] for i in copy["ingredients"]] == ["Oats"]
    assert [s["instruction"] for s in copy["steps"]] == ["Boil the oats"]

    # Other users cannot edit the source steps, the owner can
    r = client.delete(f"/recipes/{recipe.recipe_id}/steps/{step_id}", headers=auth(other.user_id))
    assert r.status_code == 404
    r = client.delete(f"/recipes/{recipe.recipe_id}/steps/{step_id}", headers=auth(owner.user_id))
    assert r.status_code == 200
    assert r.json()["deleted"] == step_id

    assert client.get(f"/recipes/{recipe.recipe_id}", headers=auth(owner.user_id)).json()["steps"] == []
    r = client.get(f"/recipes/{copy['recipe_id']}", headers=auth(other.user_id))
    assert len(r.json()["steps"]) == 1


def test_copy_private_recipe_is_404(client, db_session):
    owner = make_user(db_session)
    other = make_user(db_session, "Omar Haddad")
    recipe = make_recipe(db_session, owner.user_id, "Family Secret", [("Saffron", 1, "g")])

    r = client.post(f"/recipes/{recipe.recipe_id}/copy", headers=auth(other.user_id))

    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"


def test_plan_endpoints(client, db_session):
    user = make_user(db_session)
    headers = auth(user.user_id)
    plan = make_plan(db_session, user.user_id, date(2024, 1, 1), date(2024, 1, 7))
    entry = make_entry(db_session, plan.plan_id, date(2024, 1, 3))

    r = client.get("/plans", headers=headers)
    assert [p["plan_id"] for p in r.json()] == [str(plan.plan_id)]

    r = client.delete(f"/plans/{plan.plan_id}/entries/{entry.entry_id}", headers=headers)
    assert r.status_code == 200

    r = client.delete(f"/plans/{plan.plan_id}", headers=headers)
    assert r.status_code == 200
    assert client.get(f"/plans/{plan.plan_id}", headers=headers).status_code == 404


# =============================================================================
# ERRORS
# =============================================================================


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/recipes"),
        ("get", "/plans"),
        ("get", "/shopping-lists"),
        ("get", f"/shopping-lists/{uuid.uuid4()}"),
    ],
)
def test_missing_user_header_is_401(client, method, path):
    r = getattr(client, method)(path)
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "NOT_AUTHENTICATED"


def test_generate_without_user_is_401_and_writes_nothing(client, db_session):
    user = make_user(db_session)
    plan = make_plan(db_session, user.user_id, date(2024, 1, 1), date(2024, 1, 7))

    r = client.post(
        f"/plans/{plan.plan_id}/shopping-list",
        json={"start_date": "2024-01-01", "end_date": "2024-01-07"},
    )

    assert r.status_code == 401
    assert client.get("/shopping-lists", headers=auth(user.user_id)).json() == []


def test_malformed_user_header_is_422(client):
    r = client.get("/plans", headers={"X-User-ID": "not-a-uuid"})
    assert r.status_code == 422


@pytest.mark.parametrize(
    "body",
    [
        {"start_date": "2024-01-07", "end_date": "2024-01-01"},
        {"start_date": "2024-01-01"},
        {"start_date": "01/01/2024", "end_date": "2024-01-07"},
    ],
)
def test_generate_rejects_bad_dates(client, db_session, body):
    user = make_user(db_session)
    plan = make_plan(db_session, user.user_id, date(2024, 1, 1), date(2024, 1, 7))

    r = client.post(f"/plans/{plan.plan_id}/shopping-list", json=body, headers=auth(user.user_id))

    assert r.status_code == 422
    assert r.json()["success"] is False
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


def test_entry_outside_plan_is_400(client, db_session):
    user = make_user(db_session)
    plan = make_plan(db_session, user.user_id, date(2024, 1, 1), date(2024, 1, 7))

    r = client.post(
        f"/plans/{plan.plan_id}/entries",
        json={"meal_date": "2024-02-01", "meal_type": "dinner"},
        headers=auth(user.user_id),
    )

    assert r.status_code == 400
    assert r.json()["error"]["code"] == "SERVICE_VALIDATION_ERROR"


def test_unknown_meal_type_is_422(client, db_session):
    user = make_user(db_session)
    plan = make_plan(db_session, user.user_id, date(2024, 1, 1), date(2024, 1, 7))

    r = client.post(
        f"/plans/{plan.plan_id}/entries",
        json={"meal_date": "2024-01-02", "meal_type": "brunch"},
        headers=auth(user.user_id),
    )
    assert r.status_code == 422


def test_other_users_list_is_404(client, db_session):
    owner = make_user(db_session)
    other = make_user(db_session, "Omar Haddad")
    plan = make_plan(db_session, owner.user_id, date(2024, 1, 1), date(2024, 1, 7))
    r = client.post(
        f"/plans/{plan.plan_id}/shopping-list",
        json={"start_date": "2024-01-01", "end_date": "2024-01-07"},
        headers=auth(owner.user_id),
    )

    r = client.get(f"/shopping-lists/{r.json()['list_id']}", headers=auth(other.user_id))

    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"


def test_generate_from_other_users_plan_is_empty(client, db_session):
    owner = make_user(db_session)
    intruder = make_user(db_session, "Omar Haddad")
    secret = make_recipe(db_session, owner.user_id, "Secret", [("Saffron", 3, "g")])
    plan = make_plan(db_session, owner.user_id, date(2024, 1, 1), date(2024, 1, 7))
    make_entry(db_session, plan.plan_id, date(2024, 1, 3), secret.recipe_id)

    r = client.post(
        f"/plans/{plan.plan_id}/shopping-list",
        json={"start_date": "2024-01-01", "end_date": "2024-01-07"},
        headers=auth(intruder.user_id),
    )

    assert r.status_code == 201
    assert r.json()["item_count"] == 0

    body = client.get(f"/shopping-lists/{r.json()['list_id']}", headers=auth(intruder.user_id)).json()
    assert body["items"] == []
    assert body["plan_id"] is None

    # Deleting the owner's plan does not touch the intruder's list
    assert client.delete(f"/plans/{plan.plan_id}", headers=auth(owner.user_id)).status_code == 200
    r = client.get(f"/shopping-lists/{r.json()['list_id']}", headers=auth(intruder.user_id))
    assert r.status_code == 200


def test_item_insert_failure_reports_list_id(client, db_session, monkeypatch):
    user = make_user(db_session)
    recipe = make_recipe(db_session, user.user_id, "Toast", [("Bread", 2, "slices")])
    plan = make_plan(db_session, user.user_id, date(2024, 1, 1), date(2024, 1, 7))
    make_entry(db_session, plan.plan_id, date(2024, 1, 1), recipe.recipe_id)

    def fail(self, items):
        raise OperationalError("INSERT", {}, Exception("disk full"))

    monkeypatch.setattr(ShoppingListItemRepository, "bulk_create", fail)

    r = client.post(
        f"/plans/{plan.plan_id}/shopping-list",
        json={"start_date": "2024-01-01", "end_date": "2024-01-07"},
        headers=auth(user.user_id),
    )

    assert r.status_code == 502
    error = r.json()["error"]
    assert error["code"] == "WRITE_FAILURE"
    orphan = error["list_id"]

    # The orphaned list is visible and can be cleaned up
    r = client.get(f"/shopping-lists/{orphan}", headers=auth(user.user_id))
    assert r.status_code == 200
    assert r.json()["items"] == []
    assert client.delete(f"/shopping-lists/{orphan}", headers=auth(user.user_id)).status_code == 200


def test_toggle_item_with_mocked_service(monkeypatch):
    item = SimpleNamespace(
        list_item_id=uuid.uuid4(),
        list_id=uuid.uuid4(),
        product_name="Milk",
        quantity=Decimal("1"),
        unit="l",
        is_purchased=True,
    )
    seen = {}

    def fake_set(db, list_item_id, user_id, is_purchased):
        seen.update(list_item_id=list_item_id, user_id=user_id, is_purchased=is_purchased)
        return item

    monkeypatch.setattr(ShoppingService, "set_item_purchased", fake_set)
    monkeypatch.setitem(app.dependency_overrides, get_db, lambda: None)
    user_id = uuid.uuid4()

    r = TestClient(app).patch(
        f"/shopping-lists/items/{item.list_item_id}",
        json={"is_purchased": True},
        headers=auth(user_id),
    )

    assert r.status_code == 200
    assert r.json()["product_name"] == "Milk"
    assert seen == {"list_item_id": item.list_item_id, "user_id": user_id, "is_purchased": True}

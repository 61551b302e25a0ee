from conftest import (
    OWNER,
    STRANGER,
    auth_headers,
    create_test_reservation,
    create_test_restaurant,
    create_test_table,
)
from models import ReservationDB, TableDB

# =========================================================
# TEST: POST /api/tables
# =========================================================
def test_create_table(client, db):
    restaurant = create_test_restaurant(db)

    payload = {"restaurantId": restaurant.id, "name": "Table 1", "capacity": 4}
    response = client.post("/api/tables", json=payload, headers=auth_headers())
    assert response.status_code == 201

    data = response.json()["data"]
    assert data["name"] == "Table 1"
    assert data["capacity"] == 4
    assert data["restaurantId"] == restaurant.id
    assert data["id"]
    assert data["createdAt"]
    assert db.query(TableDB).filter(TableDB.id == data["id"]).first() is not None


def test_create_table_accepts_seats_alias(client, db):
    restaurant = create_test_restaurant(db)

    payload = {"restaurantId": restaurant.id, "name": "Booth", "seats": "6"}
    response = client.post("/api/tables", json=payload, headers=auth_headers())
    assert response.status_code == 201
    assert response.json()["data"]["capacity"] == 6


def test_create_table_normalizes_capacity(client, db):
    restaurant = create_test_restaurant(db)

    for given, stored in ((0, 1), (-3, 1), (2.7, 2)):
        payload = {"restaurantId": restaurant.id, "name": "T", "capacity": given}
        response = client.post("/api/tables", json=payload, headers=auth_headers())
        assert response.status_code == 201
        assert response.json()["data"]["capacity"] == stored


def test_create_table_without_capacity(client, db):
    restaurant = create_test_restaurant(db)

    response = client.post("/api/tables", json={"restaurantId": restaurant.id, "name": "T"}, headers=auth_headers())
    assert response.status_code == 400


def test_create_table_with_non_numeric_capacity(client, db):
    restaurant = create_test_restaurant(db)

    payload = {"restaurantId": restaurant.id, "name": "T", "capacity": "four"}
    response = client.post("/api/tables", json=payload, headers=auth_headers())
    assert response.status_code == 400

    detail = response.json()["detail"]
    assert detail["success"] is False
    assert detail["code"] == "INVALID_ARGUMENT"
    assert "capacity" in detail["error"]
    assert db.query(TableDB).count() == 0


def test_create_table_not_owner(client, db):
    restaurant = create_test_restaurant(db)

    payload = {"restaurantId": restaurant.id, "name": "Table 1", "capacity": 4}
    response = client.post("/api/tables", json=payload, headers=auth_headers(STRANGER))
    assert response.status_code == 403
    assert response.json()["detail"]["code"] == "FORBIDDEN"
    assert db.query(TableDB).count() == 0


def test_create_table_restaurant_not_found(client):
    payload = {"restaurantId": "missing", "name": "Table 1", "capacity": 4}
    response = client.post("/api/tables", json=payload, headers=auth_headers())
    assert response.status_code == 404


def test_create_table_requires_token(client, db):
    restaurant = create_test_restaurant(db)

    payload = {"restaurantId": restaurant.id, "name": "Table 1", "capacity": 4}
    response = client.post("/api/tables", json=payload)
    assert response.status_code == 401

# =========================================================
# TEST: GET /api/tables
# =========================================================
def test_get_tables_in_natural_order(client, db):
    restaurant = create_test_restaurant(db)
    for name in ("Table 10", "Table 2", "Table 1"):
        create_test_table(db, restaurant.id, name)
    create_test_table(db, create_test_restaurant(db, "Other").id, "Foreign")

    response = client.get("/api/tables", params={"restaurantId": restaurant.id}, headers=auth_headers())
    assert response.status_code == 200
    assert [t["name"] for t in response.json()["data"]] == ["Table 1", "Table 2", "Table 10"]


def test_get_tables_missing_restaurant_id(client):
    response = client.get("/api/tables", headers=auth_headers())
    assert response.status_code == 400


def test_get_tables_not_owner(client, db):
    restaurant = create_test_restaurant(db)

    response = client.get("/api/tables", params={"restaurantId": restaurant.id}, headers=auth_headers(STRANGER))
    assert response.status_code == 403

# =========================================================
# TEST: PUT /api/tables/{id}
# =========================================================
def test_update_table(client, db):
    restaurant = create_test_restaurant(db)
    table = create_test_table(db, restaurant.id, "Old Name", 4)

    payload = {"restaurantId": restaurant.id, "name": "New Name", "capacity": 6}
    response = client.put(f"/api/tables/{table.id}", json=payload, headers=auth_headers())
    assert response.status_code == 200

    data = response.json()["data"]
    assert data["name"] == "New Name"
    assert data["capacity"] == 6
    assert data["restaurantId"] == restaurant.id


def test_update_table_not_found(client, db):
    restaurant = create_test_restaurant(db)

    payload = {"restaurantId": restaurant.id, "name": "DoesNotExist", "capacity": 4}
    response = client.put("/api/tables/missing", json=payload, headers=auth_headers())
    assert response.status_code == 404


def test_update_table_restaurant_mismatch(client, db):
    mine = create_test_restaurant(db)
    theirs = create_test_restaurant(db, "Theirs", owner_id=STRANGER)
    table = create_test_table(db, theirs.id, "Their Table", 4)

    # forged id: my restaurant, their table
    payload = {"restaurantId": mine.id, "name": "Hijacked", "capacity": 1}
    response = client.put(f"/api/tables/{table.id}", json=payload, headers=auth_headers(OWNER))
    assert response.status_code == 403

    db.refresh(table)
    assert table.name == "Their Table"


def test_update_table_not_owner(client, db):
    restaurant = create_test_restaurant(db)
    table = create_test_table(db, restaurant.id, "Table 1", 4)

    payload = {"restaurantId": restaurant.id, "name": "Mine now", "capacity": 4}
    response = client.put(f"/api/tables/{table.id}", json=payload, headers=auth_headers(STRANGER))
    assert response.status_code == 403

# =========================================================
# TEST: DELETE /api/tables/{id}
# =========================================================
def test_delete_table(client, db):
    restaurant = create_test_restaurant(db)
    table = create_test_table(db, restaurant.id, "ToDelete", 4)

    response = client.delete(f"/api/tables/{table.id}", headers=auth_headers())
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert db.query(TableDB).count() == 0


def test_delete_table_is_idempotent(client):
    response = client.delete("/api/tables/missing", headers=auth_headers())
    assert response.status_code == 200
    assert response.json()["success"] is True


def test_delete_table_not_owner(client, db):
    restaurant = create_test_restaurant(db)
    table = create_test_table(db, restaurant.id, "Table 1", 4)

    response = client.delete(f"/api/tables/{table.id}", headers=auth_headers(STRANGER))
    assert response.status_code == 403
    assert db.query(TableDB).count() == 1


def test_delete_table_keeps_reservations(client, db):
    restaurant = create_test_restaurant(db)
    table = create_test_table(db, restaurant.id, "Table 1", 4)
    reservation = create_test_reservation(db, restaurant.id, table.id)

    response = client.delete(f"/api/tables/{table.id}", headers=auth_headers())
    assert response.status_code == 200

    orphan = db.query(ReservationDB).filter(ReservationDB.id == reservation.id).first()
    assert orphan is not None
    assert orphan.table_id == table.id

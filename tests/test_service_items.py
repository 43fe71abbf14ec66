from schedule_pro.models import Appointment, ServiceItem

from .conftest import MONDAY, auth_headers, make_service_item


def test_admin_creates_service_item(client, admin):
    response = client.post(
        "/service-item", json={"type": "Massage", "price": 50, "duration": 45}, headers=auth_headers(admin)
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Service created successfully"
    assert body["data"]["type"] == "Massage"
    assert body["data"]["duration"] == 45


def test_invalid_service_item(client, admin):
    headers = auth_headers(admin)
    assert client.post("/service-item", json={"type": "", "price": 5, "duration": 10}, headers=headers).status_code == 422
    assert client.post("/service-item", json={"type": "X", "price": -1, "duration": 10}, headers=headers).status_code == 422
    assert client.post("/service-item", json={"type": "X", "price": 5, "duration": 0}, headers=headers).status_code == 422


def test_customer_cannot_create(client, customer):
    response = client.post(
        "/service-item", json={"type": "Massage", "price": 50, "duration": 45}, headers=auth_headers(customer)
    )
    assert response.status_code == 403


def test_any_authenticated_user_can_list(client, db, customer):
    make_service_item(db, type="A")
    make_service_item(db, type="B")

    response = client.get("/service-item", headers=auth_headers(customer))

    assert response.status_code == 200
    assert sorted(item["type"] for item in response.json()) == ["A", "B"]


def test_listing_requires_token(client):
    assert client.get("/service-item").status_code == 401


def test_get_service_item(client, customer, service_item):
    response = client.get(f"/service-item/{service_item.id}", headers=auth_headers(customer))
    assert response.json()["id"] == service_item.id


def test_unknown_service_item(client, customer):
    response = client.get("/service-item/missing", headers=auth_headers(customer))
    assert response.status_code == 404
    assert response.json()["detail"] == "Service not found"


def test_update_service_item(client, db, admin, service_item):
    response = client.put(
        f"/service-item/{service_item.id}", json={"price": 42.5}, headers=auth_headers(admin)
    )
    assert response.status_code == 200
    db.expire_all()
    item = db.get(ServiceItem, service_item.id)
    assert item.price == 42.5
    assert item.type == "Haircut"


def test_delete_service_item(client, db, admin, service_item):
    item_id = service_item.id
    response = client.delete(f"/service-item/{item_id}", headers=auth_headers(admin))
    assert response.status_code == 200
    db.expire_all()
    assert db.get(ServiceItem, item_id) is None


def test_cannot_delete_booked_service_item(client, db, admin, customer, service_item):
    db.add(
        Appointment(
            customer_id=customer.id,
            service_id=service_item.id,
            date=MONDAY,
            time="09:00",
            price=30.0,
            duration=60,
            status="PENDING",
        )
    )
    db.commit()

    response = client.delete(f"/service-item/{service_item.id}", headers=auth_headers(admin))

    assert response.status_code == 409
    assert response.json()["detail"] == "Service has appointments and cannot be deleted"

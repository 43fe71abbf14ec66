import pytest

from schedule_pro.models import Role, StaffAvailability

from .conftest import MONDAY_INDEX, add_window, auth_headers, make_user


def _create(client, headers, staff_id, day=MONDAY_INDEX, start="09:00", end="12:00"):
    return client.post(
        "/staff-availability",
        json={"staffId": staff_id, "dayOfWeek": day, "startTime": start, "endTime": end},
        headers=headers,
    )


class TestCreateAvailability:
    def test_staff_creates_own_window(self, client, staff):
        response = _create(client, auth_headers(staff), staff.id)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Availability created successfully"
        assert body["data"] == {
            "dayOfWeek": MONDAY_INDEX,
            "startTime": "09:00",
            "endTime": "12:00",
            "staffAssociated": staff.name,
        }

    def test_admin_creates_window_for_staff(self, client, admin, staff):
        assert _create(client, auth_headers(admin), staff.id).status_code == 201

    def test_staff_cannot_create_for_others(self, client, db, staff):
        other = make_user(db, Role.STAFF)
        assert _create(client, auth_headers(staff), other.id).status_code == 403

    def test_customer_cannot_have_windows(self, client, admin, customer):
        response = _create(client, auth_headers(admin), customer.id)
        assert response.status_code == 400

    @pytest.mark.parametrize(
        "start, end",
        [("12:00", "09:00"), ("09:00", "09:00"), ("9:00", "12:00"), ("09:00", "24:00")],
    )
    def test_invalid_window(self, client, staff, start, end):
        response = _create(client, auth_headers(staff), staff.id, start=start, end=end)
        assert response.status_code == 422

    def test_day_out_of_range(self, client, staff):
        assert _create(client, auth_headers(staff), staff.id, day=7).status_code == 422

    @pytest.mark.parametrize(
        "start, end",
        [("08:00", "10:00"), ("11:00", "13:00"), ("10:00", "11:00"), ("08:00", "13:00")],
    )
    def test_overlapping_window_conflicts(self, client, db, staff, start, end):
        add_window(db, staff, start="09:00", end="12:00")

        response = _create(client, auth_headers(staff), staff.id, start=start, end=end)

        assert response.status_code == 409
        assert response.json()["detail"] == "Staff member is already available on the given day and time"

    def test_adjacent_windows_do_not_conflict(self, client, db, staff):
        add_window(db, staff, start="09:00", end="12:00")
        assert _create(client, auth_headers(staff), staff.id, start="12:00", end="15:00").status_code == 201

    def test_same_hours_on_another_day(self, client, db, staff):
        add_window(db, staff, start="09:00", end="12:00")
        assert _create(client, auth_headers(staff), staff.id, day=2).status_code == 201


class TestReadAvailability:
    def test_admin_lists_everything(self, client, db, admin, staff):
        add_window(db, staff)
        add_window(db, make_user(db, Role.STAFF))
        response = client.get("/staff-availability", headers=auth_headers(admin))
        assert len(response.json()) == 2

    def test_me(self, client, db, staff):
        add_window(db, staff)
        add_window(db, make_user(db, Role.STAFF))
        response = client.get("/staff-availability/availability/me", headers=auth_headers(staff))
        assert [w["staffId"] for w in response.json()] == [staff.id]

    def test_me_is_staff_only(self, client, customer):
        response = client.get("/staff-availability/availability/me", headers=auth_headers(customer))
        assert response.status_code == 403

    def test_by_staff(self, client, db, customer, staff):
        add_window(db, staff)
        response = client.get(f"/staff-availability/staff/{staff.id}", headers=auth_headers(customer))
        assert response.json()[0]["staffAssociated"] == staff.name

    def test_by_unknown_staff(self, client, customer):
        response = client.get("/staff-availability/staff/missing", headers=auth_headers(customer))
        assert response.status_code == 404


class TestUpdateAvailability:
    def test_update_window(self, client, db, staff):
        window = add_window(db, staff, start="09:00", end="12:00")

        response = client.put(
            f"/staff-availability/{window.id}", json={"endTime": "13:00"}, headers=auth_headers(staff)
        )

        assert response.status_code == 200
        assert response.json()["data"]["endTime"] == "13:00"

    def test_update_does_not_conflict_with_itself(self, client, db, staff):
        window = add_window(db, staff, start="09:00", end="12:00")
        response = client.put(
            f"/staff-availability/{window.id}", json={"startTime": "10:00"}, headers=auth_headers(staff)
        )
        assert response.status_code == 200

    def test_update_into_other_window(self, client, db, staff):
        add_window(db, staff, start="13:00", end="17:00")
        window = add_window(db, staff, start="09:00", end="12:00")
        response = client.put(
            f"/staff-availability/{window.id}", json={"endTime": "14:00"}, headers=auth_headers(staff)
        )
        assert response.status_code == 409

    def test_update_inverted_window(self, client, db, staff):
        window = add_window(db, staff, start="09:00", end="12:00")
        response = client.put(
            f"/staff-availability/{window.id}", json={"startTime": "12:30"}, headers=auth_headers(staff)
        )
        assert response.status_code == 400

    def test_unknown_window(self, client, staff):
        response = client.put("/staff-availability/missing", json={}, headers=auth_headers(staff))
        assert response.status_code == 404
        assert response.json()["detail"] == "Availability not found"


def test_delete_window(client, db, staff):
    window = add_window(db, staff)
    window_id = window.id

    response = client.delete(f"/staff-availability/{window_id}", headers=auth_headers(staff))

    assert response.status_code == 200
    db.expire_all()
    assert db.get(StaffAvailability, window_id) is None


def test_staff_cannot_delete_foreign_window(client, db, staff):
    window = add_window(db, make_user(db, Role.STAFF))
    response = client.delete(f"/staff-availability/{window.id}", headers=auth_headers(staff))
    assert response.status_code == 403

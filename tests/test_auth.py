from datetime import datetime, timedelta

from schedule_pro import email_service
from schedule_pro.email_service import EmailDeliveryError
from schedule_pro.models import User, UserSession
from schedule_pro.security import (
    EMAIL_VERIFICATION_TOKEN_TYPE,
    PASSWORD_RESET_TOKEN_TYPE,
    create_action_token,
    verify_password_bcrypt,
)

from .conftest import DEFAULT_PASSWORD, auth_headers


def _login(client, user, password=DEFAULT_PASSWORD):
    return client.post("/auth/login", json={"email": user.email, "password": password})


def _token_from_link(link: str) -> str:
    return link.split("token=", 1)[1]


class TestLoginAndSessions:
    def test_login_sets_refresh_cookie(self, client, db, customer):
        response = _login(client, customer)

        assert response.status_code == 200
        body = response.json()
        assert body["accessToken"]
        assert body["expiresIn"] == 900
        set_cookie = response.headers["set-cookie"]
        assert "refreshToken=" in set_cookie
        assert "HttpOnly" in set_cookie
        assert db.query(UserSession).filter(UserSession.user_id == customer.id).count() == 1

    def test_login_is_case_insensitive_on_email(self, client, customer):
        response = client.post(
            "/auth/login", json={"email": customer.email.upper(), "password": DEFAULT_PASSWORD}
        )
        assert response.status_code == 200

    def test_login_wrong_password(self, client, customer):
        response = _login(client, customer, password="Wrong1!")
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_login_unknown_email(self, client):
        response = client.post("/auth/login", json={"email": "ghost@example.com", "password": "x"})
        assert response.status_code == 401

    def test_refresh_rotates_token(self, client, db, customer):
        _login(client, customer)
        old_token = db.query(UserSession).one().refresh_token

        response = client.post("/auth/refresh")

        assert response.status_code == 200
        assert response.json()["accessToken"]
        db.expire_all()
        assert db.query(UserSession).one().refresh_token != old_token

    def test_refresh_without_cookie(self, client):
        response = client.post("/auth/refresh")
        assert response.status_code == 401
        assert response.json()["detail"] == "Missing refresh token"

    def test_refresh_with_unknown_cookie(self, client):
        response = client.post("/auth/refresh", cookies={"refreshToken": "bogus"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired refresh token"

    def test_expired_session_is_removed(self, client, db, customer):
        db.add(
            UserSession(
                user_id=customer.id,
                refresh_token="stale",
                expires_at=datetime.utcnow() - timedelta(minutes=1),
            )
        )
        db.commit()

        response = client.post("/auth/refresh", cookies={"refreshToken": "stale"})

        assert response.status_code == 401
        db.expire_all()
        assert db.query(UserSession).count() == 0

    def test_logout_revokes_session(self, client, db, customer):
        _login(client, customer)

        response = client.post("/auth/logout")

        assert response.status_code == 204
        db.expire_all()
        assert db.query(UserSession).count() == 0

    def test_logout_without_session_is_noop(self, client):
        assert client.post("/auth/logout").status_code == 204


class TestPasswordReset:
    def test_forgot_password_sends_link(self, client, customer, sent_emails):
        response = client.post("/auth/forgot-password", json={"email": customer.email})

        assert response.status_code == 200
        assert response.json()["message"] == "Password reset email sent successfully"
        assert sent_emails[0]["kind"] == "password_reset"
        assert sent_emails[0]["to"] == customer.email
        assert "/reset-password?token=" in sent_emails[0]["link"]

    def test_forgot_password_missing_email(self, client):
        response = client.post("/auth/forgot-password", json={})
        assert response.status_code == 400
        assert response.json()["detail"] == "Some required properties are missing from the request."

    def test_forgot_password_unknown_user(self, client):
        response = client.post("/auth/forgot-password", json={"email": "ghost@example.com"})
        assert response.status_code == 404

    def test_forgot_password_email_failure(self, client, customer, monkeypatch):
        async def failing(*args, **kwargs):
            raise EmailDeliveryError("down")

        monkeypatch.setattr(email_service, "send_password_reset_email", failing)
        response = client.post("/auth/forgot-password", json={"email": customer.email})
        assert response.status_code == 502

    def test_reset_password_with_emailed_token(self, client, db, customer, sent_emails):
        _login(client, customer)
        client.post("/auth/forgot-password", json={"email": customer.email})
        token = _token_from_link(sent_emails[0]["link"])

        response = client.post(
            "/auth/reset-password",
            json={"token": token, "newPassword": "N3wPass!", "confirmNewPassword": "N3wPass!"},
        )

        assert response.status_code == 200
        db.expire_all()
        user = db.get(User, customer.id)
        assert verify_password_bcrypt("N3wPass!", user.password)
        # every open session is revoked
        assert db.query(UserSession).count() == 0

    def test_reset_token_works_only_once(self, client, db, customer, sent_emails):
        client.post("/auth/forgot-password", json={"email": customer.email})
        token = _token_from_link(sent_emails[0]["link"])
        first = client.post(
            "/auth/reset-password",
            json={"token": token, "newPassword": "N3wPass!", "confirmNewPassword": "N3wPass!"},
        )
        assert first.status_code == 200

        replay = client.post(
            "/auth/reset-password",
            json={"token": token, "newPassword": "Takeover1!", "confirmNewPassword": "Takeover1!"},
        )

        assert replay.status_code == 400
        assert replay.json()["detail"] == "Invalid or expired token"
        db.expire_all()
        assert verify_password_bcrypt("N3wPass!", db.get(User, customer.id).password)

    def test_reset_token_dies_after_password_change(self, client, db, customer):
        token = create_action_token(customer, PASSWORD_RESET_TOKEN_TYPE, 60)
        client.put(
            f"/user/{customer.id}/password",
            json={"currentPassword": DEFAULT_PASSWORD, "newPassword": "N3wPass!", "confirmNewPassword": "N3wPass!"},
            headers=auth_headers(customer),
        )

        response = client.post(
            "/auth/reset-password",
            json={"token": token, "newPassword": "Other1!x", "confirmNewPassword": "Other1!x"},
        )

        assert response.status_code == 400

    def test_reset_password_mismatch(self, client, customer):
        token = create_action_token(customer, PASSWORD_RESET_TOKEN_TYPE, 60)
        response = client.post(
            "/auth/reset-password",
            json={"token": token, "newPassword": "N3wPass!", "confirmNewPassword": "Other1!x"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Passwords do not match"

    def test_reset_password_rejects_verification_token(self, client, customer):
        token = create_action_token(customer, EMAIL_VERIFICATION_TOKEN_TYPE, 60)
        response = client.post(
            "/auth/reset-password",
            json={"token": token, "newPassword": "N3wPass!", "confirmNewPassword": "N3wPass!"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid or expired token"

    def test_reset_password_weak_password(self, client, customer):
        token = create_action_token(customer, PASSWORD_RESET_TOKEN_TYPE, 60)
        response = client.post(
            "/auth/reset-password",
            json={"token": token, "newPassword": "weak", "confirmNewPassword": "weak"},
        )
        assert response.status_code == 422


class TestEmailVerification:
    def test_verify_and_confirm_email(self, client, db, customer, sent_emails):
        response = client.post("/auth/verify-email", json={"email": customer.email})
        assert response.status_code == 200
        token = _token_from_link(sent_emails[0]["link"])

        response = client.post("/auth/confirm-email", json={"token": token})

        assert response.status_code == 200
        assert response.json()["message"] == "Email verified successfully"
        db.expire_all()
        assert db.get(User, customer.id).email_verified_at is not None

    def test_confirm_email_after_address_change(self, client, db, customer, sent_emails):
        client.post("/auth/verify-email", json={"email": customer.email})
        token = _token_from_link(sent_emails[0]["link"])
        client.put(f"/user/{customer.id}", json={"email": "fresh@example.com"}, headers=auth_headers(customer))

        response = client.post("/auth/confirm-email", json={"token": token})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid or expired token"
        db.expire_all()
        assert db.get(User, customer.id).email_verified_at is None

    def test_confirm_email_without_token(self, client):
        response = client.post("/auth/confirm-email", json={})
        assert response.status_code == 400


class TestOtp:
    def test_send_and_verify_otp_marks_phone_verified(self, client, db, customer, fake_twilio):
        response = client.post("/auth/send-otp", json={"phone": customer.phone})
        assert response.status_code == 200
        assert response.json()["message"] == f"The OTP has been sent to {customer.phone}"

        response = client.post("/auth/verify-otp", json={"phone": customer.phone, "otp": fake_twilio.valid_code})

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "The code is valid"}
        db.expire_all()
        assert db.get(User, customer.id).phone_verified_at is not None

    def test_wrong_code(self, client, customer):
        client.post("/auth/send-otp", json={"phone": customer.phone})
        response = client.post("/auth/verify-otp", json={"phone": customer.phone, "otp": "000000"})

        assert response.status_code == 200
        assert response.json() == {"success": False, "message": "Invalid or expired code"}

    def test_send_otp_requires_phone(self, client):
        assert client.post("/auth/send-otp", json={}).status_code == 400

    def test_send_otp_invalid_phone(self, client):
        assert client.post("/auth/send-otp", json={"phone": "12"}).status_code == 400

    def test_verify_otp_requires_code(self, client):
        assert client.post("/auth/verify-otp", json={"phone": "+15550001111"}).status_code == 400

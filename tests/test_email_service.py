import pytest
import resend

from schedule_pro import email_service
from schedule_pro.email_service import EmailDeliveryError
from schedule_pro.email_templates import appointment_confirmation_template, password_reset_template


def test_confirmation_template_escapes_user_text():
    mjml = appointment_confirmation_template(
        "Ann <script>", "Cut & Color", "Bob", "2030-01-07", "10:00", "11:00", 30, notes="<b>hi</b>"
    )
    assert "Ann &lt;script&gt;" in mjml
    assert "Cut &amp; Color" in mjml
    assert "&lt;b&gt;hi&lt;/b&gt;" in mjml
    assert "10:00 - 11:00" in mjml
    assert "$30.00" in mjml


def test_reset_template_contains_link():
    mjml = password_reset_template("https://app.test/reset-password?token=abc", 60)
    assert 'href="https://app.test/reset-password?token=abc"' in mjml
    assert "60 minutes" in mjml


async def test_send_without_api_key(monkeypatch):
    monkeypatch.setattr(email_service, "RESEND_API_KEY", None)
    with pytest.raises(EmailDeliveryError):
        await email_service.send_email("a@example.com", "Hi", "<mjml></mjml>")


async def test_send_through_resend(monkeypatch):
    sent = {}

    def fake_send(params):
        sent.update(params)
        return {"id": "email_1"}

    monkeypatch.setattr(email_service, "RESEND_API_KEY", "re_test")
    monkeypatch.setattr(email_service, "compile_mjml_to_html", lambda mjml: "<html>ok</html>")
    monkeypatch.setattr(resend.Emails, "send", fake_send)

    result = await email_service.send_password_reset_email("a@example.com", "https://x/reset", 60)

    assert result == {"id": "email_1"}
    assert sent["to"] == ["a@example.com"]
    assert sent["html"] == "<html>ok</html>"
    assert "Reset Your Password" in sent["subject"]


async def test_provider_failure_is_wrapped(monkeypatch):
    def failing_send(params):
        raise RuntimeError("rate limited")

    monkeypatch.setattr(email_service, "RESEND_API_KEY", "re_test")
    monkeypatch.setattr(email_service, "compile_mjml_to_html", lambda mjml: "<html></html>")
    monkeypatch.setattr(resend.Emails, "send", failing_send)

    with pytest.raises(EmailDeliveryError):
        await email_service.send_email("a@example.com", "Hi", "<mjml></mjml>")

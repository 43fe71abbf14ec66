"""
Email Service using Resend
Provides email functionality using MJML templates for responsive design
"""

import logging
from typing import Optional, Union

import resend
from mjml import mjml_to_html

from .config import EMAIL_FROM_ADDRESS, RESEND_API_KEY
from .email_templates import (
    appointment_confirmation_template,
    email_verification_template,
    password_reset_template,
)

logger = logging.getLogger(__name__)

resend.api_key = RESEND_API_KEY


class EmailDeliveryError(Exception):
    """Raised when an email cannot be compiled or handed to the provider"""


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    try:
        result = mjml_to_html(mjml_content)
    except Exception as e:
        logger.error(f"MJML compilation error: {e}")
        raise EmailDeliveryError(f"Failed to compile MJML template: {str(e)}") from e

    # Result exposes html/errors as keys or attributes depending on the mjml release
    if isinstance(result, dict):
        errors, html = result.get("errors"), result.get("html", "")
    else:
        errors, html = getattr(result, "errors", None), getattr(result, "html", str(result))
    if errors:
        logger.warning(f"MJML compilation warnings: {errors}")
    return html


async def send_email(
    to: Union[str, list[str]],
    subject: str,
    mjml_content: str,
    from_address: Optional[str] = None,
) -> dict:
    """
    Send an email through Resend

    Args:
        to: Recipient email(s)
        subject: Email subject line
        mjml_content: MJML template content (will be compiled to HTML)
        from_address: Optional custom from address

    Returns:
        Send response dict
    """
    if not RESEND_API_KEY:
        logger.error("❌ No email service configured - RESEND_API_KEY missing")
        raise EmailDeliveryError("Email service not configured")

    html_content = compile_mjml_to_html(mjml_content)
    recipients = [to] if isinstance(to, str) else to

    try:
        logger.info(f"📧 Sending email via Resend to: {recipients}")
        response = resend.Emails.send(
            {
                "from": from_address or EMAIL_FROM_ADDRESS,
                "to": recipients,
                "subject": subject,
                "html": html_content,
            }
        )
        logger.info(f"✅ Email sent successfully via Resend: {response}")
        return response
    except Exception as e:
        logger.error(f"❌ Email send error to {recipients}: {e}")
        raise EmailDeliveryError(f"Failed to send email: {str(e)}") from e


# ============================================
# Pre-built emails for account and booking events
# ============================================


async def send_password_reset_email(to: str, reset_link: str, expires_minutes: int) -> dict:
    """Send password reset email"""
    return await send_email(
        to=to,
        subject="Reset Your Password - Schedule Pro",
        mjml_content=password_reset_template(reset_link, expires_minutes),
    )


async def send_email_verification(to: str, user_name: str, verify_link: str) -> dict:
    """Send email address verification link"""
    return await send_email(
        to=to,
        subject="Verify Your Email - Schedule Pro",
        mjml_content=email_verification_template(user_name, verify_link),
    )


async def send_appointment_confirmation(
    to: str,
    customer_name: str,
    service_name: str,
    staff_name: str,
    date: str,
    start_time: str,
    end_time: str,
    price: float,
    notes: Optional[str] = None,
) -> dict:
    """Send booking confirmation to the customer"""
    return await send_email(
        to=to,
        subject=f"Appointment booked: {service_name} on {date}",
        mjml_content=appointment_confirmation_template(
            customer_name, service_name, staff_name, date, start_time, end_time, price, notes
        ),
    )

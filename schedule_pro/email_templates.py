"""
MJML Email Templates
Transactional emails for account and booking events
"""

from html import escape
from typing import Optional

THEME = {
    "primary": "#4f46e5",
    "background": "#f8fafc",
    "text_primary": "#0f172a",
    "text_secondary": "#334155",
    "text_muted": "#64748b",
    "border": "#e2e8f0",
}


def get_base_template(
    title: str,
    preview_text: str,
    content_sections: str,
    cta_url: Optional[str] = None,
    cta_label: Optional[str] = None,
) -> str:
    """Base MJML template wrapper for all emails"""

    cta_section = ""
    if cta_url and cta_label:
        cta_section = f"""
        <mj-section background-color="#ffffff" padding="0 40px 40px 40px">
          <mj-column>
            <mj-button
              href="{cta_url}"
              background-color="{THEME['primary']}"
              color="#ffffff"
              font-weight="600"
              border-radius="8px"
              padding="18px 40px"
              font-size="16px">
              {cta_label}
            </mj-button>
          </mj-column>
        </mj-section>
        """

    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="-apple-system, BlinkMacSystemFont, 'Segoe UI', 'Helvetica Neue', Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}">
        <mj-section background-color="#ffffff" padding="40px 40px 24px 40px">
          <mj-column>
            <mj-text font-size="24px" font-weight="600" color="{THEME['text_primary']}" line-height="1.3" padding="0 0 16px 0">
              {title}
            </mj-text>
            {content_sections}
          </mj-column>
        </mj-section>

        {cta_section}

        <mj-section padding="24px 20px">
          <mj-column>
            <mj-text align="center" font-size="13px" color="{THEME['text_muted']}" padding="0">
              Schedule Pro
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def password_reset_template(reset_link: str, expires_minutes: int) -> str:
    """Password reset MJML template"""
    content = f"""
            <mj-text>
              We received a request to reset your password.
            </mj-text>
            <mj-text>
              Click the button below to create a new password. This link will expire in {expires_minutes} minutes.
            </mj-text>
            <mj-text font-size="13px" color="{THEME['text_muted']}">
              If you didn't request this, you can safely ignore this email. Your password won't be changed.
            </mj-text>
    """
    return get_base_template(
        title="Reset Your Password",
        preview_text="Reset your Schedule Pro password",
        content_sections=content,
        cta_url=reset_link,
        cta_label="Reset Password",
    )


def email_verification_template(user_name: str, verify_link: str) -> str:
    """Email address verification MJML template"""
    content = f"""
            <mj-text>
              Hi {escape(user_name)},
            </mj-text>
            <mj-text>
              Please confirm that this is your email address by clicking the button below.
            </mj-text>
    """
    return get_base_template(
        title="Verify Your Email",
        preview_text="Confirm your email address",
        content_sections=content,
        cta_url=verify_link,
        cta_label="Verify Email",
    )


def appointment_confirmation_template(
    customer_name: str,
    service_name: str,
    staff_name: str,
    date: str,
    start_time: str,
    end_time: str,
    price: float,
    notes: Optional[str] = None,
) -> str:
    """Appointment booked MJML template sent to the customer"""
    notes_section = ""
    if notes:
        notes_section = f"""
            <mj-text font-size="14px" color="{THEME['text_muted']}">
              Notes: {escape(notes)}
            </mj-text>
        """

    content = f"""
            <mj-text>
              Hi {escape(customer_name)}, your appointment request has been received and is pending confirmation.
            </mj-text>
            <mj-table>
              <tr><td style="padding: 4px 0; color: {THEME['text_muted']};">Service</td><td>{escape(service_name)}</td></tr>
              <tr><td style="padding: 4px 0; color: {THEME['text_muted']};">With</td><td>{escape(staff_name)}</td></tr>
              <tr><td style="padding: 4px 0; color: {THEME['text_muted']};">Date</td><td>{date}</td></tr>
              <tr><td style="padding: 4px 0; color: {THEME['text_muted']};">Time</td><td>{start_time} - {end_time}</td></tr>
              <tr><td style="padding: 4px 0; color: {THEME['text_muted']};">Price</td><td>${price:.2f}</td></tr>
            </mj-table>
            {notes_section}
    """
    return get_base_template(
        title="Appointment Booked",
        preview_text=f"{service_name} on {date} at {start_time}",
        content_sections=content,
    )

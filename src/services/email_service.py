"""Email service using Resend for transactional emails."""

import logging
from datetime import datetime, timezone
from html import escape
from typing import Any
from urllib.parse import quote

import resend

from src.api.middleware.error_handler import EmailDeliveryError
from src.core.config import get_settings

logger = logging.getLogger(__name__)

CONTACT_TYPES: dict[str, tuple[str, str]] = {
    "founders": ("Contact Founders", "Get in touch with our startup founders"),
    "call": ("Call Us", "Schedule a call with our team"),
    "deck": ("Request Detailed Deck", "Get our comprehensive pitch deck"),
    "csr": ("Support via CSR", "Corporate Social Responsibility support"),
}
DEFAULT_CONTACT_TYPE = ("Contact Us", "Get in touch with our team")


def contact_type_info(contact_type: str | None) -> tuple[str, str]:
    """Return the (title, description) pair for a contact form type."""
    return CONTACT_TYPES.get(contact_type or "", DEFAULT_CONTACT_TYPE)


class EmailService:
    """Service for sending transactional emails via Resend."""

    def __init__(self) -> None:
        """Initialize email service with Resend API key."""
        settings = get_settings()
        resend.api_key = settings.resend_api_key
        self.from_email = settings.email_from_address
        self.contact_inbox = settings.contact_inbox_address
        self.frontend_url = settings.frontend_url.rstrip("/")

    def invite_link(self, token: str) -> str:
        """Registration link for an invite token."""
        return f"{self.frontend_url}/register/{quote(token, safe='')}"

    def profile_link(self, slug: str) -> str:
        """Public profile link for a startup slug."""
        return f"{self.frontend_url}/startup/{quote(slug, safe='')}"

    async def _deliver(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        reply_to: str | None = None,
    ) -> str | None:
        """Send one email and return the Resend message id.

        Raises:
            EmailDeliveryError: If Resend rejects the message or is unreachable.
        """
        params: dict[str, Any] = {
            "from": self.from_email,
            "to": [to_email],
            "subject": subject,
            "html": html_content,
        }
        if reply_to:
            params["reply_to"] = reply_to

        try:
            response = resend.Emails.send(params)
        except Exception as e:
            logger.error("Failed to send '%s' to %s: %s", subject, to_email, str(e))
            raise EmailDeliveryError(f"Failed to send email to {to_email}: {e}") from e

        email_id = response.get("id") if isinstance(response, dict) else getattr(response, "id", None)
        logger.info("Email '%s' sent to %s, id: %s", subject, to_email, email_id)
        return email_id

    async def send_invite_email(self, to_email: str, token: str) -> dict[str, Any]:
        """Send a startup registration invite.

        Args:
            to_email: Recipient email address.
            token: Invite token for the registration link.

        Returns:
            dict: Email id and the invite link.

        Raises:
            EmailDeliveryError: If the email could not be sent.
        """
        invite_link = self.invite_link(token)
        safe_link = escape(invite_link, quote=True)
        greeting = escape(to_email.split("@")[0])

        html_content = f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; background-color: #f8f9fa; padding: 20px;">
  <div style="background-color: white; padding: 30px; border-radius: 10px;">
    <div style="text-align: center; margin-bottom: 30px;">
      <h1 style="color: #e86888; margin-bottom: 10px;">JAZBAA 4.0</h1>
      <p style="color: #666; font-size: 18px;">The Creator Movement of India</p>
    </div>
    <p style="font-size: 16px; color: #333;">Dear {greeting},</p>
    <p style="font-size: 16px; color: #333;">
      You have been invited to register your startup on <strong>JAZBAA 4.0</strong>.
    </p>
    <div style="text-align: center; margin: 30px 0;">
      <a href="{safe_link}" style="background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 15px 30px; text-decoration: none; border-radius: 25px; font-weight: bold; display: inline-block;">
        Register Your Startup
      </a>
    </div>
    <p style="font-size: 14px; color: #666; text-align: center;">
      Or copy this link: <a href="{safe_link}" style="color: #e86888;">{safe_link}</a>
    </p>
    <p style="font-size: 13px; color: #666;">This link can be used once.</p>
    <hr style="margin: 30px 0; border: none; border-top: 1px solid #eee;">
    <p style="color: #666; font-size: 12px; text-align: center;">Best regards,<br>The JAZBAA Team</p>
  </div>
</div>
"""

        email_id = await self._deliver(
            to_email,
            "You're Invited to Join JAZBAA 4.0!",
            html_content,
        )
        return {"email_id": email_id, "invite_link": invite_link}

    async def send_welcome_email(self, to_email: str, startup_name: str, slug: str) -> dict[str, Any]:
        """Send the welcome email with the new public profile link.

        Raises:
            EmailDeliveryError: If the email could not be sent.
        """
        profile_link = self.profile_link(slug)
        safe_link = escape(profile_link, quote=True)
        name = escape(startup_name)

        html_content = f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; background-color: #f8f9fa; padding: 20px;">
  <div style="background-color: white; padding: 30px; border-radius: 10px;">
    <h1 style="color: #e86888; text-align: center;">Welcome to JAZBAA 4.0, {name}!</h1>
    <p style="font-size: 16px; color: #333;">
      Your startup profile is live. Share it with mentors, investors and your community.
    </p>
    <div style="text-align: center; margin: 30px 0;">
      <a href="{safe_link}" style="background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 15px 30px; text-decoration: none; border-radius: 25px; font-weight: bold; display: inline-block;">
        View Your Profile
      </a>
    </div>
    <p style="font-size: 14px; color: #666; text-align: center;">
      Profile link: <a href="{safe_link}" style="color: #e86888;">{safe_link}</a>
    </p>
    <hr style="margin: 30px 0; border: none; border-top: 1px solid #eee;">
    <p style="color: #666; font-size: 12px; text-align: center;">Best regards,<br>The JAZBAA Team</p>
  </div>
</div>
"""

        email_id = await self._deliver(
            to_email,
            f"Welcome to JAZBAA 4.0, {startup_name}!",
            html_content,
        )
        return {"email_id": email_id, "profile_link": profile_link}

    async def send_contact_emails(
        self,
        name: str,
        email: str,
        message: str,
        phone: str | None = None,
        contact_type: str | None = None,
    ) -> dict[str, Any]:
        """Forward a contact form submission to the team and acknowledge it.

        The team notification must go through; the acknowledgment to the
        sender is best-effort.

        Raises:
            EmailDeliveryError: If the team notification could not be sent.
        """
        title, description = contact_type_info(contact_type)
        submitted = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
        safe_name = escape(name)
        safe_message = escape(message).replace("\n", "<br>")
        phone_line = f"<p><strong>Phone:</strong> {escape(phone)}</p>" if phone else ""

        notification_html = f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #e86888;">JAZBAA Contact Request</h2>
  <div style="background-color: #f8f9fa; padding: 20px; border-radius: 8px;">
    <h3 style="color: #333;">{title}</h3>
    <p style="color: #666;">{description}</p>
  </div>
  <h4 style="color: #333;">Contact Details:</h4>
  <p><strong>Name:</strong> {safe_name}</p>
  <p><strong>Email:</strong> {escape(email)}</p>
  {phone_line}
  <p><strong>Submitted:</strong> {submitted}</p>
  <h4 style="color: #333;">Message:</h4>
  <p style="background-color: #f8f9fa; padding: 15px; border-left: 4px solid #e86888;">{safe_message}</p>
  <p style="color: #155724;"><strong>Action Required:</strong> Please respond within 24-48 hours.</p>
</div>
"""

        notification_id = await self._deliver(
            self.contact_inbox,
            f"JAZBAA Contact Request: {title}",
            notification_html,
            reply_to=email,
        )

        acknowledgment_html = f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #e86888;">Thank You for Contacting JAZBAA</h2>
  <p>Dear {safe_name},</p>
  <p>We have received your contact request regarding <strong>{title}</strong>.</p>
  <div style="background-color: #f8f9fa; padding: 20px; border-radius: 8px;">
    <h4 style="color: #333;">Your Message:</h4>
    <p style="background-color: white; padding: 15px;">{safe_message}</p>
  </div>
  <p style="color: #856404;"><strong>Our team will get back to you within 24-48 hours.</strong></p>
  <p style="color: #666; font-size: 12px;">Best regards,<br>The JAZBAA Team</p>
</div>
"""

        acknowledged = True
        try:
            await self._deliver(email, "JAZBAA Contact Request Received", acknowledgment_html)
        except EmailDeliveryError:
            acknowledged = False
            logger.warning("Contact acknowledgment to %s was not delivered", email)

        return {"email_id": notification_id, "acknowledged": acknowledged}

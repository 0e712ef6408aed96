"""Outgoing email over SMTP."""

import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional

from expense_tracker.config.settings import TrackerConfig, get_config
from expense_tracker.errors import EmailDeliveryError

logger = logging.getLogger(__name__)

OTP_SUBJECT = "Password Reset OTP"

OTP_HTML_TEMPLATE = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #1f2937;">Password Reset Request</h2>
  <p>You requested to reset your password. Use the code below to continue:</p>
  <div style="background: #f3f4f6; padding: 20px; text-align: center; margin: 20px 0;">
    <span style="font-size: 32px; font-weight: bold; letter-spacing: 8px;">{otp}</span>
  </div>
  <p>This code expires in {minutes} minutes.</p>
  <p>If you did not request a password reset, you can ignore this email.</p>
  <p style="color: #6b7280; font-size: 12px;">{sender}</p>
</div>
"""


class EmailService:
    """Sends transactional email through the configured SMTP server.

    Example:
        >>> EmailService().send_otp_email("ana@example.com", "482913")
    """

    def __init__(self, config: Optional[TrackerConfig] = None):
        self.config = config or get_config()

    def build_otp_message(self, to_address: str, otp: str) -> EmailMessage:
        """Build the password-reset message with plain-text and HTML parts."""
        minutes = self.config.otp_expiry_minutes
        message = EmailMessage()
        message["Subject"] = OTP_SUBJECT
        message["From"] = formataddr(
            (self.config.email_from_name, self.config.email_from_address)
        )
        message["To"] = to_address
        message.set_content(
            f"Your password reset code is {otp}. "
            f"It expires in {minutes} minutes."
        )
        message.add_alternative(
            OTP_HTML_TEMPLATE.format(
                otp=otp, minutes=minutes, sender=self.config.email_from_name
            ),
            subtype="html",
        )
        return message

    def send(self, message: EmailMessage) -> None:
        """Deliver a message.

        Raises:
            EmailDeliveryError: If the SMTP server cannot be reached or
                rejects the message
        """
        config = self.config
        try:
            with smtplib.SMTP(
                config.smtp_host, config.smtp_port, timeout=config.smtp_timeout
            ) as smtp:
                if config.smtp_use_tls:
                    smtp.starttls()
                if config.smtp_username:
                    smtp.login(config.smtp_username, config.smtp_password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {message['To']}: {e}")
            raise EmailDeliveryError(
                "Failed to send OTP email. Please try again later.",
                recovery_hint="Check the SMTP_* settings",
            ) from e
        logger.info(f"Sent '{message['Subject']}' email to {message['To']}")

    def send_otp_email(self, to_address: str, otp: str) -> None:
        self.send(self.build_otp_message(to_address, otp))

"""Email utilities for contact form notifications."""

import os
import html
import smtplib
import logging
from datetime import datetime
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart

from src.shared.config import get_contact_recipient, get_smtp_timeout

logger = logging.getLogger(__name__)

# Port for implicit TLS; every other port upgrades with STARTTLS
SMTP_SSL_PORT = 465


def build_notification_email(name: str, email: str, message: str, received_at: datetime,
                             sender: str, recipient: str) -> MIMEMultipart:
    """
    Render the notification sent to the site owner for one contact message.

    Args:
        name: Submitter name (already trimmed)
        email: Submitter email (already lowercased)
        message: Message body
        received_at: Server timestamp of the stored record
        sender: From address (the SMTP account)
        recipient: Site owner address

    Returns:
        Multipart message with plain text and HTML alternatives
    """
    received = received_at.strftime("%Y-%m-%d %H:%M:%S UTC")

    msg = MIMEMultipart('alternative')
    msg['From'] = sender
    msg['To'] = recipient
    msg['Reply-To'] = email  # Allow the owner to reply directly to the submitter
    msg['Subject'] = f"New Contact Message from {name}"

    # Plain text version
    text_body = f"""
New contact form submission from your portfolio website:

Name: {name}
Email: {email}
Received: {received}

Message:
{message}

---
Reply directly to this email to respond to {name} ({email}).
"""

    # HTML version
    safe_name = html.escape(name)
    safe_email = html.escape(email)
    safe_message = html.escape(message).replace("\n", "<br>")
    html_body = f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
    <h2 style="margin-top: 0;">New Contact Message</h2>
    <p><strong>Name:</strong> {safe_name}</p>
    <p><strong>Email:</strong> <a href="mailto:{safe_email}">{safe_email}</a></p>
    <p><strong>Received:</strong> {received}</p>
    <div style="background: #f9fafb; border: 1px solid #e5e7eb; border-radius: 8px; padding: 16px;">
        {safe_message}
    </div>
</body>
</html>
"""

    msg.attach(MIMEText(text_body, 'plain'))
    msg.attach(MIMEText(html_body, 'html'))
    return msg


def send_contact_notification(name: str, email: str, message: str, received_at: datetime) -> bool:
    """
    Email the site owner about a new contact message using SMTP.

    Returns:
        True if email sent successfully, False otherwise. The cause of a
        failure is only written to the log.
    """
    try:
        # Get email configuration from environment variables
        smtp_host = os.environ.get("SMTP_HOST", "smtp.gmail.com")
        smtp_port = int(os.environ.get("SMTP_PORT", "587"))
        smtp_user = os.environ.get("SMTP_USER")
        smtp_password = os.environ.get("SMTP_PASSWORD")
        recipient = get_contact_recipient()
        timeout = get_smtp_timeout()

        if not smtp_user or not smtp_password:
            logger.error("SMTP credentials not configured")
            return False

        msg = build_notification_email(name, email, message, received_at, sender=smtp_user, recipient=recipient)

        if smtp_port == SMTP_SSL_PORT:
            with smtplib.SMTP_SSL(smtp_host, smtp_port, timeout=timeout) as server:
                server.login(smtp_user, smtp_password)
                server.send_message(msg)
        else:
            with smtplib.SMTP(smtp_host, smtp_port, timeout=timeout) as server:
                server.starttls()  # Enable encryption
                server.login(smtp_user, smtp_password)
                server.send_message(msg)

        logger.info(f"Contact notification sent for message from {email}")
        return True

    except Exception as e:
        logger.error(f"Failed to send contact notification email: {str(e)}", exc_info=True)
        return False

# gearguard/services/email_service.py
import logging
import smtplib
from email.message import EmailMessage

from ..core import config

logger = logging.getLogger(__name__)


def reset_url(token: str) -> str:
    return f"{config.APP_URL}/reset-password/{token}"


def _build_reset_message(to_email: str, link: str) -> EmailMessage:
    ttl = config.RESET_TOKEN_TTL_MINUTES
    msg = EmailMessage()
    msg["Subject"] = f"{config.APP_NAME} - Password Reset Request"
    msg["From"] = config.MAIL_FROM
    msg["To"] = to_email
    msg.set_content(
        "We received a request to reset your password.\n"
        f"Open the link below to create a new password:\n\n{link}\n\n"
        f"This link will expire in {ttl} minutes. If you didn't request this, "
        "you can safely ignore this email.\n"
    )
    msg.add_alternative(
        f"<p>We received a request to reset your password.</p>"
        f'<p><a href="{link}">Reset Password</a></p>'
        f"<p>This link will expire in <strong>{ttl} minutes</strong>.</p>",
        subtype="html",
    )
    return msg


def send_password_reset_email(to_email: str, token: str) -> None:
    """
    SMTP ayarlıysa gönderir, değilse linki loglar.
    Hata yukarı taşınmaz: forgot-password cevabı her durumda aynı kalmalı.
    """
    link = reset_url(token)
    if not config.SMTP_HOST:
        logger.info("SMTP not configured; password reset link for %s: %s", to_email, link)
        return

    msg = _build_reset_message(to_email, link)
    try:
        with smtplib.SMTP(config.SMTP_HOST, config.SMTP_PORT) as s:
            if config.SMTP_TLS:
                s.starttls()
            if config.SMTP_USERNAME and config.SMTP_PASSWORD:
                s.login(config.SMTP_USERNAME, config.SMTP_PASSWORD)
            s.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        logger.warning("password reset email to %s failed: %s", to_email, e)

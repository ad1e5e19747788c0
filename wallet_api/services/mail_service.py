import logging
import requests
from wallet_api.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


class MailService:
    """
    Service for outbound email through an HTTP mail API.

    When MAIL_API_URL is not configured, messages are written to the log
    instead of being sent (local development).
    """

    TIMEOUT_SECONDS = 10

    @staticmethod
    def send(to: str, subject: str, text: str) -> bool:
        """
        Send a plain text email.

        :param to: Recipient address
        :param subject: Subject line
        :param text: Message body
        :return: True if the mail API accepted the message, False otherwise
        """
        if not settings.MAIL_API_URL:
            logger.info("Mail API not configured, not sending '%s' to %s:\n%s", subject, to, text)
            return True

        headers = {
            "Authorization": f"Bearer {settings.MAIL_API_KEY}",
            "Content-Type": "application/json"
        }
        payload = {
            "from": settings.MAIL_FROM,
            "to": [to],
            "subject": subject,
            "text": text,
        }

        try:
            response = requests.post(
                settings.MAIL_API_URL,
                json=payload,
                headers=headers,
                timeout=MailService.TIMEOUT_SECONDS
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error("Mail delivery to %s failed: %s", to, e)
            return False

        return True

    @staticmethod
    def send_password_reset_link(to: str, link: str) -> bool:
        """
        Send the password reset link to a user.
        """
        text = (
            "You are receiving this email because we received a password reset request for your account.\n\n"
            f"Reset your password: {link}\n\n"
            f"This link will expire in {settings.PASSWORD_RESET_EXPIRE_MINUTES} minutes.\n"
            "If you did not request a password reset, no further action is required."
        )
        return MailService.send(to, "Reset Password Notification", text)

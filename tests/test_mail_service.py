"""
Tests for the outbound mail channel.
"""
from unittest.mock import Mock, patch
import requests
from wallet_api.core.config import Settings
from wallet_api.services.mail_service import MailService


class TestMailService:

    def test_without_mail_api_the_message_is_only_logged(self, mock_settings, caplog):
        unconfigured = Settings(**{**mock_settings.model_dump(), "MAIL_API_URL": ""})

        with patch("wallet_api.services.mail_service.settings", unconfigured), \
                patch("wallet_api.services.mail_service.requests.post") as post:
            with caplog.at_level("INFO", logger="wallet_api.services.mail_service"):
                assert MailService.send("ada@example.com", "Hello", "Body") is True

        post.assert_not_called()
        assert "ada@example.com" in caplog.text

    def test_posts_message_to_mail_api(self, mock_settings):
        response = Mock()
        response.raise_for_status.return_value = None

        with patch("wallet_api.services.mail_service.settings", mock_settings), \
                patch("wallet_api.services.mail_service.requests.post", return_value=response) as post:
            assert MailService.send("ada@example.com", "Hello", "Body") is True

        args, kwargs = post.call_args
        assert args[0] == "http://mail.test/send"
        assert kwargs["json"]["to"] == ["ada@example.com"]
        assert kwargs["json"]["subject"] == "Hello"
        assert kwargs["headers"]["Authorization"] == "Bearer test-mail-key"
        assert kwargs["timeout"] == MailService.TIMEOUT_SECONDS

    def test_delivery_error_returns_false(self, mock_settings):
        with patch("wallet_api.services.mail_service.settings", mock_settings), \
                patch(
                    "wallet_api.services.mail_service.requests.post",
                    side_effect=requests.exceptions.ConnectionError("down"),
                ):
            assert MailService.send("ada@example.com", "Hello", "Body") is False

    def test_reset_link_mail_contains_the_link(self, mock_settings):
        with patch("wallet_api.services.mail_service.settings", mock_settings), \
                patch.object(MailService, "send", return_value=True) as send:
            MailService.send_password_reset_link("ada@example.com", "http://frontend.test/reset-password?token=abc")

        to, subject, text = send.call_args.args
        assert to == "ada@example.com"
        assert subject == "Reset Password Notification"
        assert "http://frontend.test/reset-password?token=abc" in text

"""Tests for SmtpEmailSender with smtplib mocked out."""

import smtplib
import unittest
from unittest.mock import MagicMock, patch

from adapter.external.smtp_email import SmtpEmailSender
from domain.model.errors import EmailDeliveryError


class TestSmtpEmailSender(unittest.TestCase):

    def setUp(self):
        self.sender = SmtpEmailSender(
            host='smtp.example.com', port=2525, username='user', password='pw',
            from_email='noreply@example.com', from_name='Bootcamp API',
        )

    @patch('adapter.external.smtp_email.smtplib.SMTP')
    def test_send_uses_starttls_and_login(self, mock_smtp):
        server = mock_smtp.return_value.__enter__.return_value

        self.sender.send('a@x.com', 'Password reset token', 'hello')

        mock_smtp.assert_called_once_with('smtp.example.com', 2525, timeout=10.0)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with('user', 'pw')
        msg = server.send_message.call_args[0][0]
        self.assertEqual(msg['To'], 'a@x.com')
        self.assertEqual(msg['Subject'], 'Password reset token')
        self.assertEqual(msg['From'], 'Bootcamp API <noreply@example.com>')
        self.assertIn('hello', msg.get_content())

    @patch('adapter.external.smtp_email.smtplib.SMTP')
    def test_login_skipped_without_credentials(self, mock_smtp):
        server = mock_smtp.return_value.__enter__.return_value
        SmtpEmailSender(host='smtp.example.com').send('a@x.com', 's', 'm')
        server.login.assert_not_called()

    @patch('adapter.external.smtp_email.smtplib.SMTP')
    def test_auth_failure_raises_delivery_error_without_retry(self, mock_smtp):
        server = mock_smtp.return_value.__enter__.return_value
        server.login.side_effect = smtplib.SMTPAuthenticationError(535, b'bad credentials')

        with self.assertRaises(EmailDeliveryError):
            self.sender.send('a@x.com', 's', 'm')
        self.assertEqual(mock_smtp.call_count, 1)

    @patch('adapter.external.smtp_email.smtplib.SMTP')
    def test_transient_failure_is_retried(self, mock_smtp):
        mock_smtp.side_effect = [smtplib.SMTPConnectError(421, b'busy'), MagicMock()]

        with patch.object(SmtpEmailSender._deliver.retry, 'sleep', lambda seconds: None):
            self.sender.send('a@x.com', 's', 'm')

        self.assertEqual(mock_smtp.call_count, 2)

    def test_missing_host_raises_delivery_error(self):
        with self.assertRaises(EmailDeliveryError):
            SmtpEmailSender(host=None).send('a@x.com', 's', 'm')


if __name__ == '__main__':
    unittest.main()

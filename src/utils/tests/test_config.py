"""Tests for load_settings()."""

import os
import unittest
from unittest.mock import patch

from utils.config import load_settings


class TestLoadSettings(unittest.TestCase):

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_secret_raises(self):
        with self.assertRaises(ValueError):
            load_settings()

    @patch.dict(os.environ, {'JWT_SECRET': 's3cret'}, clear=True)
    def test_defaults(self):
        settings = load_settings()

        self.assertEqual(settings.jwt_secret, 's3cret')
        self.assertEqual(settings.jwt_expire_days, 30)
        self.assertEqual(settings.cookie_expire_days, 30)
        self.assertEqual(settings.reset_token_expire_minutes, 10)
        self.assertFalse(settings.production)
        self.assertIsNone(settings.smtp_host)

    @patch.dict(os.environ, {
        'JWT_SECRET': 's3cret',
        'APP_ENV': 'Production',
        'JWT_EXPIRE_DAYS': '7',
        'JWT_COOKIE_EXPIRE_DAYS': '14',
        'RESET_TOKEN_EXPIRE_MINUTES': '5',
        'SMTP_HOST': 'smtp.example.com',
        'SMTP_PORT': '2525',
    }, clear=True)
    def test_overrides(self):
        settings = load_settings()

        self.assertTrue(settings.production)
        self.assertEqual(settings.jwt_expire_days, 7)
        self.assertEqual(settings.cookie_expire_days, 14)
        self.assertEqual(settings.reset_token_expire_minutes, 5)
        self.assertEqual(settings.smtp_host, 'smtp.example.com')
        self.assertEqual(settings.smtp_port, 2525)

    @patch.dict(os.environ, {'JWT_SECRET': 's3cret', 'JWT_EXPIRE_DAYS': 'soon'}, clear=True)
    def test_malformed_integer(self):
        with self.assertRaises(ValueError):
            load_settings()


if __name__ == '__main__':
    unittest.main()

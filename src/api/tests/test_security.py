"""Tests for session cookie signing and CookieSettings."""

import os
import unittest
from unittest.mock import patch

from api.security import (
    SESSION_MAX_AGE_SECONDS,
    VIEWER_COOKIE_NAME,
    CookieSettings,
    read_user_id,
    sign_user_id,
)


class TestCookieSigning(unittest.TestCase):

    def setUp(self):
        self.settings = CookieSettings(secret='test-secret')

    def test_round_trip(self):
        value = sign_user_id('google-123', self.settings)
        self.assertEqual(read_user_id(value, self.settings), 'google-123')

    def test_value_is_not_plain_user_id(self):
        self.assertNotEqual(sign_user_id('google-123', self.settings), 'google-123')

    def test_wrong_secret_rejected(self):
        value = sign_user_id('google-123', CookieSettings(secret='other'))
        self.assertIsNone(read_user_id(value, self.settings))

    def test_tampered_value_rejected(self):
        value = sign_user_id('google-123', self.settings)
        self.assertIsNone(read_user_id(value[:-2] + 'xx', self.settings))

    def test_missing_value(self):
        self.assertIsNone(read_user_id(None, self.settings))
        self.assertIsNone(read_user_id('', self.settings))

    def test_plain_user_id_rejected(self):
        self.assertIsNone(read_user_id('google-123', self.settings))


class TestCookieSettingsFromEnv(unittest.TestCase):

    @patch.dict(os.environ, {'SESSION_SECRET': 's3cret', 'APP_ENV': 'production'})
    def test_production_is_secure(self):
        settings = CookieSettings.from_env()

        self.assertEqual(settings.secret, 's3cret')
        self.assertTrue(settings.secure)
        self.assertEqual(settings.name, VIEWER_COOKIE_NAME)
        self.assertEqual(settings.max_age, SESSION_MAX_AGE_SECONDS)

    @patch.dict(os.environ, {'SESSION_SECRET': 's3cret', 'APP_ENV': 'development'})
    def test_development_is_insecure(self):
        self.assertFalse(CookieSettings.from_env().secure)

    @patch.dict(os.environ, {'SESSION_SECRET': 's3cret'})
    def test_defaults_to_secure(self):
        os.environ.pop('APP_ENV', None)
        self.assertTrue(CookieSettings.from_env().secure)

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_secret_raises(self):
        with self.assertRaises(ValueError):
            CookieSettings.from_env()

    def test_max_age_is_one_year(self):
        self.assertEqual(SESSION_MAX_AGE_SECONDS, 31536000)


if __name__ == '__main__':
    unittest.main()

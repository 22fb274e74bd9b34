"""Tests for the structured JSON log formatter."""

import json
import logging
import unittest

from utils.logging import REDACTED, JSONFormatter


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name='services.auth_service', level=logging.INFO, pathname=__file__,
        lineno=1, msg=msg, args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter(unittest.TestCase):

    def setUp(self):
        self.formatter = JSONFormatter()

    def test_core_fields(self):
        data = json.loads(self.formatter.format(_record("User logged in")))

        self.assertEqual(data['level'], 'INFO')
        self.assertEqual(data['logger'], 'services.auth_service')
        self.assertEqual(data['message'], 'User logged in')
        self.assertTrue(data['timestamp'].endswith('Z'))

    def test_extra_fields_flattened(self):
        data = json.loads(self.formatter.format(_record("User created", userId='google-123')))
        self.assertEqual(data['userId'], 'google-123')

    def test_secret_extras_redacted(self):
        data = json.loads(self.formatter.format(
            _record("Login", token='abc', code='4/0Ab', access_token='ya29', userId='u-1'),
        ))

        self.assertEqual(data['token'], REDACTED)
        self.assertEqual(data['code'], REDACTED)
        self.assertEqual(data['access_token'], REDACTED)
        self.assertEqual(data['userId'], 'u-1')


if __name__ == '__main__':
    unittest.main()

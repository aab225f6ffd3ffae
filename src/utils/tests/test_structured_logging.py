"""Tests for the JSON log formatter."""

import json
import logging
import os
import sys
import unittest
from unittest.mock import patch

from utils.logging import REDACTED, JSONFormatter, resolve_level, setup_structured_logging


class TestJSONFormatter(unittest.TestCase):

    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord('auth', logging.INFO, __file__, 1, 'User %s', ('registered',), None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_core_fields(self):
        data = json.loads(JSONFormatter().format(self._record()))

        self.assertEqual(data['level'], 'INFO')
        self.assertEqual(data['logger'], 'auth')
        self.assertEqual(data['message'], 'User registered')
        self.assertTrue(data['timestamp'].endswith('Z'))

    def test_extra_fields_are_included(self):
        data = json.loads(JSONFormatter().format(self._record(userId='user-1')))
        self.assertEqual(data['userId'], 'user-1')

    def test_non_serializable_extra_is_stringified(self):
        data = json.loads(JSONFormatter().format(self._record(when=object())))
        self.assertIn('object', data['when'])

    def test_credential_extras_are_redacted(self):
        record = self._record(password='hunter22', newPassword='secret99', reset_password_token='abc', userId='u1')
        data = json.loads(JSONFormatter().format(record))

        self.assertEqual(data['password'], REDACTED)
        self.assertEqual(data['newPassword'], REDACTED)
        self.assertEqual(data['reset_password_token'], REDACTED)
        self.assertEqual(data['userId'], 'u1')
        self.assertNotIn('hunter22', JSONFormatter().format(record))

    def test_exception_text_is_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord('auth', logging.ERROR, __file__, 1, 'failed', (), sys.exc_info())
        data = json.loads(JSONFormatter().format(record))
        self.assertIn('RuntimeError: boom', data['exception'])


class TestLogLevel(unittest.TestCase):

    def setUp(self):
        root = logging.getLogger()
        access = logging.getLogger('uvicorn.access')
        saved = (root.level, root.handlers[:], access.level, access.handlers[:], access.propagate)

        def restore():
            root.setLevel(saved[0])
            root.handlers = saved[1]
            access.setLevel(saved[2])
            access.handlers = saved[3]
            access.propagate = saved[4]
        self.addCleanup(restore)

    def test_resolve_level(self):
        self.assertEqual(resolve_level('debug'), logging.DEBUG)
        self.assertEqual(resolve_level(' WARNING '), logging.WARNING)
        self.assertEqual(resolve_level('chatty'), logging.INFO)
        self.assertEqual(resolve_level(None, default=logging.ERROR), logging.ERROR)

    @patch.dict(os.environ, {'LOG_LEVEL': 'debug'})
    def test_setup_reads_log_level_from_env(self):
        setup_structured_logging()

        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertIsInstance(root.handlers[0].formatter, JSONFormatter)
        self.assertEqual(logging.getLogger('uvicorn.access').level, logging.WARNING)


if __name__ == '__main__':
    unittest.main()

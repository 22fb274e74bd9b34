"""Tests for the cached MongoClient in adapter.mongodb.connection."""

import os
import unittest
from unittest.mock import MagicMock, patch

from pymongo.errors import ServerSelectionTimeoutError

from adapter.mongodb import connection


class TestGetMongodbClient(unittest.TestCase):

    def setUp(self):
        connection.reset_client()
        self.addCleanup(connection.reset_client)

    @patch.dict(os.environ, {'MONGO_URL': 'mongodb://db.example.com:27017'})
    @patch('adapter.mongodb.connection.MongoClient')
    def test_connects_with_retryable_writes(self, mock_client_class):
        client = connection.get_mongodb_client()

        self.assertIs(client, mock_client_class.return_value)
        args, kwargs = mock_client_class.call_args
        self.assertEqual(args, ('mongodb://db.example.com:27017',))
        self.assertTrue(kwargs['retryWrites'])
        self.assertTrue(kwargs['retryReads'])
        self.assertEqual(kwargs['appname'], connection.APP_NAME)

    @patch.dict(os.environ, {'MONGO_URL': 'mongodb://db.example.com:27017'})
    @patch('adapter.mongodb.connection.MongoClient')
    def test_healthy_client_is_reused(self, mock_client_class):
        first = connection.get_mongodb_client()
        second = connection.get_mongodb_client()

        self.assertIs(first, second)
        mock_client_class.assert_called_once()

    @patch.dict(os.environ, {}, clear=True)
    @patch('adapter.mongodb.connection.MongoClient')
    def test_missing_url_returns_none_without_connecting(self, mock_client_class):
        self.assertIsNone(connection.get_mongodb_client())
        mock_client_class.assert_not_called()

    @patch.dict(os.environ, {'MONGO_URL': 'mongodb://db.example.com:27017'})
    @patch('adapter.mongodb.connection.MongoClient')
    def test_initial_failure_is_not_retried(self, mock_client_class):
        failing = MagicMock()
        failing.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
        mock_client_class.return_value = failing

        self.assertIsNone(connection.get_mongodb_client())
        self.assertIsNone(connection.get_mongodb_client())
        mock_client_class.assert_called_once()


if __name__ == '__main__':
    unittest.main()

"""Tests for get_mongodb_client caching and reconnection."""

import unittest
from unittest.mock import MagicMock, patch

from pymongo.errors import ConfigurationError, ServerSelectionTimeoutError

from adapter.mongodb import connection
from adapter.mongodb.connection import get_mongodb_client, reset_client


class TestGetMongoDBClient(unittest.TestCase):

    def setUp(self):
        reset_client()

    def tearDown(self):
        reset_client()

    @patch('adapter.mongodb.connection.MongoClient')
    def test_connects_and_caches_client(self, mock_client_cls):
        client = MagicMock()
        mock_client_cls.return_value = client

        self.assertIs(get_mongodb_client(), client)
        self.assertIs(get_mongodb_client(), client)
        mock_client_cls.assert_called_once()

    @patch('adapter.mongodb.connection.MongoClient')
    def test_recovers_after_server_comes_back(self, mock_client_cls):
        down = MagicMock()
        down.admin.command.side_effect = ServerSelectionTimeoutError('no servers')
        up = MagicMock()
        mock_client_cls.side_effect = [down, up]

        self.assertIsNone(get_mongodb_client())
        down.close.assert_called_once()

        self.assertIs(get_mongodb_client(), up)

    @patch('adapter.mongodb.connection.MongoClient')
    def test_reconnects_when_cached_client_stops_answering(self, mock_client_cls):
        first = MagicMock()
        second = MagicMock()
        mock_client_cls.side_effect = [first, second]
        self.assertIs(get_mongodb_client(), first)

        first.admin.command.side_effect = ServerSelectionTimeoutError('lost')

        self.assertIs(get_mongodb_client(), second)

    @patch('adapter.mongodb.connection.MongoClient')
    def test_invalid_uri_is_not_retried(self, mock_client_cls):
        mock_client_cls.side_effect = ConfigurationError('bad uri')

        self.assertIsNone(get_mongodb_client())
        self.assertIsNone(get_mongodb_client())
        mock_client_cls.assert_called_once()

    @patch('adapter.mongodb.connection.MongoClient')
    def test_missing_uri_is_not_retried(self, mock_client_cls):
        with patch.object(connection, 'MONGO_URI', ''):
            self.assertIsNone(get_mongodb_client())
            self.assertIsNone(get_mongodb_client())
        mock_client_cls.assert_not_called()


if __name__ == '__main__':
    unittest.main()

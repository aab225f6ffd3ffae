"""Tests for the declarative index helper."""

import unittest
from unittest.mock import MagicMock

from pymongo.errors import OperationFailure, PyMongoError

from adapter.mongodb.bootcamp_repository import MongoBootcampRepository
from adapter.mongodb.indexes import IndexSpec, apply_indexes, create_index
from adapter.mongodb.user_repository import MongoUserRepository

EMAIL = IndexSpec((('email', 1),), 'idx_users_email', {'unique': True})
TOKEN = IndexSpec((('reset_password_token', 1),), 'idx_users_reset_token', {'sparse': True})


class TestCreateIndex(unittest.TestCase):

    def setUp(self):
        self.collection = MagicMock()

    def test_passes_keys_name_and_options(self):
        self.assertTrue(create_index(self.collection, EMAIL))
        self.collection.create_index.assert_called_once_with(
            [('email', 1)], name='idx_users_email', unique=True
        )

    def test_same_name_different_keys_is_rebuilt(self):
        self.collection.create_index.side_effect = [
            OperationFailure("Index with name: idx_users_email already exists", code=86),
            'idx_users_email',
        ]
        self.collection.index_information.return_value = {
            '_id_': {'key': [('_id', 1)]},
            'idx_users_email': {'key': [('email', 1), ('name', 1)]},
        }

        self.assertTrue(create_index(self.collection, EMAIL))
        self.collection.drop_index.assert_called_once_with('idx_users_email')
        self.assertEqual(self.collection.create_index.call_count, 2)

    def test_conflict_code_without_message_is_recognised(self):
        self.collection.create_index.side_effect = [OperationFailure("options differ", code=85), 'x']
        self.collection.index_information.return_value = {'email_1': {'key': [('email', 1)]}}

        self.assertTrue(create_index(self.collection, EMAIL))
        self.collection.drop_index.assert_called_once_with('email_1')

    def test_unresolvable_conflict_returns_false(self):
        self.collection.create_index.side_effect = PyMongoError("Index already exists")
        self.collection.index_information.return_value = {'_id_': {'key': [('_id', 1)]}}

        self.assertFalse(create_index(self.collection, EMAIL))
        self.collection.drop_index.assert_not_called()

    def test_other_errors_propagate(self):
        self.collection.create_index.side_effect = PyMongoError("not primary")
        with self.assertRaises(PyMongoError):
            create_index(self.collection, EMAIL)


class TestApplyIndexes(unittest.TestCase):

    def setUp(self):
        self.collection = MagicMock()

    def test_creates_every_spec_in_order(self):
        self.assertTrue(apply_indexes(self.collection, (EMAIL, TOKEN)))
        names = [c[1]['name'] for c in self.collection.create_index.call_args_list]
        self.assertEqual(names, ['idx_users_email', 'idx_users_reset_token'])

    def test_database_error_reports_failure(self):
        self.collection.create_index.side_effect = PyMongoError("not primary")
        self.assertFalse(apply_indexes(self.collection, (EMAIL, TOKEN)))

    def test_repositories_declare_their_indexes(self):
        user_names = [spec.name for spec in MongoUserRepository.INDEXES]
        bootcamp_names = [spec.name for spec in MongoBootcampRepository.INDEXES]

        self.assertEqual(user_names, ['idx_users_email', 'idx_users_reset_token'])
        self.assertIn('idx_bootcamps_name', bootcamp_names)
        self.assertEqual(MongoBootcampRepository.INDEXES[0].options, {'unique': True})


if __name__ == '__main__':
    unittest.main()

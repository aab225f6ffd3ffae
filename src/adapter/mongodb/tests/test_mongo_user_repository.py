"""Tests for MongoUserRepository against a mocked pymongo collection."""

import unittest
from unittest.mock import MagicMock
from datetime import datetime, timezone
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import DatabaseUnavailableError, DuplicateError


def _doc(**overrides) -> dict:
    now = datetime(2026, 1, 23, 12, 0, 0, tzinfo=timezone.utc)
    doc = {
        '_id': 'user-1',
        'name': 'A',
        'email': 'a@x.com',
        'role': 'user',
        'password_hash': '$2b$10$hash',
        'created_at': now,
        'updated_at': now,
    }
    doc.update(overrides)
    return doc


class MongoUserRepositoryTestCase(unittest.TestCase):

    def setUp(self):
        self.collection = MagicMock()
        self.db = MagicMock()
        self.db.__getitem__.return_value = self.collection
        self.repo = MongoUserRepository(self.db)


class TestCreate(MongoUserRepositoryTestCase):

    def test_uses_users_collection(self):
        self.db.__getitem__.assert_called_with(USERS_COLLECTION_NAME)

    def test_create_inserts_document(self):
        user = self.repo.create(name='A', email='a@x.com', password_hash='$2b$10$hash', role='publisher')

        doc = self.collection.insert_one.call_args[0][0]
        self.assertEqual(doc['_id'], user.id)
        self.assertEqual(doc['email'], 'a@x.com')
        self.assertEqual(doc['role'], 'publisher')
        self.assertEqual(doc['password_hash'], '$2b$10$hash')
        self.assertNotIn('reset_password_token', doc)

    def test_create_duplicate_email(self):
        self.collection.insert_one.side_effect = DuplicateKeyError("E11000 duplicate key")
        with self.assertRaises(DuplicateError):
            self.repo.create(name='A', email='a@x.com', password_hash='h', role='user')

    def test_create_database_error(self):
        self.collection.insert_one.side_effect = PyMongoError("boom")
        with self.assertRaises(DatabaseUnavailableError):
            self.repo.create(name='A', email='a@x.com', password_hash='h', role='user')


class TestReads(MongoUserRepositoryTestCase):

    def test_get_by_email(self):
        self.collection.find_one.return_value = _doc()

        user = self.repo.get_by_email('a@x.com')

        self.assertEqual(user.id, 'user-1')
        self.collection.find_one.assert_called_once_with({'email': 'a@x.com'})

    def test_get_by_id_not_found(self):
        self.collection.find_one.return_value = None
        self.assertIsNone(self.repo.get_by_id('missing'))
        self.collection.find_one.assert_called_once_with({'_id': 'missing'})

    def test_naive_expiry_is_read_as_utc(self):
        self.collection.find_one.return_value = _doc(
            reset_password_token='abc', reset_password_expire=datetime(2026, 1, 1, 12, 0),
        )
        user = self.repo.get_by_id('user-1')
        self.assertEqual(user.reset_password_expire.tzinfo, timezone.utc)

    def test_read_database_error(self):
        self.collection.find_one.side_effect = PyMongoError("boom")
        with self.assertRaises(DatabaseUnavailableError):
            self.repo.get_by_id('user-1')


class TestResetToken(MongoUserRepositoryTestCase):

    def test_set_reset_token(self):
        expires = datetime(2026, 1, 1, 12, 10, tzinfo=timezone.utc)
        self.collection.update_one.return_value.matched_count = 1

        self.assertTrue(self.repo.set_reset_token('user-1', 'hash', expires))
        self.collection.update_one.assert_called_once_with(
            {'_id': 'user-1'},
            {'$set': {'reset_password_token': 'hash', 'reset_password_expire': expires}},
        )

    def test_clear_reset_token_unsets_both_fields(self):
        self.collection.update_one.return_value.matched_count = 1

        self.repo.clear_reset_token('user-1')

        update = self.collection.update_one.call_args[0][1]
        self.assertEqual(set(update['$unset']), {'reset_password_token', 'reset_password_expire'})

    def test_redeem_is_single_atomic_update(self):
        now = datetime(2026, 1, 1, 12, 5, tzinfo=timezone.utc)
        self.collection.find_one_and_update.return_value = _doc(password_hash='new-hash')

        user = self.repo.redeem_reset_token('hash', 'new-hash', now)

        self.assertEqual(user.password_hash, 'new-hash')
        args, kwargs = self.collection.find_one_and_update.call_args
        self.assertEqual(args[0], {'reset_password_token': 'hash', 'reset_password_expire': {'$gt': now}})
        self.assertEqual(args[1]['$set']['password_hash'], 'new-hash')
        self.assertIn('reset_password_token', args[1]['$unset'])
        self.assertEqual(kwargs['return_document'], ReturnDocument.AFTER)

    def test_redeem_no_match(self):
        self.collection.find_one_and_update.return_value = None
        self.assertIsNone(self.repo.redeem_reset_token('hash', 'h', datetime.now(timezone.utc)))


class TestUpdateDetails(MongoUserRepositoryTestCase):

    def test_only_supplied_fields_are_set(self):
        self.collection.find_one_and_update.return_value = _doc(name='B')

        self.repo.update_details('user-1', name='B')

        changes = self.collection.find_one_and_update.call_args[0][1]['$set']
        self.assertEqual(changes['name'], 'B')
        self.assertNotIn('email', changes)

    def test_duplicate_email(self):
        self.collection.find_one_and_update.side_effect = DuplicateKeyError("E11000")
        with self.assertRaises(DuplicateError):
            self.repo.update_details('user-1', email='b@x.com')


class TestEnsureIndexes(MongoUserRepositoryTestCase):

    def test_unique_email_index(self):
        self.assertTrue(self.repo.ensure_indexes())

        email_call = self.collection.create_index.call_args_list[0]
        self.assertEqual(email_call[0][0], [('email', 1)])
        self.assertEqual(email_call[1]['name'], 'idx_users_email')
        self.assertTrue(email_call[1]['unique'])

    def test_conflicting_index_is_recreated(self):
        calls = {'count': 0}

        def create_index_side_effect(*args, **kwargs):
            calls['count'] += 1
            if calls['count'] == 1:
                raise PyMongoError("Index already exists with a different name")
            return kwargs['name']

        self.collection.create_index.side_effect = create_index_side_effect
        self.collection.index_information.return_value = {
            '_id_': {'key': [('_id', 1)]},
            'old_email_idx': {'key': [('email', 1)]},
        }

        self.assertTrue(self.repo.ensure_indexes())
        self.collection.drop_index.assert_called_with('old_email_idx')

    def test_other_error_reports_failure(self):
        self.collection.create_index.side_effect = PyMongoError("Other database error")
        self.assertFalse(self.repo.ensure_indexes())


if __name__ == '__main__':
    unittest.main()

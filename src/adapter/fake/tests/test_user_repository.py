"""Unit tests for FakeUserRepository — verifies Port contract compliance."""

import unittest
from datetime import timedelta

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import DuplicateError
from domain.model.user import User


class TestFakeUserRepository(unittest.TestCase):
    """Tests that FakeUserRepository correctly implements UserRepository Protocol."""

    def setUp(self):
        self.repo = FakeUserRepository()

    # ── create + get (round-trip) ─────────────────────────────

    def test_create_and_get_by_id(self):
        user = self.repo.create(email='a@x.com', password_hash='$2b$hash', first_name='Ada')

        self.assertIsInstance(user, User)
        fetched = self.repo.get_by_id(user.id)
        self.assertEqual(fetched, user)
        self.assertEqual(fetched.first_name, 'Ada')
        self.assertEqual(fetched.role, 'user')
        self.assertEqual(fetched.created_at, fetched.updated_at)

    def test_create_assigns_unique_ids(self):
        a = self.repo.create(email='a@x.com', password_hash='h')
        b = self.repo.create(email='b@x.com', password_hash='h')
        self.assertNotEqual(a.id, b.id)

    def test_create_duplicate_email_raises(self):
        self.repo.create(email='a@x.com', password_hash='h')
        with self.assertRaises(DuplicateError):
            self.repo.create(email='a@x.com', password_hash='h')
        self.assertEqual(len(self.repo.store), 1)

    def test_get_by_email(self):
        user = self.repo.create(email='a@x.com', password_hash='h')
        self.assertEqual(self.repo.get_by_email('a@x.com').id, user.id)
        self.assertIsNone(self.repo.get_by_email('b@x.com'))

    def test_get_by_id_returns_none_for_missing(self):
        self.assertIsNone(self.repo.get_by_id('nonexistent'))

    def test_returned_users_are_copies(self):
        user = self.repo.create(email='a@x.com', password_hash='h')
        user.first_name = 'changed'
        self.assertEqual(self.repo.get_by_id(user.id).first_name, '')

    def test_list_all(self):
        self.repo.create(email='a@x.com', password_hash='h')
        self.repo.create(email='b@x.com', password_hash='h')
        self.assertEqual(len(self.repo.list_all()), 2)

    # ── update ────────────────────────────────────────────────

    def test_update_sets_fields_and_bumps_updated_at(self):
        user = self.repo.create(email='a@x.com', password_hash='h')

        updated = self.repo.update(user.id, {'last_name': 'L'})

        self.assertEqual(updated.last_name, 'L')
        self.assertGreaterEqual(updated.updated_at - user.updated_at, timedelta(milliseconds=1))
        self.assertEqual(updated.created_at, user.created_at)

    def test_update_returns_none_for_missing(self):
        self.assertIsNone(self.repo.update('nonexistent', {'last_name': 'L'}))

    def test_update_to_taken_email_raises(self):
        self.repo.create(email='a@x.com', password_hash='h')
        b = self.repo.create(email='b@x.com', password_hash='h')

        with self.assertRaises(DuplicateError):
            self.repo.update(b.id, {'email': 'a@x.com'})
        self.assertEqual(self.repo.get_by_id(b.id).email, 'b@x.com')

    def test_update_own_email_is_allowed(self):
        a = self.repo.create(email='a@x.com', password_hash='h')
        self.assertEqual(self.repo.update(a.id, {'email': 'a@x.com'}).email, 'a@x.com')

    # ── update_password ───────────────────────────────────────

    def test_update_password(self):
        user = self.repo.create(email='a@x.com', password_hash='old')

        self.assertTrue(self.repo.update_password(user.id, 'new'))

        stored = self.repo.get_by_id(user.id)
        self.assertEqual(stored.password_hash, 'new')
        self.assertGreater(stored.updated_at, user.updated_at)

    def test_update_password_returns_false_for_missing(self):
        self.assertFalse(self.repo.update_password('nonexistent', 'new'))

    # ── delete ────────────────────────────────────────────────

    def test_delete(self):
        user = self.repo.create(email='a@x.com', password_hash='h')

        self.assertTrue(self.repo.delete(user.id))
        self.assertIsNone(self.repo.get_by_id(user.id))
        self.assertFalse(self.repo.delete(user.id))


if __name__ == '__main__':
    unittest.main()

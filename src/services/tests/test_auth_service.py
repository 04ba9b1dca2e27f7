"""Unit tests for auth_service: registration and credential validation."""

import unittest
from unittest.mock import MagicMock, patch

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import (
    BannedAccountError,
    DuplicateEmailError,
    StorageError,
    ValidationError,
)
from domain.model.registration import RegistrationInput
from domain.model.user import Role
from services.auth_service import create_account, register, validate_credentials
from services.password_service import verify_password


def make_input(email='newuser@example.com', password='password123') -> RegistrationInput:
    return RegistrationInput(
        email=email,
        password=password,
        first_name='New',
        last_name='User',
        phone='123456789',
        address='Test Address',
        city='Warsaw',
        postal='00-000',
        country='Poland',
    )


class TestRegister(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()

    def test_register_creates_customer(self):
        user = register(self.repo, make_input())

        self.assertTrue(user.id)
        self.assertEqual(user.email, 'newuser@example.com')
        self.assertEqual(user.role, Role.CUSTOMER)
        self.assertFalse(user.activated)
        self.assertFalse(user.deleted)
        self.assertFalse(user.banned)
        self.assertEqual(user.created_at, user.updated_at)

    def test_register_stores_verifiable_hash(self):
        user = register(self.repo, make_input(password='password123'))

        self.assertNotEqual(user.password_hash, 'password123')
        self.assertTrue(verify_password('password123', user.password_hash))
        self.assertFalse(verify_password('password124', user.password_hash))

    def test_register_persists_user(self):
        user = register(self.repo, make_input())

        self.assertEqual(self.repo.get_by_id(user.id), user)
        self.assertEqual(self.repo.get_by_email('newuser@example.com'), user)

    def test_duplicate_email_raises_and_creates_nothing(self):
        register(self.repo, make_input(email='x@y.com'))

        with self.assertRaises(DuplicateEmailError):
            register(self.repo, make_input(email='x@y.com'))

        self.assertEqual(len(self.repo.store), 1)

    def test_duplicate_check_skips_hashing(self):
        register(self.repo, make_input(email='x@y.com'))

        with patch('services.auth_service.hash_password') as mock_hash:
            with self.assertRaises(DuplicateEmailError):
                register(self.repo, make_input(email='x@y.com'))
            mock_hash.assert_not_called()

    def test_email_of_deleted_user_can_register_again(self):
        first = register(self.repo, make_input(email='x@y.com'))
        self.repo.soft_delete(first.id)

        second = register(self.repo, make_input(email='x@y.com'))

        self.assertNotEqual(first.id, second.id)

    def test_store_conflict_surfaces_as_duplicate(self):
        """A concurrent insert that loses the unique-index race is still a duplicate."""
        repo = MagicMock()
        repo.get_by_email.return_value = None
        repo.create.side_effect = DuplicateEmailError('race@example.com')

        with self.assertRaises(DuplicateEmailError):
            register(repo, make_input(email='race@example.com'))

    def test_storage_error_propagates(self):
        repo = MagicMock()
        repo.get_by_email.side_effect = StorageError("Database unavailable")

        with self.assertRaises(StorageError):
            register(repo, make_input())


class TestCreateAccount(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()

    def test_validation_failure_does_not_touch_store(self):
        repo = MagicMock()

        with self.assertRaises(ValidationError) as context:
            create_account(repo, {'email': 'a@b.com', 'password': 'short'})

        self.assertIn('password', [e.field for e in context.exception.errors])
        repo.get_by_email.assert_not_called()
        repo.create.assert_not_called()

    def test_role_in_payload_is_ignored(self):
        payload = {
            'email': 'sneaky@example.com',
            'password': 'password123',
            'firstName': 'Sneaky',
            'lastName': 'User',
            'phone': '123456789',
            'address': 'Test Address',
            'city': 'Warsaw',
            'postal': '00-000',
            'country': 'Poland',
            'role': 'admin',
        }

        user = create_account(self.repo, payload)

        self.assertEqual(user.role, Role.CUSTOMER)


class TestValidateCredentials(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.user = register(self.repo, make_input(email='valid@example.com', password='validpassword'))

    def test_correct_credentials(self):
        result = validate_credentials(self.repo, 'valid@example.com', 'validpassword')

        self.assertIsNotNone(result)
        self.assertEqual(result.id, self.user.id)
        self.assertEqual(result.email, 'valid@example.com')

    def test_wrong_password_returns_none(self):
        self.assertIsNone(validate_credentials(self.repo, 'valid@example.com', 'wrongpassword'))

    def test_unknown_email_returns_none(self):
        self.assertIsNone(validate_credentials(self.repo, 'nobody@example.com', 'anypassword'))

    def test_unknown_email_still_runs_verification(self):
        with patch('services.auth_service.verify_password', return_value=False) as mock_verify:
            validate_credentials(self.repo, 'nobody@example.com', 'anypassword')
        mock_verify.assert_called_once()

    def test_email_match_is_case_sensitive(self):
        self.assertIsNone(validate_credentials(self.repo, 'VALID@example.com', 'validpassword'))

    def test_banned_user_with_correct_password_raises(self):
        self.repo.set_banned(self.user.id, True)

        with self.assertRaises(BannedAccountError) as context:
            validate_credentials(self.repo, 'valid@example.com', 'validpassword')
        self.assertEqual(str(context.exception), 'User account is banned')

    def test_banned_user_with_wrong_password_raises(self):
        self.repo.set_banned(self.user.id, True)

        with self.assertRaises(BannedAccountError):
            validate_credentials(self.repo, 'valid@example.com', 'wrongpassword')

    def test_banned_user_password_is_still_verified(self):
        self.repo.set_banned(self.user.id, True)

        with patch('services.auth_service.verify_password', return_value=True) as mock_verify:
            with self.assertRaises(BannedAccountError):
                validate_credentials(self.repo, 'valid@example.com', 'validpassword')
        mock_verify.assert_called_once_with('validpassword', self.user.password_hash)

    def test_deleted_user_cannot_log_in(self):
        self.repo.soft_delete(self.user.id)
        self.assertIsNone(validate_credentials(self.repo, 'valid@example.com', 'validpassword'))

    def test_unactivated_user_can_log_in(self):
        self.assertFalse(self.user.activated)
        self.assertIsNotNone(validate_credentials(self.repo, 'valid@example.com', 'validpassword'))


if __name__ == '__main__':
    unittest.main()

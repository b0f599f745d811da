"""Unit tests for pushrelay.services.accounts against an in-memory store."""

import unittest

from pushrelay.core.config import Settings
from pushrelay.core.security import decode_access_token, verify_password
from pushrelay.models import User
from pushrelay.services.accounts import (
    INVALID_CREDENTIALS,
    authenticate,
    ensure_bootstrap_admin,
    issue_session_token,
    register_user,
    set_password,
)
from pushrelay.services.errors import ConflictError, InvalidInputError, UnauthorizedError

from helpers import make_store


class AccountsTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine, self.Session = make_store()
        self.db = self.Session()
        self.settings = Settings(BCRYPT_ROUNDS=4)

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()


class TestRegister(AccountsTestCase):
    """register_user hashes the password and assigns roles."""

    def test_creates_user_with_hashed_password(self) -> None:
        user = register_user(self.db, "ana", "ana@x.com", "pw", self.settings)
        self.assertIsNotNone(user.id)
        self.assertEqual(user.role, "user")
        self.assertIsNone(user.subscription)
        self.assertNotEqual(user.password_hash, "pw")
        self.assertTrue(verify_password("pw", user.password_hash))

    def test_bootstrap_username_is_admin(self) -> None:
        user = register_user(self.db, "juan", "juan@x.com", "123", self.settings)
        self.assertEqual(user.role, "admin")

    def test_duplicate_username_conflicts(self) -> None:
        register_user(self.db, "ana", "ana@x.com", "pw", self.settings)
        with self.assertRaises(ConflictError):
            register_user(self.db, "ana", "other@x.com", "pw", self.settings)

    def test_duplicate_email_conflicts(self) -> None:
        register_user(self.db, "ana", "ana@x.com", "pw", self.settings)
        with self.assertRaises(ConflictError):
            register_user(self.db, "bea", "ana@x.com", "pw", self.settings)

    def test_whitespace_only_fields_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            register_user(self.db, "   ", "a@x.com", "pw", self.settings)
        with self.assertRaises(InvalidInputError):
            register_user(self.db, "ana", "  ", "pw", self.settings)
        self.assertEqual(self.db.query(User).count(), 0)

    def test_surrounding_whitespace_is_stripped(self) -> None:
        user = register_user(self.db, "  ana ", " ana@x.com ", "pw", self.settings)
        self.assertEqual(user.username, "ana")
        self.assertEqual(user.email, "ana@x.com")
        self.assertEqual(authenticate(self.db, " ana", "pw").id, user.id)

    def test_empty_fields_rejected(self) -> None:
        for args in (("", "a@x.com", "pw"), ("ana", "", "pw"), ("ana", "a@x.com", "")):
            with self.subTest(args=args):
                with self.assertRaises(InvalidInputError):
                    register_user(self.db, *args, self.settings)
        self.assertEqual(self.db.query(User).count(), 0)


class TestAuthenticate(AccountsTestCase):
    """authenticate never distinguishes unknown users from wrong passwords."""

    def setUp(self) -> None:
        super().setUp()
        register_user(self.db, "ana", "ana@x.com", "pw", self.settings)

    def test_correct_password(self) -> None:
        user = authenticate(self.db, "ana", "pw")
        self.assertEqual(user.username, "ana")

    def test_wrong_password_and_unknown_user_same_error(self) -> None:
        with self.assertRaises(UnauthorizedError) as wrong:
            authenticate(self.db, "ana", "nope")
        with self.assertRaises(UnauthorizedError) as unknown:
            authenticate(self.db, "ghost", "pw")
        self.assertEqual(wrong.exception.message, INVALID_CREDENTIALS)
        self.assertEqual(unknown.exception.message, INVALID_CREDENTIALS)

    def test_token_role_matches_stored_role(self) -> None:
        user = authenticate(self.db, "ana", "pw")
        payload = decode_access_token(issue_session_token(user))
        self.assertEqual(payload["role"], user.role)
        self.assertEqual(payload["sub"], str(user.id))
        self.assertEqual(payload["username"], "ana")


class TestBootstrapAdmin(AccountsTestCase):
    """ensure_bootstrap_admin creates exactly one admin and is idempotent."""

    def test_creates_admin_once(self) -> None:
        self.assertTrue(ensure_bootstrap_admin(self.db, self.settings))
        self.assertFalse(ensure_bootstrap_admin(self.db, self.settings))
        admins = self.db.query(User).filter(User.username == "juan").all()
        self.assertEqual(len(admins), 1)
        self.assertEqual(admins[0].role, "admin")
        self.assertEqual(admins[0].email, "juan@local")

    def test_admin_can_log_in_with_default_password(self) -> None:
        ensure_bootstrap_admin(self.db, self.settings)
        self.assertEqual(authenticate(self.db, "juan", "123").role, "admin")


class TestSetPassword(AccountsTestCase):
    def test_updates_hash(self) -> None:
        register_user(self.db, "ana", "ana@x.com", "old", self.settings)
        self.assertTrue(set_password(self.db, "ana", "new", self.settings))
        authenticate(self.db, "ana", "new")
        with self.assertRaises(UnauthorizedError):
            authenticate(self.db, "ana", "old")

    def test_unknown_user(self) -> None:
        self.assertFalse(set_password(self.db, "ghost", "new", self.settings))


if __name__ == "__main__":
    unittest.main()

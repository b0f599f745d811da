"""Test environment: in-memory SQLite, fast bcrypt, no VAPID keys from disk."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["VAPID_KEYS_FILE"] = "does-not-exist.json"
os.environ.pop("VAPID_PUBLIC_KEY", None)
os.environ.pop("VAPID_PRIVATE_KEY", None)

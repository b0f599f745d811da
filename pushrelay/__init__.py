"""Authentication and Web Push relay service."""

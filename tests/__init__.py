"""Test suites for webauthn-app."""

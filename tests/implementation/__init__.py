"""Test implementations of the webauthn-app collaborator interfaces."""

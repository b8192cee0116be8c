"""Credential container test implementation package."""

from .authenticator import NotAllowedError, SoftAuthenticator, build_authenticator_data

__all__ = [
    "NotAllowedError",
    "SoftAuthenticator",
    "build_authenticator_data",
]

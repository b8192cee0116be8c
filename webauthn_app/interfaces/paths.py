"""Endpoint path configuration for webauthn-app.

This module defines the server endpoints used by each exchange. The
defaults match the conventional attestation / assertion routes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

POST = "POST"


@dataclass(frozen=True)
class RegistrationPaths:
    """Registration endpoint paths.

    Attributes:
        options: Path for requesting credential creation options.
        result: Path for submitting the attestation.
        method: HTTP method for both requests.
    """

    options: str = "/attestation/options"
    result: str = "/attestation/result"
    method: str = POST


@dataclass(frozen=True)
class AuthenticationPaths:
    """Authentication endpoint paths.

    Attributes:
        options: Path for requesting credential request options.
        result: Path for submitting the assertion.
        method: HTTP method for both requests.
    """

    options: str = "/assertion/options"
    result: str = "/assertion/result"
    method: str = POST


@dataclass(frozen=True)
class WebAuthnPaths:
    """All endpoint paths used by the client.

    Attributes:
        registration: Registration endpoint paths.
        authentication: Authentication endpoint paths.
    """

    registration: RegistrationPaths = field(default_factory=RegistrationPaths)
    authentication: AuthenticationPaths = field(default_factory=AuthenticationPaths)

"""Credential container interfaces for webauthn-app.

This module defines the protocol for the host subsystem that creates key
pairs and signs assertions, together with the result types it returns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Union

from webauthn_app.encoding import encode_binary


@dataclass
class AuthenticatorAttestationResponse:
    """Authenticator output of a registration ceremony.

    Attributes:
        client_data_json: The serialized client data that was signed.
        attestation_object: The CBOR-encoded attestation object.
    """

    client_data_json: bytes
    attestation_object: bytes


@dataclass
class AuthenticatorAssertionResponse:
    """Authenticator output of an authentication ceremony.

    Attributes:
        client_data_json: The serialized client data that was signed.
        authenticator_data: The authenticator data that was signed.
        signature: The assertion signature.
        user_handle: The user handle stored with the credential, if any.
    """

    client_data_json: bytes
    authenticator_data: bytes
    signature: bytes
    user_handle: Optional[bytes] = None


@dataclass
class PublicKeyCredential:
    """A credential returned by the credential container.

    Attributes:
        raw_id: The credential identifier.
        response: The attestation or assertion produced by the authenticator.
        type: The credential type, always ``public-key``.
    """

    raw_id: bytes
    response: Union[AuthenticatorAttestationResponse, AuthenticatorAssertionResponse]
    type: str = "public-key"

    @property
    def id(self) -> str:
        """The credential identifier as base64url text."""
        return encode_binary(self.raw_id)


class ICredentialContainer(Protocol):
    """Interface for the host credential subsystem.

    Both operations receive the options with every binary member already
    decoded to bytes and without the ``status`` / ``errorMessage`` envelope.
    """

    async def create(self, options: Dict[str, Any]) -> PublicKeyCredential:
        """Create a new credential.

        Args:
            options: Decoded public key credential creation options.

        Returns:
            The new credential with its attestation response.

        Raises:
            Exception: When the user declines or no authenticator is available.
        """
        ...

    async def get(self, options: Dict[str, Any]) -> PublicKeyCredential:
        """Produce an assertion with an existing credential.

        Args:
            options: Decoded public key credential request options.

        Returns:
            The credential with its assertion response.

        Raises:
            Exception: When the user declines or no credential is available.
        """
        ...

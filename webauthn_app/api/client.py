"""WebAuthn client implementation.

This module provides the ``WebAuthnClient`` class, which drives the
registration and authentication exchanges with a relying party server. The
client builds and validates every message, talks to the server through an
injected network, and hands decoded options to an injected credential
container.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from webauthn_app.api.notifier import Notifier
from webauthn_app.api.transport import Transport
from webauthn_app.interfaces import (
    AuthenticatorAssertionResponse,
    AuthenticatorAttestationResponse,
    DebugSubtype,
    Event,
    ICredentialContainer,
    INetwork,
    IObserver,
    PublicKeyCredential,
    WebAuthnPaths,
)
from webauthn_app.messages import (
    CreateOptions,
    CreateOptionsRequest,
    CredentialAssertion,
    CredentialAttestation,
    GetOptions,
    GetOptionsRequest,
    Message,
    ServerResponse,
    WebAuthnOptions,
)

LOGGER = logging.getLogger(__name__)

# COSE algorithm identifier for ECDSA w/ SHA-256
COSE_ALG_ES256 = -7

# one minute
DEFAULT_TIMEOUT = 60000


@dataclass
class IOConfig:
    """Configuration for I/O operations.

    Attributes:
        network: Interface for network communication.
    """

    network: INetwork


@dataclass
class CredentialsConfig:
    """Configuration for credential operations.

    Attributes:
        container: The host credential subsystem.
    """

    container: ICredentialContainer


@dataclass
class PreferencesConfig:
    """Client-side defaults applied to the options given to the container.

    Attributes:
        timeout: Timeout in milliseconds, used when the server sends none.
        alg: Preferred COSE algorithm, moved to the front of
            ``pubKeyCredParams`` when the server offers it.
    """

    timeout: int = DEFAULT_TIMEOUT
    alg: int = COSE_ALG_ES256


@dataclass
class WebAuthnClientConfig:
    """Complete configuration for WebAuthnClient.

    Attributes:
        io: I/O operation configuration.
        credentials: Credential operation configuration.
        paths: Endpoint path configuration.
        preferences: Client-side option defaults.
        observer: Optional receiver of lifecycle notifications.
    """

    io: IOConfig
    credentials: CredentialsConfig
    paths: WebAuthnPaths = field(default_factory=WebAuthnPaths)
    preferences: PreferencesConfig = field(default_factory=PreferencesConfig)
    observer: Optional[IObserver] = None


class WebAuthnClient:
    """Client for registering and logging in with a WebAuthn relying party.

    ``register`` and ``login`` run a whole exchange. Each step is also
    available on its own (``request_register_options``, ``create``,
    ``send_register_result`` and their login counterparts) for callers that
    want to inspect or adjust messages between steps.

    Every failure aborts the exchange and propagates to the caller. Nothing
    is retried; start the exchange again to retry. The client holds no
    per-exchange state, so several exchanges may run concurrently.

    Example:
        ```python
        config = WebAuthnClientConfig(
            io=IOConfig(network=my_network),
            credentials=CredentialsConfig(container=my_authenticator),
        )
        client = WebAuthnClient(config)

        await client.register("alice", "Alice")
        await client.login("alice")
        ```

    Attributes:
        args: Complete configuration containing all dependencies.
    """

    def __init__(self, args: WebAuthnClientConfig) -> None:
        """Initialize the WebAuthn client.

        Args:
            args: Complete configuration containing I/O, credential, path,
                preference and observer settings.
        """
        self.args = args
        self._notifier = Notifier(args.observer)
        self._transport = Transport(args.io.network, self._notifier)
        self._defaults = WebAuthnOptions({"timeout": args.preferences.timeout})

    async def register(self, username: str, display_name: Optional[str] = None) -> ServerResponse:
        """Register a new credential for a user.

        Runs the whole registration exchange: request options, create the
        credential, send the attestation and return the acknowledgement.

        Args:
            username: The account name.
            display_name: Human-friendly name; defaults to ``username``.

        Returns:
            The server's final acknowledgement.

        Raises:
            WebAuthnError: If any message is invalid, the transport fails or
                the server rejects a step.
            Exception: Whatever the credential container raised.
        """
        self._notifier.notify(Event.REGISTER_START)
        LOGGER.info("registering %s", username)

        try:
            options = await self.request_register_options(username, display_name)
            credential = await self.create(options)
            response = await self.send_register_result(credential)
        except Exception as e:
            LOGGER.warning("registration of %s failed: %s", username, e)
            self._notifier.notify(Event.REGISTER_DONE)
            self._notifier.notify(Event.REGISTER_ERROR, e)
            raise

        LOGGER.info("registered %s", username)
        self._notifier.notify(Event.REGISTER_DONE)
        self._notifier.notify(Event.REGISTER_SUCCESS, response)

        return response

    async def login(self, username: str, display_name: Optional[str] = None) -> ServerResponse:
        """Authenticate a user with a previously registered credential.

        Runs the whole authentication exchange: request options, produce an
        assertion, send it and return the acknowledgement.

        Args:
            username: The account name.
            display_name: Human-friendly name; defaults to ``username``.

        Returns:
            The server's final acknowledgement.

        Raises:
            WebAuthnError: If any message is invalid, the transport fails or
                the server rejects a step.
            Exception: Whatever the credential container raised.
        """
        self._notifier.notify(Event.LOGIN_START)
        LOGGER.info("logging in %s", username)

        try:
            options = await self.request_login_options(username, display_name)
            credential = await self.get(options)
            response = await self.send_login_result(credential)
        except Exception as e:
            LOGGER.warning("login of %s failed: %s", username, e)
            self._notifier.notify(Event.LOGIN_DONE)
            self._notifier.notify(Event.LOGIN_ERROR, e)
            raise

        LOGGER.info("logged in %s", username)
        self._notifier.notify(Event.LOGIN_DONE)
        self._notifier.notify(Event.LOGIN_SUCCESS, response)

        return response

    async def request_register_options(
        self, username: str, display_name: Optional[str] = None
    ) -> CreateOptions:
        """Request credential creation options from the server.

        Returns:
            The validated options, with binary members still encoded.
        """
        request = CreateOptionsRequest(
            {
                "username": username,
                "displayName": display_name or username,
            }
        )

        paths = self.args.paths.registration
        return await self._transport.send(paths.method, paths.options, request, CreateOptions)

    async def create(self, options: CreateOptions) -> PublicKeyCredential:
        """Create a credential with the credential container.

        The options are binary-decoded in place, stripped of the response
        envelope and overlaid with the configured preferences before being
        handed to the container.

        Args:
            options: Options from ``request_register_options``, possibly
                adjusted by the caller.

        Returns:
            The new credential, exactly as returned by the container.

        Raises:
            TypeError: If ``options`` is not a ``CreateOptions``.
            CoercionError: If a binary member cannot be decoded.
            Exception: Whatever the credential container raised.
        """
        if not isinstance(options, CreateOptions):
            raise TypeError("expected 'options' to be instance of CreateOptions")

        options.decode_binary_properties()
        public_key = self._container_options(options)
        self._prefer_algorithm(public_key)

        self._notifier.notify(Event.USER_PRESENCE_START)
        self._notifier.debug(DebugSubtype.CREATE_OPTIONS, {"publicKey": public_key})

        try:
            credential = await self.args.credentials.container.create(public_key)
        except Exception as e:
            self._notifier.debug(DebugSubtype.CREATE_FAILED, e)
            raise
        finally:
            self._notifier.notify(Event.USER_PRESENCE_DONE)

        self._notifier.debug(DebugSubtype.CREATE_RESULT, credential)
        return credential

    async def send_register_result(self, credential: PublicKeyCredential) -> ServerResponse:
        """Send a newly created credential's attestation to the server.

        Args:
            credential: The credential returned by ``create``.

        Returns:
            The server's acknowledgement.

        Raises:
            TypeError: If ``credential`` does not carry an attestation response.
        """
        if not isinstance(credential, PublicKeyCredential) or not isinstance(
            credential.response, AuthenticatorAttestationResponse
        ):
            raise TypeError("expected 'credential' to be a PublicKeyCredential with an attestation")

        attestation = CredentialAttestation(
            {
                "rawId": credential.raw_id,
                "response": {
                    "attestationObject": credential.response.attestation_object,
                    "clientDataJSON": credential.response.client_data_json,
                },
            }
        )

        paths = self.args.paths.registration
        return await self._transport.send(paths.method, paths.result, attestation, ServerResponse)

    async def request_login_options(
        self, username: str, display_name: Optional[str] = None
    ) -> GetOptions:
        """Request credential request options from the server.

        Returns:
            The validated options, with binary members still encoded.
        """
        request = GetOptionsRequest(
            {
                "username": username,
                "displayName": display_name or username,
            }
        )

        paths = self.args.paths.authentication
        return await self._transport.send(paths.method, paths.options, request, GetOptions)

    async def get(self, options: GetOptions) -> PublicKeyCredential:
        """Produce an assertion with the credential container.

        Args:
            options: Options from ``request_login_options``, possibly
                adjusted by the caller.

        Returns:
            The asserting credential, exactly as returned by the container.

        Raises:
            TypeError: If ``options`` is not a ``GetOptions``.
            CoercionError: If a binary member cannot be decoded.
            Exception: Whatever the credential container raised.
        """
        if not isinstance(options, GetOptions):
            raise TypeError("expected 'options' to be instance of GetOptions")

        options.decode_binary_properties()
        public_key = self._container_options(options)

        self._notifier.notify(Event.USER_PRESENCE_START)
        self._notifier.debug(DebugSubtype.GET_OPTIONS, {"publicKey": public_key})

        try:
            credential = await self.args.credentials.container.get(public_key)
        except Exception as e:
            self._notifier.debug(DebugSubtype.GET_FAILED, e)
            raise
        finally:
            self._notifier.notify(Event.USER_PRESENCE_DONE)

        self._notifier.debug(DebugSubtype.GET_RESULT, credential)
        return credential

    async def send_login_result(self, credential: PublicKeyCredential) -> ServerResponse:
        """Send an assertion to the server.

        Args:
            credential: The credential returned by ``get``.

        Returns:
            The server's acknowledgement.

        Raises:
            TypeError: If ``credential`` does not carry an assertion response.
        """
        if not isinstance(credential, PublicKeyCredential) or not isinstance(
            credential.response, AuthenticatorAssertionResponse
        ):
            raise TypeError("expected 'credential' to be a PublicKeyCredential with an assertion")

        response: Dict[str, Any] = {
            "authenticatorData": credential.response.authenticator_data,
            "clientDataJSON": credential.response.client_data_json,
            "signature": credential.response.signature,
            "userHandle": credential.response.user_handle,
        }

        assertion = CredentialAssertion({"rawId": credential.raw_id, "response": response})

        paths = self.args.paths.authentication
        return await self._transport.send(paths.method, paths.result, assertion, ServerResponse)

    def _container_options(self, options: Message) -> Dict[str, Any]:
        public_key = options.to_object()

        # the container takes the bare options, not the response envelope
        public_key.pop("status", None)
        public_key.pop("errorMessage", None)

        preferences = WebAuthnOptions.parse(public_key)
        if options.preferences is not None:
            preferences.merge(options.preferences)
        preferences.merge(self._defaults)
        public_key.update(preferences.to_object())

        return public_key

    def _prefer_algorithm(self, public_key: Dict[str, Any]) -> None:
        params = public_key.get("pubKeyCredParams")
        if not params:
            return

        alg = self.args.preferences.alg
        public_key["pubKeyCredParams"] = sorted(params, key=lambda param: param.get("alg") != alg)

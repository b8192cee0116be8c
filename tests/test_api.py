"""End-to-end tests for the WebAuthn client.

This module drives complete registration and login exchanges against an
in-memory relying party, with a software authenticator standing in for the
host credential subsystem. It covers:
- Registration and login
- Options handed to the credential container
- Lifecycle notifications
- Server-side rejections and collaborator failures
- Custom endpoint paths
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import pytest

from examples.implementation.events import LoggingObserver, RecordingObserver
from tests.implementation.credentials import NotAllowedError, SoftAuthenticator
from tests.implementation.server import MockRelyingParty
from webauthn_app.api import (
    DEFAULT_TIMEOUT,
    CredentialsConfig,
    IOConfig,
    PreferencesConfig,
    WebAuthnClient,
    WebAuthnClientConfig,
)
from webauthn_app.exceptions import CredentialError, ProtocolError, TransportError
from webauthn_app.interfaces import (
    AuthenticationPaths,
    DebugSubtype,
    Event,
    IObserver,
    PublicKeyCredential,
    RegistrationPaths,
    WebAuthnPaths,
)
from webauthn_app.messages import CreateOptions, GetOptions, WebAuthnOptions

CUSTOM_PATHS = WebAuthnPaths(
    registration=RegistrationPaths(
        options="/webauthn/register/begin",
        result="/webauthn/register/finish",
    ),
    authentication=AuthenticationPaths(
        options="/webauthn/login/begin",
        result="/webauthn/login/finish",
    ),
)


def create_client(
    server: MockRelyingParty,
    authenticator: Any,
    observer: Optional[IObserver] = None,
    paths: Optional[WebAuthnPaths] = None,
    preferences: Optional[PreferencesConfig] = None,
) -> WebAuthnClient:
    config = WebAuthnClientConfig(
        io=IOConfig(network=server),
        credentials=CredentialsConfig(container=authenticator),
        paths=paths or WebAuthnPaths(),
        preferences=preferences or PreferencesConfig(),
        observer=observer,
    )

    return WebAuthnClient(config)


def last_request(server: MockRelyingParty) -> Dict[str, Any]:
    return json.loads(server.requests[-1][2])


class TamperingAuthenticator(SoftAuthenticator):
    """Authenticator whose assertions carry a corrupted signature."""

    async def get(self, options: Dict[str, Any]) -> PublicKeyCredential:
        credential = await super().get(options)
        signature = bytearray(credential.response.signature)
        signature[-1] ^= 0xFF
        credential.response.signature = bytes(signature)
        return credential


class ExplodingObserver(IObserver):
    """Observer that fails on every notification."""

    def __init__(self) -> None:
        self.calls = 0

    def notify(self, event: str, data: Any = None) -> None:
        self.calls += 1
        raise RuntimeError(f"observer failed on {event}")


@pytest.mark.asyncio
async def test_register_and_login() -> None:
    """Test a complete registration followed by a login."""
    server = MockRelyingParty()
    authenticator = SoftAuthenticator()
    client = create_client(server, authenticator)

    registered = await client.register("alice", "Alice")

    assert registered.status == "ok"
    assert len(server.users["alice"].credentials) == 1
    assert server.users["alice"].display_name == "Alice"

    logged_in = await client.login("alice")

    assert logged_in.status == "ok"
    assert [path for _, path, _ in server.requests] == [
        "/attestation/options",
        "/attestation/result",
        "/assertion/options",
        "/assertion/result",
    ]


@pytest.mark.asyncio
async def test_login_repeatedly() -> None:
    """Test that successive logins advance the signature counter."""
    server = MockRelyingParty()
    authenticator = SoftAuthenticator()
    client = create_client(server, authenticator)

    await client.register("alice")
    for _ in range(3):
        await client.login("alice")

    (credential,) = authenticator.credentials.values()
    assert credential.sign_count == 3


@pytest.mark.asyncio
async def test_display_name_defaults_to_username() -> None:
    server = MockRelyingParty()
    client = create_client(server, SoftAuthenticator())

    await client.register("alice")

    assert json.loads(server.requests[0][2]) == {"username": "alice", "displayName": "alice"}


@pytest.mark.asyncio
async def test_container_receives_decoded_options() -> None:
    """Test the options handed to the container during registration."""
    server = MockRelyingParty()
    authenticator = SoftAuthenticator()
    client = create_client(server, authenticator)

    await client.register("alice", "Alice")
    options = authenticator.received[0]

    assert "status" not in options
    assert "errorMessage" not in options
    assert isinstance(options["challenge"], bytes)
    assert options["user"]["id"] == server.users["alice"].handle
    assert options["timeout"] == DEFAULT_TIMEOUT
    assert options["excludeCredentials"] == []
    assert options["attestation"] == "none"


@pytest.mark.asyncio
async def test_preferred_algorithm_is_moved_first() -> None:
    server = MockRelyingParty()
    authenticator = SoftAuthenticator()
    client = create_client(server, authenticator)

    await client.register("alice")

    algorithms = [param["alg"] for param in authenticator.received[0]["pubKeyCredParams"]]
    assert algorithms == [-7, -257]


@pytest.mark.asyncio
async def test_login_options_are_decoded() -> None:
    server = MockRelyingParty()
    authenticator = SoftAuthenticator()
    client = create_client(server, authenticator)

    await client.register("alice")
    await client.login("alice")
    options = authenticator.received[-1]

    assert "status" not in options
    assert isinstance(options["challenge"], bytes)
    assert [descriptor["id"] for descriptor in options["allowCredentials"]] == list(
        authenticator.credentials
    )
    assert options["rpId"] == "example.com"
    assert options["timeout"] == DEFAULT_TIMEOUT


@pytest.mark.asyncio
async def test_server_timeout_wins() -> None:
    server = MockRelyingParty()
    server.timeout = 120000
    authenticator = SoftAuthenticator()
    client = create_client(server, authenticator, preferences=PreferencesConfig(timeout=1000))

    await client.register("alice")
    await client.login("alice")

    assert [options["timeout"] for options in authenticator.received] == [120000, 120000]


@pytest.mark.asyncio
async def test_configured_timeout_fills_missing_timeout() -> None:
    server = MockRelyingParty()
    authenticator = SoftAuthenticator()
    client = create_client(server, authenticator, preferences=PreferencesConfig(timeout=30000))

    await client.register("alice")

    assert authenticator.received[0]["timeout"] == 30000


@pytest.mark.asyncio
async def test_message_preferences_override_configured_timeout() -> None:
    """Test the step-by-step API with a preference overlay on the options."""
    server = MockRelyingParty()
    authenticator = SoftAuthenticator()
    client = create_client(server, authenticator)

    options = await client.request_register_options("carol", "Carol")
    assert isinstance(options, CreateOptions)
    assert isinstance(options["challenge"], str)

    options.preferences = WebAuthnOptions({"timeout": 5000})
    credential = await client.create(options)
    response = await client.send_register_result(credential)

    assert response.status == "ok"
    assert authenticator.received[0]["timeout"] == 5000
    assert credential.raw_id in server.users["carol"].credentials


@pytest.mark.asyncio
async def test_login_without_user_handle() -> None:
    """Test that an assertion without a user handle is sent with a null handle."""
    server = MockRelyingParty()
    authenticator = SoftAuthenticator()
    authenticator.return_user_handle = False
    client = create_client(server, authenticator)

    await client.register("alice")
    response = await client.login("alice")

    assert response.status == "ok"
    body = last_request(server)
    assert "userHandle" in body["response"]
    assert body["response"]["userHandle"] is None


@pytest.mark.asyncio
async def test_registration_event_order() -> None:
    server = MockRelyingParty()
    observer = RecordingObserver()
    client = create_client(server, SoftAuthenticator(), observer=observer)

    response = await client.register("alice")

    assert observer.names() == [
        Event.REGISTER_START,
        Event.USER_PRESENCE_START,
        Event.USER_PRESENCE_DONE,
        Event.REGISTER_DONE,
        Event.REGISTER_SUCCESS,
    ]
    assert observer.events[-1][1] is response

    subtypes = observer.debug_subtypes()
    assert subtypes.index(DebugSubtype.CREATE_OPTIONS) < subtypes.index(
        DebugSubtype.CREATE_RESULT
    )
    assert subtypes.count(DebugSubtype.SEND) == 2
    assert subtypes.count(DebugSubtype.RESPONSE) == 2


@pytest.mark.asyncio
async def test_login_event_order() -> None:
    server = MockRelyingParty()
    observer = RecordingObserver()
    client = create_client(server, SoftAuthenticator(), observer=observer)

    await client.register("alice")
    observer.events.clear()
    await client.login("alice")

    assert observer.names() == [
        Event.LOGIN_START,
        Event.USER_PRESENCE_START,
        Event.USER_PRESENCE_DONE,
        Event.LOGIN_DONE,
        Event.LOGIN_SUCCESS,
    ]
    assert DebugSubtype.GET_OPTIONS in observer.debug_subtypes()
    assert DebugSubtype.GET_RESULT in observer.debug_subtypes()


@pytest.mark.asyncio
async def test_unknown_user_never_reaches_container() -> None:
    """Test that a failed options reply aborts before the container is asked."""
    server = MockRelyingParty()
    authenticator = SoftAuthenticator()
    observer = RecordingObserver()
    client = create_client(server, authenticator, observer=observer)

    with pytest.raises(ProtocolError) as exc_info:
        await client.login("mallory")

    assert exc_info.value.server_message == "unknown user"
    assert authenticator.received == []
    assert len(server.requests) == 1
    assert observer.names() == [Event.LOGIN_START, Event.LOGIN_DONE, Event.LOGIN_ERROR]
    assert observer.events[-1][1] is exc_info.value


@pytest.mark.asyncio
async def test_declined_registration_propagates_unchanged() -> None:
    server = MockRelyingParty()
    authenticator = SoftAuthenticator()
    authenticator.decline = True
    observer = RecordingObserver()
    client = create_client(server, authenticator, observer=observer)

    with pytest.raises(NotAllowedError) as exc_info:
        await client.register("alice")

    assert len(server.requests) == 1
    assert observer.names() == [
        Event.REGISTER_START,
        Event.USER_PRESENCE_START,
        Event.USER_PRESENCE_DONE,
        Event.REGISTER_DONE,
        Event.REGISTER_ERROR,
    ]
    assert observer.events[-1][1] is exc_info.value
    assert DebugSubtype.CREATE_FAILED in observer.debug_subtypes()


@pytest.mark.asyncio
async def test_declined_login_propagates_unchanged() -> None:
    server = MockRelyingParty()
    authenticator = SoftAuthenticator()
    client = create_client(server, authenticator)

    await client.register("alice")
    authenticator.decline = True

    with pytest.raises(NotAllowedError):
        await client.login("alice")

    assert server.requests[-1][1] == "/assertion/options"


@pytest.mark.asyncio
async def test_excluded_credential_blocks_second_registration() -> None:
    """Test that excludeCredentials ids reach the container as bytes."""
    server = MockRelyingParty()
    authenticator = SoftAuthenticator()
    client = create_client(server, authenticator)

    await client.register("alice")

    with pytest.raises(CredentialError):
        await client.register("alice")

    excluded = authenticator.received[-1]["excludeCredentials"]
    assert [descriptor["id"] for descriptor in excluded] == list(authenticator.credentials)


@pytest.mark.asyncio
async def test_rejected_assertion_raises_protocol_error() -> None:
    server = MockRelyingParty()
    client = create_client(server, TamperingAuthenticator())

    await client.register("alice")

    with pytest.raises(ProtocolError) as exc_info:
        await client.login("alice")

    assert exc_info.value.server_message == "invalid signature"


@pytest.mark.asyncio
async def test_origin_mismatch_is_rejected() -> None:
    server = MockRelyingParty()
    client = create_client(server, SoftAuthenticator(origin="https://evil.example"))

    with pytest.raises(ProtocolError) as exc_info:
        await client.register("alice")

    assert exc_info.value.server_message == "origin mismatch"


@pytest.mark.asyncio
async def test_custom_paths() -> None:
    server = MockRelyingParty(paths=CUSTOM_PATHS)
    client = create_client(server, SoftAuthenticator(), paths=CUSTOM_PATHS)

    await client.register("alice")
    await client.login("alice")

    assert [path for _, path, _ in server.requests] == [
        "/webauthn/register/begin",
        "/webauthn/register/finish",
        "/webauthn/login/begin",
        "/webauthn/login/finish",
    ]


@pytest.mark.asyncio
async def test_mismatched_paths_raise_transport_error() -> None:
    server = MockRelyingParty()
    client = create_client(server, SoftAuthenticator(), paths=CUSTOM_PATHS)

    with pytest.raises(TransportError) as exc_info:
        await client.register("alice")

    assert exc_info.value.status == 404


@pytest.mark.asyncio
async def test_non_post_method_is_rejected() -> None:
    server = MockRelyingParty()
    paths = WebAuthnPaths(registration=RegistrationPaths(method="GET"))
    client = create_client(server, SoftAuthenticator(), paths=paths)

    with pytest.raises(ValueError):
        await client.register("alice")

    assert server.requests == []


@pytest.mark.asyncio
async def test_steps_reject_wrong_argument_types() -> None:
    server = MockRelyingParty()
    authenticator = SoftAuthenticator()
    client = create_client(server, authenticator)

    with pytest.raises(TypeError):
        await client.create(GetOptions())

    with pytest.raises(TypeError):
        await client.get(CreateOptions())

    await client.register("alice")
    options = await client.request_login_options("alice")
    assertion = await client.get(options)

    with pytest.raises(TypeError):
        await client.send_register_result(assertion)

    assert authenticator.received[-1]["challenge"] == options["challenge"]


@pytest.mark.asyncio
async def test_failing_observer_does_not_break_flows() -> None:
    observer = ExplodingObserver()
    client = create_client(MockRelyingParty(), SoftAuthenticator(), observer=observer)

    await client.register("alice")
    response = await client.login("alice")

    assert response.status == "ok"
    assert observer.calls > 0


@pytest.mark.asyncio
async def test_concurrent_exchanges() -> None:
    """Test that independent exchanges can run at the same time."""
    server = MockRelyingParty()
    authenticator = SoftAuthenticator()
    client = create_client(server, authenticator)

    await client.register("alice")

    results = await asyncio.gather(client.register("bob"), client.login("alice"))

    assert [result.status for result in results] == ["ok", "ok"]
    assert len(authenticator.credentials) == 2

    # allowCredentials restricts the shared authenticator to bob's credential
    await client.login("bob")


@pytest.mark.asyncio
async def test_logging_observer(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="webauthn_app")
    client = create_client(MockRelyingParty(), SoftAuthenticator(), observer=LoggingObserver())

    await client.register("alice")
    with pytest.raises(ProtocolError):
        await client.login("mallory")

    records = [
        (record.levelno, record.getMessage())
        for record in caplog.records
        if record.name == "webauthn_app.events"
    ]

    assert (logging.INFO, Event.REGISTER_SUCCESS) in records
    assert (logging.WARNING, f"{Event.LOGIN_ERROR}: unknown user") in records
    assert any(
        level == logging.DEBUG and DebugSubtype.CREATE_OPTIONS in message
        for level, message in records
    )

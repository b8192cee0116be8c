"""Field tables shared by several WebAuthn messages."""

from __future__ import annotations

from webauthn_app.messages.schema import Field

PUBLIC_KEY = "public-key"

ATTESTATION_CONVEYANCE = ("direct", "none", "indirect")
AUTHENTICATOR_ATTACHMENT = ("platform", "cross-platform")
RESIDENT_KEY = ("required", "preferred", "discouraged")
USER_VERIFICATION = ("required", "preferred", "discouraged")
TRANSPORTS = ("usb", "nfc", "ble")

CREDENTIAL_DESCRIPTOR = (
    Field("id", "base64url", binary=True),
    Field("type", "string", choices=(PUBLIC_KEY,)),
    Field("transports", "array", required=False, choices=TRANSPORTS),
)

AUTHENTICATOR_SELECTION = Field(
    "authenticatorSelection",
    "object",
    required=False,
    fields=(
        Field(
            "authenticatorAttachment", "string", required=False, choices=AUTHENTICATOR_ATTACHMENT
        ),
        Field("requireResidentKey", "boolean", required=False),
        Field("residentKey", "string", required=False, choices=RESIDENT_KEY),
        Field("userVerification", "string", required=False, choices=USER_VERIFICATION),
    ),
)

ATTESTATION = Field("attestation", "string", required=False, choices=ATTESTATION_CONVEYANCE)

EXTENSIONS = Field("extensions", "object", required=False)

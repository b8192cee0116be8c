"""Relying party test implementation package."""

from .relying_party import MockRelyingParty, RelyingPartyError

__all__ = [
    "MockRelyingParty",
    "RelyingPartyError",
]

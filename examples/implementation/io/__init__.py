"""I/O reference implementation package.

This package provides an HTTP network for the webauthn-app client.
"""

from .network import HttpNetwork

__all__ = [
    "HttpNetwork",
]

"""MAAS REST API client package.

Provides a small HTTP client for the MAAS API that signs requests with the
MAAS OAuth PLAINTEXT scheme and returns raw response bodies. Navigating the
JSON those bodies contain is left to higher layers.

Exports:
    Client: HTTP client with request signing and status classification.
    new_anonymous_client: Factory for unauthenticated clients.
    new_authenticated_client: Factory for clients signing with an API key.
    AnonymousSigner, PlainTextOAuthSigner: Signer implementations.
    OAuthToken: Credentials carried by an API key.
    MAASError and subclasses: Error kinds raised by the client.
"""

from . import types
from .client import (
    DEFAULT_TIMEOUT,
    OPERATION_PARAM,
    Client,
    new_anonymous_client,
    new_authenticated_client,
)
from .errors import (
    APIError,
    InvalidAPIKeyError,
    InvalidArgumentError,
    MAASError,
    ParseError,
    TransportError,
)
from .oauth import (
    MAAS_REALM,
    AnonymousSigner,
    PlainTextOAuthSigner,
    Signer,
    new_plaintext_oauth_signer,
)
from .types import OAuthToken

__all__ = [
    "DEFAULT_TIMEOUT",
    "MAAS_REALM",
    "OPERATION_PARAM",
    "APIError",
    "AnonymousSigner",
    "Client",
    "InvalidAPIKeyError",
    "InvalidArgumentError",
    "MAASError",
    "OAuthToken",
    "ParseError",
    "PlainTextOAuthSigner",
    "Signer",
    "TransportError",
    "new_anonymous_client",
    "new_authenticated_client",
    "new_plaintext_oauth_signer",
    "types",
]

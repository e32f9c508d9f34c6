"""Request signers for the MAAS API.

MAAS authenticates API calls with OAuth 1.0 using the PLAINTEXT signature
method. The header values are placed directly; no nonce or timestamp is
generated, so signing the same credentials always yields the same header.
"""

from typing import Protocol
from urllib.parse import quote_plus

import httpx

from .errors import InvalidArgumentError
from .types import OAuthToken

MAAS_REALM = "MAAS API"


class Signer(Protocol):
    """Anything able to authenticate an outgoing request in place."""

    def sign(self, request: httpx.Request) -> None: ...


class AnonymousSigner:
    """Signer for unauthenticated access; leaves requests untouched."""

    def sign(self, request: httpx.Request) -> None:
        return None


class PlainTextOAuthSigner:
    """Signs requests with an OAuth PLAINTEXT ``Authorization`` header.

    The token is read-only after construction, so a single signer can be
    shared by concurrent callers.
    """

    def __init__(self, token: OAuthToken, realm: str = MAAS_REALM):
        """Initialize the signer.

        Args:
            token: OAuth credentials.
            realm: Realm label sent along with the credentials.

        Raises:
            InvalidArgumentError: If the token is not an OAuthToken or one
                of its key/secret fields is empty.
        """
        if not isinstance(token, OAuthToken):
            msg = f"token must be an OAuthToken, got {type(token).__name__}"
            raise InvalidArgumentError(msg)
        for field in ("consumer_key", "token_key", "token_secret"):
            if not getattr(token, field):
                msg = f"OAuth token is missing {field}"
                raise InvalidArgumentError(msg)
        self._token = token
        self._realm = realm
        self._header = self._build_header()

    @property
    def realm(self) -> str:
        return self._realm

    def _build_header(self) -> str:
        signature = f"{self._token.consumer_secret}&{self._token.token_secret}"
        # Order matters to the MAAS PLAINTEXT verifier.
        auth_data = (
            ("oauth_consumer_key", self._token.consumer_key),
            ("oauth_token", self._token.token_key),
            ("oauth_signature_method", "PLAINTEXT"),
            ("oauth_signature", signature),
            ("oauth_version", "1.0"),
            ("realm", self._realm),
        )
        fields = ", ".join(f'{key}="{quote_plus(value)}"' for key, value in auth_data)
        return f"OAuth {fields}"

    def sign(self, request: httpx.Request) -> None:
        """Attach the Authorization header; URL and body are left alone."""
        request.headers["Authorization"] = self._header


def new_plaintext_oauth_signer(
    token: OAuthToken,
    realm: str = MAAS_REALM,
) -> PlainTextOAuthSigner:
    """Build a PLAINTEXT signer for ``token`` in ``realm``."""
    return PlainTextOAuthSigner(token, realm)

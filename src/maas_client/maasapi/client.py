"""MAAS API client.

Provides an HTTP client that resolves resource URIs against a base address,
signs every request through a pluggable signer and turns non-2xx answers
into errors that still carry the server's response body.
"""

import threading
import time
from collections.abc import Mapping, Sequence
from typing import TypeAlias

import httpx
import structlog

from .errors import APIError, InvalidArgumentError, ParseError, TransportError
from .oauth import MAAS_REALM, AnonymousSigner, Signer, new_plaintext_oauth_signer
from .types import OAuthToken

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 30.0

# Query parameter MAAS uses to select an operation on a resource.
OPERATION_PARAM = "op"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

Parameters: TypeAlias = Mapping[str, str | Sequence[str]]
URI: TypeAlias = str | httpx.URL


def parse_base_url(base_url: str) -> httpx.URL:
    """Parse the base address of a MAAS API.

    Raises:
        ParseError: If the address is malformed or is not an absolute
            http(s) URL.
    """
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as exc:
        msg = f"Invalid base URL {base_url!r}: {exc}"
        raise ParseError(msg) from exc
    if url.scheme not in ("http", "https") or not url.host:
        msg = f"Invalid base URL {base_url!r}: expected an absolute http(s) URL"
        raise ParseError(msg)
    return url


def _encode_form(parameters: Parameters | None) -> bytes:
    return str(httpx.QueryParams(dict(parameters or {}))).encode("ascii")


class Client:
    """HTTP client for a MAAS API instance.

    Holds a base address and a signer, both fixed at construction. Calls
    keep no state on the instance, so one client can serve concurrent
    requests. Connection pools live in thread-local httpx.Client instances;
    close() releases the pools of every thread.
    Can be used as a context manager for automatic cleanup.
    """

    def __init__(
        self,
        base_url: str | httpx.URL,
        signer: Signer,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base address of the API (e.g.,
                "http://maas.example.com/MAAS/api/2.0/").
            signer: Signer applied to every outgoing request.
            timeout: Per-request timeout in seconds (default: 30.0).
            transport: Optional httpx transport, mainly for tests.

        Raises:
            ParseError: If base_url is a malformed string.
            InvalidArgumentError: If timeout is not positive.
        """
        if timeout <= 0:
            msg = "timeout must be positive"
            raise InvalidArgumentError(msg)
        if not isinstance(base_url, httpx.URL):
            base_url = parse_base_url(base_url)

        self._base_url = base_url
        self._signer = signer
        self._timeout = timeout
        self._transport = transport
        self._local = threading.local()
        self._clients_lock = threading.Lock()
        self._clients: list[httpx.Client] = []

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    @property
    def signer(self) -> Signer:
        return self._signer

    @property
    def http_client(self) -> httpx.Client:
        """Get or create the thread-local httpx client.

        Every client created here is registered so close() can reach the
        pools opened by other threads.
        """
        if not hasattr(self._local, "client") or self._local.client.is_closed:
            http_client = httpx.Client(
                timeout=self._timeout,
                transport=self._transport,
            )
            with self._clients_lock:
                self._clients.append(http_client)
            self._local.client = http_client
        return self._local.client

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the HTTP clients opened by every thread."""
        with self._clients_lock:
            clients, self._clients = self._clients, []
        for http_client in clients:
            if not http_client.is_closed:
                http_client.close()

    def get_url(self, uri: URI) -> httpx.URL:
        """Resolve ``uri`` against the base address (RFC 3986).

        Raises:
            TransportError: If uri is not a valid URL reference.
        """
        try:
            return self._base_url.join(uri)
        except httpx.InvalidURL as exc:
            raise TransportError(str(exc)) from exc

    def _dispatch(
        self,
        method: str,
        url: httpx.URL,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> bytes:
        """Sign and send a request, then classify the response.

        The response body is always read in full and the response closed,
        whatever the outcome.

        Returns:
            Raw response body on a 2xx status.

        Raises:
            TransportError: If the HTTP exchange fails or the response body
                cannot be decoded.
            APIError: If the server answers with a non-2xx status.
        """
        start_time = time.time()
        try:
            request = self.http_client.build_request(
                method,
                url,
                content=content,
                headers=headers,
            )
            self._signer.sign(request)
            logger.debug("Making API request", method=method, url=str(url))
            response = self.http_client.send(request, stream=True)
            try:
                body = response.read()
            finally:
                response.close()
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            logger.debug(
                "API request failed",
                method=method,
                url=str(url),
                error=str(exc),
                duration_seconds=round(time.time() - start_time, 3),
            )
            raise TransportError(str(exc)) from exc

        logger.debug(
            "API request completed",
            method=method,
            status_code=response.status_code,
            duration_seconds=round(time.time() - start_time, 3),
        )
        if not response.is_success:
            status = f"{response.status_code} {response.reason_phrase}".rstrip()
            raise APIError(response.status_code, status, body)
        return body

    def get(
        self,
        uri: URI,
        operation: str = "",
        parameters: Parameters | None = None,
    ) -> bytes:
        """Issue a GET request.

        Args:
            uri: Resource URI, resolved against the base address.
            operation: Optional operation name, sent as the ``op`` query
                parameter.
            parameters: Query parameters. Must not contain ``op``.

        Returns:
            Raw response body.

        Raises:
            InvalidArgumentError: If parameters contain the reserved ``op``
                key. No request is made in that case.
            TransportError: If the HTTP exchange fails.
            APIError: If the server answers with a non-2xx status.
        """
        params = dict(parameters or {})
        if OPERATION_PARAM in params:
            msg = (
                f"The parameters contain a value for '{OPERATION_PARAM}' "
                "which is a reserved parameter."
            )
            raise InvalidArgumentError(msg)
        if operation:
            params[OPERATION_PARAM] = operation
        url = self.get_url(uri).copy_with(params=params)
        return self._dispatch("GET", url)

    def _non_idempotent_request(
        self,
        method: str,
        url: httpx.URL,
        parameters: Parameters | None,
    ) -> bytes:
        """Issue a POST or PUT with form-encoded parameters in the body."""
        return self._dispatch(
            method,
            url,
            content=_encode_form(parameters),
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )

    def post(
        self,
        uri: URI,
        operation: str = "",
        parameters: Parameters | None = None,
    ) -> bytes:
        """Issue a POST request.

        The operation always goes in the query string, replacing any query
        the URI already had, so an empty operation is sent as ``op=``.
        Parameters are form-encoded in the body.
        """
        url = self.get_url(uri).copy_with(params={OPERATION_PARAM: operation})
        return self._non_idempotent_request("POST", url, parameters)

    def put(self, uri: URI, parameters: Parameters | None = None) -> bytes:
        """Issue a PUT request with form-encoded parameters in the body."""
        return self._non_idempotent_request("PUT", self.get_url(uri), parameters)

    def delete(self, uri: URI) -> None:
        """Issue a DELETE request with an empty body.

        Raises:
            TransportError: If the HTTP exchange fails.
            APIError: If the server answers with a non-2xx status.
        """
        self._dispatch("DELETE", self.get_url(uri), content=b"")


def new_anonymous_client(base_url: str, **kwargs) -> Client:
    """Create a client that issues anonymous requests.

    Extra keyword arguments (``timeout``, ``transport``) go to Client.

    Raises:
        ParseError: If base_url is malformed.
    """
    return Client(parse_base_url(base_url), AnonymousSigner(), **kwargs)


def new_authenticated_client(base_url: str, api_key: str, **kwargs) -> Client:
    """Create a client that signs its requests with a MAAS API key.

    The key is split into its OAuth tokens; the consumer secret is the
    empty string in MAAS authentication.

    Raises:
        InvalidAPIKeyError: If api_key does not have exactly three
            colon-separated fields.
        InvalidArgumentError: If a token field is empty.
        ParseError: If base_url is malformed.
    """
    token = OAuthToken.from_api_key(api_key)
    signer = new_plaintext_oauth_signer(token, MAAS_REALM)
    return Client(parse_base_url(base_url), signer, **kwargs)

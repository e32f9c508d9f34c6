"""Error kinds raised by the MAAS API client.

Every failure is raised to the immediate caller. Nothing is retried or
swallowed inside the client; recovery policy belongs to the caller.
"""


class MAASError(Exception):
    """Base class for all errors raised by the MAAS API client."""


class ParseError(MAASError, ValueError):
    """Raised when a base address or an API key cannot be parsed."""


class InvalidArgumentError(MAASError, ValueError):
    """Raised when caller-supplied arguments conflict with reserved ones."""


class TransportError(MAASError):
    """Raised when the HTTP exchange itself fails (DNS, refused, timeout, TLS)."""


class APIError(MAASError):
    """Raised when the MAAS server answers with a non-2xx status.

    The raw response body is kept so callers can inspect the error payload
    the server sent back.
    """

    def __init__(self, status_code: int, status: str, body: bytes):
        self.status_code = status_code
        self.status = status
        self.body = body
        super().__init__(f"Error requesting the MAAS server: {status}.")


class InvalidAPIKeyError(ParseError, InvalidArgumentError):
    """Raised when an API key does not split into its three fields."""

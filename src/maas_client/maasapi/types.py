"""Credential types for the MAAS API.

Pydantic models describing the OAuth token a MAAS API key carries.
"""

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidAPIKeyError

# MAAS API keys look like "<consumer key>:<token key>:<token secret>".
API_KEY_FIELDS = 3


class OAuthToken(BaseModel):
    """OAuth credentials used to sign requests.

    The consumer secret is always the empty string in MAAS authentication.
    Secrets are left out of the model's repr.
    """

    model_config = ConfigDict(frozen=True)

    consumer_key: str
    consumer_secret: str = Field("", repr=False)
    token_key: str
    token_secret: str = Field(repr=False)

    @classmethod
    def from_api_key(cls, api_key: str) -> "OAuthToken":
        """Split a MAAS API key into its OAuth token fields.

        Args:
            api_key: Key as shown in the MAAS UI,
                "<consumer key>:<token key>:<token secret>".

        Returns:
            Token with the consumer secret forced to the empty string.

        Raises:
            InvalidAPIKeyError: If the key does not have exactly three
                colon-separated fields.
        """
        elements = api_key.split(":")
        if len(elements) != API_KEY_FIELDS:
            msg = (
                "Invalid API key. The format of the key must be "
                '"<consumer key>:<token key>:<token secret>".'
            )
            raise InvalidAPIKeyError(msg)
        consumer_key, token_key, token_secret = elements
        return cls(
            consumer_key=consumer_key,
            consumer_secret="",
            token_key=token_key,
            token_secret=token_secret,
        )

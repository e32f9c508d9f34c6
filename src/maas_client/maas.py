"""Entry point into the MAAS resource tree."""

import httpx
import pydantic

from . import maasapi


class MAASObject(pydantic.BaseModel):
    """Handle on a MAAS resource, bound to the client used to reach it."""

    resource_uri: str = pydantic.Field(description="Address of the resource")

    _client: maasapi.Client = pydantic.PrivateAttr()

    @property
    def client(self) -> maasapi.Client:
        return self._client

    @property
    def uri(self) -> httpx.URL:
        return httpx.URL(self.resource_uri)


def new_maas(client: maasapi.Client) -> MAASObject:
    """Return the root resource of the API served at the client's base address."""
    root = MAASObject(resource_uri=str(client.base_url))
    root._client = client
    return root

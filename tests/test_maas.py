"""Tests for the MAAS resource-tree root."""

import httpx

from maas_client import maas
from maas_client.maasapi import client

BASE_URL = "http://maas.example.com/MAAS/api/2.0/"


def test_new_maas_wraps_base_address():
    """The root resource carries the client's base address as its URI."""
    api_client = client.new_anonymous_client(BASE_URL)

    root = maas.new_maas(api_client)

    assert root.resource_uri == BASE_URL
    assert root.uri == httpx.URL(BASE_URL)
    assert root.client is api_client


def test_maas_object_has_single_field():
    """Only the resource URI is part of the model's data."""
    root = maas.new_maas(client.new_anonymous_client(BASE_URL))
    assert root.model_dump() == {"resource_uri": BASE_URL}

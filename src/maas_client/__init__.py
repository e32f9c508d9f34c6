"""MAAS API client.

Python client for the MAAS (Metal-as-a-Service) REST API: signed
GET/POST/PUT/DELETE requests against a MAAS region, returning raw
response bytes.
"""

__version__ = "0.1.0"

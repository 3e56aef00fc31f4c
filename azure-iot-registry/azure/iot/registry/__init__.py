""" Azure IoT Hub Registry Library

This library provides a client for managing the device identities, twins and import/export
jobs of an IoTHub identity registry, and for querying it.
"""

from .registry import Registry
from .query import Query
from .config import RegistryConfig
from .rest_api_client import RestApiClient, HttpResponse
from .models import Twin, Message, ProxyOptions
from . import exceptions

__all__ = [
    "Registry",
    "Query",
    "RegistryConfig",
    "RestApiClient",
    "HttpResponse",
    "Twin",
    "Message",
    "ProxyOptions",
    "exceptions",
]

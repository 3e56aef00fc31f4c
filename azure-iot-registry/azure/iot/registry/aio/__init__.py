"""Azure IoT Hub Registry Library - Asynchronous

This library provides an asynchronous client for managing the identity registry of an IoTHub.
"""

from .async_registry import AsyncRegistry, AsyncQuery

__all__ = ["AsyncRegistry", "AsyncQuery"]

"""Azure IoT Hub Registry Models

This package provides object models for use within the Azure IoT Hub Registry SDK.
"""

from .twin import Twin
from .message import Message
from .proxy_options import ProxyOptions

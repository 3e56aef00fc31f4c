# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the configuration of a registry client"""

import logging
from .exceptions import ArgumentError, ArgumentMissingError

logger = logging.getLogger(__name__)


class RegistryConfig(object):
    """Immutable connection details of a registry client

    :ivar str host: The hostname of the IoTHub (e.g. "myhub.azure-devices.net")
    :ivar str shared_access_signature: The shared access signature used to authorize requests
    """

    __slots__ = ("_host", "_shared_access_signature")

    def __init__(self, host, shared_access_signature):
        """Initializer for RegistryConfig

        :param str host: The hostname of the IoTHub
        :param str shared_access_signature: The shared access signature with the permissions
            for the desired operations

        :raises: :class:`azure.iot.registry.exceptions.ArgumentError` if either value is
            missing or empty
        """
        if not host or not isinstance(host, str):
            raise ArgumentError("The 'host' configuration value must be a non-empty string")
        if not shared_access_signature or not isinstance(shared_access_signature, str):
            raise ArgumentError(
                "The 'shared_access_signature' configuration value must be a non-empty string"
            )
        self._host = host
        self._shared_access_signature = shared_access_signature

    @property
    def host(self):
        return self._host

    @property
    def shared_access_signature(self):
        return self._shared_access_signature

    def __eq__(self, other):
        if not isinstance(other, RegistryConfig):
            return NotImplemented
        return (self.host, self.shared_access_signature) == (
            other.host,
            other.shared_access_signature,
        )

    def __hash__(self):
        return hash((self.host, self.shared_access_signature))

    def __repr__(self):
        # The signature is a secret, so it is not included
        return "RegistryConfig(host={!r})".format(self.host)

    @classmethod
    def from_value(cls, config):
        """Return a RegistryConfig from a RegistryConfig or from a dict of connection details.

        The dict may use either the "sharedAccessSignature" or the "shared_access_signature" key.

        :raises: :class:`azure.iot.registry.exceptions.ArgumentMissingError` if config is None
        :raises: :class:`azure.iot.registry.exceptions.ArgumentError` if config is incomplete
        """
        if config is None:
            raise ArgumentMissingError("The 'config' argument is required")
        if isinstance(config, RegistryConfig):
            return config
        if isinstance(config, dict):
            logger.debug("Converting dict configuration to RegistryConfig")
            shared_access_signature = config.get("sharedAccessSignature")
            if shared_access_signature is None:
                shared_access_signature = config.get("shared_access_signature")
            return cls(config.get("host"), shared_access_signature)
        raise ArgumentError(
            "Unsupported configuration type: {}".format(type(config).__name__)
        )

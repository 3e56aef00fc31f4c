# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains tools for working with IoTHub service connection strings"""

from .sastoken import SasToken, DEFAULT_TOKEN_VALIDITY_PERIOD

HOST_NAME = "HostName"
SHARED_ACCESS_KEY_NAME = "SharedAccessKeyName"
SHARED_ACCESS_KEY = "SharedAccessKey"
SHARED_ACCESS_SIGNATURE = "SharedAccessSignature"

_valid_keys = (HOST_NAME, SHARED_ACCESS_KEY_NAME, SHARED_ACCESS_KEY, SHARED_ACCESS_SIGNATURE)


def _parse(connection_string):
    if not isinstance(connection_string, str):
        raise TypeError("Connection string must be of type str")

    values = {}
    for segment in connection_string.split(";"):
        key, separator, value = segment.partition("=")
        if not separator:
            raise ValueError("Invalid connection string - Unable to parse")
        if key not in _valid_keys:
            raise ValueError("Invalid connection string - Invalid key '{}'".format(key))
        if key in values:
            raise ValueError("Invalid connection string - Duplicate key '{}'".format(key))
        values[key] = value

    if not values.get(HOST_NAME):
        raise ValueError("Invalid connection string - Missing {}".format(HOST_NAME))
    has_key = values.get(SHARED_ACCESS_KEY_NAME) and values.get(SHARED_ACCESS_KEY)
    if not has_key and not values.get(SHARED_ACCESS_SIGNATURE):
        raise ValueError("Invalid connection string - Incomplete credentials")
    return values


class ConnectionString(object):
    """An IoTHub service connection string, such as
    "HostName=<host>;SharedAccessKeyName=<policy>;SharedAccessKey=<key>".

    Values can be read by key, as with a dict, or through the named properties.
    """

    def __init__(self, connection_string):
        """
        :param str connection_string: Connection string from the shared access policies of an
            IoTHub, or one carrying a SharedAccessSignature instead of a key

        :raises: TypeError if connection_string is not a string
        :raises: ValueError if connection_string is malformed or incomplete
        """
        self._values = _parse(connection_string)
        self._strrep = connection_string

    def __contains__(self, item):
        return item in self._values

    def __getitem__(self, key):
        return self._values[key]

    def __repr__(self):
        return self._strrep

    def get(self, key, default=None):
        return self._values.get(key, default)

    @property
    def host_name(self):
        return self._values[HOST_NAME]

    @property
    def shared_access_key_name(self):
        return self._values.get(SHARED_ACCESS_KEY_NAME)

    @property
    def shared_access_key(self):
        return self._values.get(SHARED_ACCESS_KEY)

    @property
    def shared_access_signature(self):
        return self._values.get(SHARED_ACCESS_SIGNATURE)

    def get_shared_access_signature(self, ttl=DEFAULT_TOKEN_VALIDITY_PERIOD):
        """Return a shared access signature for the IoTHub.

        This is the SharedAccessSignature of the connection string if it has one. Otherwise a
        new signature, valid for ttl seconds, is generated from the shared access key.

        :param int ttl: Number of seconds a generated signature is valid for

        :raises: :class:`azure.iot.registry.sastoken.SasTokenError` if the key cannot be used
        """
        if self.shared_access_signature:
            return self.shared_access_signature
        return str(SasToken(self.host_name, self.shared_access_key, self.shared_access_key_name, ttl))

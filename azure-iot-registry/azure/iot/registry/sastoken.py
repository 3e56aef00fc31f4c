# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains tools for generating and reading the shared access signatures
used to authorize registry requests"""

import base64
import binascii
import hmac
import hashlib
import logging
import time
import urllib.parse

logger = logging.getLogger(__name__)

SASTOKEN_PREFIX = "SharedAccessSignature "
REQUIRED_SASTOKEN_FIELDS = ("sr", "sig", "se")
DEFAULT_TOKEN_VALIDITY_PERIOD = 3600


class SasTokenError(Exception):
    """Raised when a shared access signature cannot be generated from the given values"""

    def __init__(self, message, cause=None):
        """
        :param str message: Error message
        :param cause: Exception that caused this error (optional)
        """
        super(SasTokenError, self).__init__(message)
        self.cause = cause


def _sign(key, message):
    """Return the url-quoted, base64 encoded HMAC-SHA256 of message, using a base64 encoded key"""
    try:
        signing_key = base64.b64decode(key.encode("utf-8"), validate=True)
    except (AttributeError, binascii.Error) as e:
        raise SasTokenError("Shared access key must be a base64 encoded string", e)
    digest = hmac.new(signing_key, message.encode("utf-8"), hashlib.sha256).digest()
    return urllib.parse.quote(base64.b64encode(digest))


class SasToken(object):
    """A shared access signature for an IoTHub, signed with a shared access key.

    The signature is generated when the token is created, and again each time refresh() is
    called. str() returns the signature in the form expected by the Authorization header:
    "SharedAccessSignature sr=<uri>&sig=<signature>&se=<expiry>[&skn=<key name>]"

    :ivar int ttl: Number of seconds the signature is valid for after each refresh
    :ivar int expiry_time: Expiry of the current signature, in seconds since the epoch (UTC)
    """

    def __init__(self, uri, key, key_name=None, ttl=DEFAULT_TOKEN_VALIDITY_PERIOD):
        """
        :param str uri: URI of the resource to grant access to, usually the IoTHub hostname
        :param str key: Base64 encoded shared access key
        :param str key_name: Name of the shared access policy the key belongs to (optional)
        :param int ttl: Number of seconds the signature is valid for

        :raises: :class:`SasTokenError` if the key cannot be used for signing
        """
        self._resource_uri = urllib.parse.quote_plus(uri)
        self._key = key
        self._key_name = key_name
        self.ttl = ttl
        self.refresh()

    def __str__(self):
        return self._token

    def refresh(self):
        """Generate a new signature, valid for ttl seconds from now"""
        self.expiry_time = int(time.time() + self.ttl)
        signature = _sign(self._key, "{}\n{}".format(self._resource_uri, self.expiry_time))

        fields = [("sr", self._resource_uri), ("sig", signature), ("se", str(self.expiry_time))]
        if self._key_name:
            fields.append(("skn", self._key_name))
        self._token = SASTOKEN_PREFIX + "&".join("=".join(field) for field in fields)
        logger.debug("Generated shared access signature expiring at {}".format(self.expiry_time))


def parse_sas_token(value):
    """Return a dictionary of the fields of a shared access signature.

    Field values are returned as they appear in the signature, without unquoting.

    :param str value: A signature of the form "SharedAccessSignature sr=..&sig=..&se=.."

    :raises: ValueError if the value is not a well-formed shared access signature
    """
    if not value.startswith(SASTOKEN_PREFIX):
        raise ValueError("Invalid shared access signature: Missing prefix")

    fields = {}
    for field in value[len(SASTOKEN_PREFIX) :].split("&"):
        name, separator, field_value = field.partition("=")
        if not separator:
            raise ValueError("Invalid shared access signature: Incorrectly formatted")
        fields[name.strip()] = field_value.strip()

    missing = [name for name in REQUIRED_SASTOKEN_FIELDS if name not in fields]
    if missing:
        raise ValueError(
            "Invalid shared access signature: Missing field(s) {}".format(", ".join(missing))
        )
    return fields
